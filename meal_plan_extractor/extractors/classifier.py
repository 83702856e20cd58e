"""
Meal plan classifier.

Decides from signal counts alone whether a document is a multi-day meal
plan or a single recipe. Counting is order-independent, so the decision is
deterministic for a given text.
"""
from __future__ import annotations

import logging
import re

from ..const import (
    MIN_DAY_COUNT,
    MIN_DAY_HEADER_COUNT,
    MIN_LISTED_MEAL_COUNT,
    MIN_MEAL_TYPE_COUNT,
)
from ..models.recipe import Classification, ClassificationSignals
from .patterns import DAY_NAMES, MEAL_NAMES

_LOGGER = logging.getLogger(__name__)

DAY_TOKEN_PATTERN = re.compile(
    rf"\b(?:Day\s+[1-7]|{DAY_NAMES})\b", re.IGNORECASE)
MEAL_TYPE_TOKEN_PATTERN = re.compile(rf"\b(?:{MEAL_NAMES})\b", re.IGNORECASE)
DAY_HEADER_TOKEN_PATTERN = re.compile(
    rf"^[ \t]*(?:##?\s+)?(?:Day\s+\d+|{DAY_NAMES})\b",
    re.IGNORECASE | re.MULTILINE)
LISTED_MEAL_PATTERN = re.compile(
    rf"^[ \t]*(?:##?\s+)?[-*]\s*(?:{MEAL_NAMES}):",
    re.IGNORECASE | re.MULTILINE)
SINGLE_HEADER_PATTERN = re.compile(
    rf"^[ \t]*#[ \t]+(?!(?:Day\s+\d+|{DAY_NAMES})\b)\S",
    re.IGNORECASE | re.MULTILINE)


def count_signals(text: str) -> ClassificationSignals:
    """Count the meal plan signals found in a document."""
    return ClassificationSignals(
        day_count=len(DAY_TOKEN_PATTERN.findall(text)),
        meal_type_count=len(MEAL_TYPE_TOKEN_PATTERN.findall(text)),
        day_header_count=len(DAY_HEADER_TOKEN_PATTERN.findall(text)),
        listed_meal_count=len(LISTED_MEAL_PATTERN.findall(text)),
        single_header_count=len(SINGLE_HEADER_PATTERN.findall(text)),
    )


def is_meal_plan(signals: ClassificationSignals) -> bool:
    """Apply the meal plan decision rule to a set of signal counts.

    A document is a meal plan when it has enough day, meal type, day header
    or listed meal signals, unless it carries a single top-level heading
    and mentions no day at all.
    """
    has_plan_signals = (
        signals.day_count >= MIN_DAY_COUNT
        or signals.meal_type_count >= MIN_MEAL_TYPE_COUNT
        or signals.day_header_count >= MIN_DAY_HEADER_COUNT
        or signals.listed_meal_count >= MIN_LISTED_MEAL_COUNT
    )
    appears_to_be_recipe = (
        signals.single_header_count >= 1 and signals.day_count == 0)
    return has_plan_signals and not appears_to_be_recipe


def classify_text(text: str) -> Classification:
    """Classify a document as a meal plan or a single recipe.

    Args:
        text: Raw document text

    Returns:
        Classification with the decision and the raw signal counts
    """
    signals = count_signals(text or "")
    decision = is_meal_plan(signals)
    _LOGGER.info(
        "Classified text as %s (days=%d, meal types=%d, day headers=%d, "
        "listed meals=%d, single headers=%d)",
        "meal plan" if decision else "single recipe",
        signals.day_count,
        signals.meal_type_count,
        signals.day_header_count,
        signals.listed_meal_count,
        signals.single_header_count,
    )
    return Classification(is_meal_plan=decision, signals=signals)
