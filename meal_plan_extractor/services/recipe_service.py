"""
Meal Plan Extraction Service.

This module orchestrates the extraction of recipes from generated text,
deciding whether the text is a meal plan that can be segmented or a single
recipe that has to go through AI generation instead.
"""
from __future__ import annotations

import asyncio
import functools
import logging
import threading
from collections.abc import Callable
from typing import Any

from ..const import DATA_IS_MEAL_PLAN, DATA_SIGNALS, EVENT_CLASSIFIED
from ..extractors.classifier import classify_text
from ..extractors.segmenter import EventCallback, MealPlanSegmenter
from ..models.recipe import ExtractionResult, Recipe
from .enrichment_client import EnrichmentClient

_LOGGER = logging.getLogger(__name__)

RecipeSink = Callable[[Recipe], Any]


def _extract(text: Any, enrichment_client: EnrichmentClient | None,
             event_callback: EventCallback | None) -> ExtractionResult:
    if not isinstance(text, str) or not text.strip():
        _LOGGER.warning("No text to extract recipes from")
        return ExtractionResult(is_meal_plan=False, requires_ai=True)

    classification = classify_text(text)
    if event_callback:
        event_callback(EVENT_CLASSIFIED, {
            DATA_IS_MEAL_PLAN: classification.is_meal_plan,
            DATA_SIGNALS: classification.signals.model_dump(by_alias=True),
        })

    if not classification.is_meal_plan:
        _LOGGER.info("Text is not a meal plan, AI generation required")
        return ExtractionResult(
            is_meal_plan=False,
            requires_ai=True,
            signals=classification.signals,
        )

    segmenter = MealPlanSegmenter(
        enrichment_client=enrichment_client, event_callback=event_callback)
    result = segmenter.segment(text)
    result.signals = classification.signals
    return result


def _deliver(result: ExtractionResult, sink: RecipeSink | None) -> None:
    if sink is None:
        return
    for recipe in result.recipes:
        sink(recipe)


def classify_and_extract(
    text: Any,
    enrichment_client: EnrichmentClient | None = None,
    sink: RecipeSink | None = None,
    event_callback: EventCallback | None = None,
) -> ExtractionResult:
    """Classify text and extract the recipes of a meal plan.

    This function orchestrates the extraction process:
    1. Classifies the text as a meal plan or a single recipe
    2. Returns early with requires_ai set for single recipes
    3. Segments meal plans into recipes, enriching incomplete ones
    4. Hands every final recipe to the sink in result order

    Args:
        text: Generated meal plan or recipe text
        enrichment_client: Client used to complete recipes that lack
            ingredients or instructions
        sink: Optional callable invoked once per final recipe
        event_callback: Optional callback to fire events during extraction

    Returns:
        ExtractionResult with validated, deduplicated recipes
    """
    result = _extract(text, enrichment_client, event_callback)
    _deliver(result, sink)

    _LOGGER.info("Extraction finished: meal plan=%s, %d recipes",
                 result.is_meal_plan, result.total_recipes)
    return result


async def async_classify_and_extract(
    text: Any,
    enrichment_client: EnrichmentClient | None = None,
    sink: RecipeSink | None = None,
    event_callback: EventCallback | None = None,
    timeout: float | None = None,
) -> ExtractionResult:
    """Run classify_and_extract in an executor, bounded by a timeout.

    The sink is only invoked once the extraction completed. A run that timed
    out or was cancelled delivers no recipes and fires no further events,
    even though its worker thread keeps going in the background.

    Args:
        text: Generated meal plan or recipe text
        enrichment_client: Client used to complete incomplete recipes
        sink: Optional callable invoked once per final recipe
        event_callback: Optional callback to fire events during extraction
        timeout: Seconds to wait for the extraction, None waits forever

    Returns:
        ExtractionResult with validated, deduplicated recipes

    Raises:
        asyncio.TimeoutError: If the extraction did not finish in time
    """
    loop = asyncio.get_running_loop()
    abandoned = threading.Event()

    guarded_callback = None
    if event_callback is not None:
        def guarded_callback(event_type: str, event_data: dict[str, Any]) -> None:
            # The worker thread outlives a timeout, its events are dropped
            if not abandoned.is_set():
                event_callback(event_type, event_data)

    job = functools.partial(_extract, text, enrichment_client, guarded_callback)

    try:
        result = await asyncio.wait_for(
            loop.run_in_executor(None, job), timeout=timeout)
    except asyncio.TimeoutError:
        abandoned.set()
        _LOGGER.warning("Extraction timed out after %s seconds", timeout)
        raise
    except asyncio.CancelledError:
        abandoned.set()
        raise

    _deliver(result, sink)
    _LOGGER.info("Extraction finished: meal plan=%s, %d recipes",
                 result.is_meal_plan, result.total_recipes)
    return result
