"""
Recipe filters.

Validation and deduplication applied to recipes before they leave the
extractor. Both are pure: they never modify the recipes they inspect.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..const import CORRUPTION_MARKERS, CORRUPTION_MARKERS_CASELESS
from ..models.recipe import Recipe

_LOGGER = logging.getLogger(__name__)


def _get_field(recipe: Recipe | Mapping[str, Any], name: str) -> Any:
    if isinstance(recipe, Mapping):
        return recipe.get(name)
    return getattr(recipe, name, None)


def _is_corrupted(line: Any) -> bool:
    text = str(line)
    if any(marker in text for marker in CORRUPTION_MARKERS):
        return True
    lowered = text.lower()
    return any(marker in lowered for marker in CORRUPTION_MARKERS_CASELESS)


def _is_usable(lines: Any) -> bool:
    if not isinstance(lines, (list, tuple)) or not lines:
        return False
    return not any(_is_corrupted(line) for line in lines)


def is_valid_recipe(recipe: Recipe | Mapping[str, Any] | None) -> bool:
    """Check whether a recipe is fit to hand to downstream consumers.

    A recipe is valid when both its ingredients and its instructions are
    non-empty lists free of failure placeholders and error text.

    Args:
        recipe: A Recipe model or a recipe-shaped mapping

    Returns:
        True if the recipe can be kept
    """
    if recipe is None:
        return False
    return (_is_usable(_get_field(recipe, "ingredients"))
            and _is_usable(_get_field(recipe, "instructions")))


def deduplicate_recipes(
    recipes: Iterable[Recipe],
    on_duplicate: Callable[[Recipe], None] | None = None,
) -> tuple[list[Recipe], int]:
    """Drop recipes whose title repeats an earlier one.

    Titles are compared trimmed and case-insensitively; the first
    occurrence wins and source order is preserved.

    Args:
        recipes: Recipes in source order
        on_duplicate: Optional callback invoked with every dropped recipe

    Returns:
        Tuple of (unique recipes, number of duplicates removed)
    """
    seen: set[str] = set()
    unique: list[Recipe] = []
    removed = 0

    for recipe in recipes:
        key = recipe.dedup_key
        if key in seen:
            removed += 1
            _LOGGER.debug("Skipping duplicate recipe: %s", recipe.title)
            if on_duplicate is not None:
                on_duplicate(recipe)
            continue
        seen.add(key)
        unique.append(recipe)

    if removed:
        _LOGGER.info("Removed %d duplicate recipes", removed)
    return unique, removed
