"""
Meal plan segmentation.

This module walks a meal plan line by line and splits it into recipes.
There are no explicit delimiters in the text: day headers, meal-type
headers, recipe-start lines and section headers are recognized by their
shape, and every line is offered to an ordered list of rules until one
consumes it. Recipes lacking ingredients or instructions are completed
through the enrichment client when a recipe boundary is reached.
"""
from __future__ import annotations

import itertools
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..const import (
    DATA_ERROR,
    DATA_REASON,
    DATA_RECIPE,
    DATA_TITLE,
    DEFAULT_DAY_TAG,
    EVENT_DUPLICATE_REMOVED,
    EVENT_ENRICHMENT_FAILED,
    EVENT_RECIPE_FINALIZED,
    EVENT_RECIPE_REJECTED,
    PLACEHOLDER_INGREDIENTS,
    PLACEHOLDER_INSTRUCTIONS,
    SECTION_INGREDIENTS,
    SECTION_INSTRUCTIONS,
    SECTION_NONE,
    SECTION_NOTES,
)
from ..exceptions import EnrichmentFailure
from ..models.recipe import ExtractionResult, Recipe, normalize_meal_type
from .field_extractor import (
    classify_loose_line,
    detect_section,
    extract_metadata,
    is_capture_blocker,
    is_list_end_marker,
    is_misplaced_header,
    looks_like_dish_name,
    strip_decoration,
)
from .patterns import clean_title, match_day_header, match_meal_type_header, match_recipe_start
from .recipe_filters import deduplicate_recipes, is_valid_recipe

if TYPE_CHECKING:
    from ..services.enrichment_client import EnrichmentClient

_LOGGER = logging.getLogger(__name__)

EventCallback = Callable[[str, dict[str, Any]], None]


class RecipeIdGenerator:
    """Generates recipe ids that are unique within one extraction run.

    Ids have the form ``recipe_<run token>_<n>`` with n counting from 1.
    """

    def __init__(self, token: str | None = None) -> None:
        self.token = token or uuid.uuid4().hex[:12]
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"recipe_{self.token}_{next(self._counter)}"


@dataclass
class _SegmentState:
    """Mutable state of a single segmentation run."""

    next_id: RecipeIdGenerator
    recipe: Recipe | None = None
    section: str = SECTION_NONE
    current_day: str = ""
    capture_next_as_recipe_name: bool = False
    pending_meal_type: str | None = None
    recipes: list[Recipe] = field(default_factory=list)
    rejected: int = 0


class MealPlanSegmenter:
    """Splits meal plan text into validated, deduplicated recipes."""

    def __init__(self, enrichment_client: EnrichmentClient | None = None,
                 event_callback: EventCallback | None = None) -> None:
        """Initialize the segmenter.

        Args:
            enrichment_client: Client used to fill missing ingredients and
                instructions; without one such recipes get placeholders and
                are rejected
            event_callback: Optional callback to fire events during extraction
        """
        self.enrichment_client = enrichment_client
        self.event_callback = event_callback
        # Evaluated in order, the first rule returning True consumes the line
        self._rules: list[Callable[[_SegmentState, str], bool]] = [
            self._day_header,
            self._meal_type_header,
            self._recipe_start,
            self._captured_name,
            self._standalone_dish,
            self._outside_recipe,
            self._metadata,
            self._section_header,
            self._list_end,
            self._section_content,
            self._loose_line,
        ]

    def _fire(self, event_type: str, event_data: dict[str, Any]) -> None:
        if self.event_callback:
            self.event_callback(event_type, event_data)

    def segment(self, text: str) -> ExtractionResult:
        """Extract every recipe from a meal plan.

        Args:
            text: Meal plan text, already classified as a meal plan

        Returns:
            ExtractionResult with recipes in source order
        """
        state = _SegmentState(next_id=RecipeIdGenerator())

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            for rule in self._rules:
                if rule(state, line):
                    break

        self._finalize(state)

        recipes, removed = deduplicate_recipes(
            state.recipes, on_duplicate=self._on_duplicate)

        _LOGGER.info(
            "Segmented meal plan into %d recipes (%d rejected, %d duplicates removed)",
            len(recipes), state.rejected, removed)

        return ExtractionResult(
            is_meal_plan=True,
            recipes=recipes,
            duplicates_removed=removed,
            rejected_recipes=state.rejected,
        )

    def _on_duplicate(self, recipe: Recipe) -> None:
        self._fire(EVENT_DUPLICATE_REMOVED, {DATA_TITLE: recipe.title})

    def _open_recipe(self, state: _SegmentState, title: str,
                     meal_type: str | None = None) -> None:
        self._finalize(state)

        resolved_meal_type = normalize_meal_type(
            meal_type or state.pending_meal_type)
        recipe = Recipe(
            id=state.next_id(),
            title=title,
            meal_type=resolved_meal_type,
            day=state.current_day,
        )
        recipe.add_tag(state.current_day or DEFAULT_DAY_TAG)
        recipe.add_tag(resolved_meal_type.lower())

        state.recipe = recipe
        state.section = SECTION_NONE
        state.capture_next_as_recipe_name = False
        state.pending_meal_type = None
        _LOGGER.debug("Opened recipe '%s' (%s, %s)", title, resolved_meal_type,
                      state.current_day or DEFAULT_DAY_TAG)

    def _finalize(self, state: _SegmentState) -> None:
        recipe = state.recipe
        state.recipe = None
        state.section = SECTION_NONE
        if recipe is None:
            return

        if not recipe.title.strip():
            _LOGGER.debug("Discarding recipe without a title")
            state.rejected += 1
            self._fire(EVENT_RECIPE_REJECTED, {
                DATA_TITLE: recipe.title,
                DATA_REASON: "missing title",
            })
            return

        if not recipe.ingredients or not recipe.instructions:
            self._enrich(recipe)

        if not is_valid_recipe(recipe):
            reason = ("enrichment failed" if recipe.error
                      else "missing or corrupted ingredients or instructions")
            _LOGGER.warning("Rejecting recipe '%s': %s", recipe.title, reason)
            state.rejected += 1
            self._fire(EVENT_RECIPE_REJECTED, {
                DATA_TITLE: recipe.title,
                DATA_REASON: reason,
            })
            return

        state.recipes.append(recipe)
        _LOGGER.debug("Finalized recipe '%s' with %d ingredients and %d instructions",
                      recipe.title, len(recipe.ingredients), len(recipe.instructions))
        self._fire(EVENT_RECIPE_FINALIZED, {
            DATA_TITLE: recipe.title,
            DATA_RECIPE: recipe.model_dump(by_alias=True),
        })

    def _enrich(self, recipe: Recipe) -> None:
        """Fill the empty fields of a recipe, or substitute placeholders."""
        if self.enrichment_client is None:
            self._apply_placeholders(
                recipe, "no enrichment client configured")
            return

        try:
            fields = self.enrichment_client.enrich(recipe.title)
        except EnrichmentFailure as e:
            self._apply_placeholders(recipe, str(e))
            return

        if not recipe.ingredients:
            recipe.ingredients = list(fields.ingredients)
        if not recipe.instructions:
            recipe.instructions = list(fields.instructions)

    def _apply_placeholders(self, recipe: Recipe, error: str) -> None:
        _LOGGER.warning("Could not complete recipe '%s': %s", recipe.title, error)
        if not recipe.ingredients:
            recipe.ingredients = [PLACEHOLDER_INGREDIENTS]
        if not recipe.instructions:
            recipe.instructions = [PLACEHOLDER_INSTRUCTIONS]
        recipe.error = True
        self._fire(EVENT_ENRICHMENT_FAILED, {
            DATA_TITLE: recipe.title,
            DATA_ERROR: error,
        })

    # Line rules, in priority order

    def _day_header(self, state: _SegmentState, line: str) -> bool:
        day = match_day_header(line)
        if day is None:
            return False
        state.current_day = day
        _LOGGER.debug("Day header: %s", day)
        return True

    def _meal_type_header(self, state: _SegmentState, line: str) -> bool:
        meal_type = match_meal_type_header(line)
        if meal_type is None:
            return False
        state.capture_next_as_recipe_name = True
        state.pending_meal_type = meal_type
        state.section = SECTION_NONE
        _LOGGER.debug("Meal type header: %s", meal_type)
        return True

    def _recipe_start(self, state: _SegmentState, line: str) -> bool:
        start = match_recipe_start(line)
        if start is None:
            return False
        if start.day:
            state.current_day = start.day
        self._open_recipe(state, start.title, start.meal_type)
        return True

    def _captured_name(self, state: _SegmentState, line: str) -> bool:
        if not state.capture_next_as_recipe_name:
            return False
        if is_capture_blocker(line):
            state.capture_next_as_recipe_name = False
            return False
        self._open_recipe(state, clean_title(strip_decoration(line)))
        return True

    def _standalone_dish(self, state: _SegmentState, line: str) -> bool:
        if state.recipe is not None or not looks_like_dish_name(line):
            return False
        self._open_recipe(state, clean_title(line))
        return True

    def _outside_recipe(self, state: _SegmentState, line: str) -> bool:
        return state.recipe is None

    def _metadata(self, state: _SegmentState, line: str) -> bool:
        metadata = extract_metadata(line)
        if metadata is None:
            return False
        field_name, value = metadata
        setattr(state.recipe, field_name, value)
        return True

    def _section_header(self, state: _SegmentState, line: str) -> bool:
        section = detect_section(line)
        if section is None:
            return False
        state.section = section
        return True

    def _list_end(self, state: _SegmentState, line: str) -> bool:
        if not is_list_end_marker(line):
            return False
        state.section = SECTION_NONE
        return True

    def _section_content(self, state: _SegmentState, line: str) -> bool:
        if state.section == SECTION_NONE:
            return False
        clean_line = strip_decoration(line)
        if not clean_line or is_misplaced_header(clean_line, state.section):
            return True

        recipe = state.recipe
        if state.section == SECTION_INGREDIENTS:
            recipe.ingredients.append(clean_line)
        elif state.section == SECTION_INSTRUCTIONS:
            recipe.instructions.append(clean_line)
        elif state.section == SECTION_NOTES:
            recipe.notes = (f"{recipe.notes}\n{clean_line}" if recipe.notes
                            else clean_line)
        return True

    def _loose_line(self, state: _SegmentState, line: str) -> bool:
        clean_line = strip_decoration(line)
        section = classify_loose_line(clean_line)
        if section == SECTION_INGREDIENTS:
            state.recipe.ingredients.append(clean_line)
        elif section == SECTION_INSTRUCTIONS:
            state.recipe.instructions.append(clean_line)
            state.section = SECTION_INSTRUCTIONS
        else:
            _LOGGER.debug("Ignoring line: %s", line)
        return True
