"""
Recipe data models for the Meal Plan Extractor.

This module defines the Pydantic models used to structure recipe data
extracted from unstructured meal plan text. Attribute names are snake_case;
dumping with ``by_alias=True`` produces the camelCase names downstream
consumers expect (``prepTime``, ``mealType``, ``isMealPlan`` ...).
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from ..const import DEFAULT_MEAL_TYPE, MEAL_TYPES

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack"]


def normalize_meal_type(value: str | None) -> MealType:
    """Map free text such as 'lunch' or 'Snacks' onto a MealType.

    Unresolvable values fall back to Dinner.
    """
    if value:
        candidate = value.strip().rstrip(':').strip().lower()
        if candidate.endswith('s') and candidate[:-1].title() in MEAL_TYPES:
            candidate = candidate[:-1]
        for meal_type in MEAL_TYPES:
            if candidate == meal_type.lower():
                return meal_type
    return DEFAULT_MEAL_TYPE


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recipe(_CamelModel):
    """A single recipe found in a meal plan.

    Attributes:
        id: Opaque token generated when the recipe was opened
        title: The dish name, also the deduplication identity
        ingredients: Ingredient lines in source order
        instructions: Instruction lines in source order
        servings: Free-text servings label, e.g. '4'
        prep_time: Free-text preparation time, e.g. '10 minutes'
        cook_time: Free-text cooking time
        meal_type: Breakfast, Lunch, Dinner or Snack
        day: Day label from the plan, e.g. 'Day 3' or 'Monday'
        tags: Day label (or fallback) and meal type, without duplicates
        notes: Notes or tips, one line per accumulated entry
        error: Set when enrichment failed and placeholders were substituted
    """

    id: str = Field(
        description="Opaque unique token for this recipe"
    )
    title: str = Field(
        description="The title of the recipe"
    )
    ingredients: list[str] = Field(
        default_factory=list,
        description="Ingredient lines, e.g. '2 cups rolled oats'"
    )
    instructions: list[str] = Field(
        default_factory=list,
        description="Instruction steps in order"
    )
    servings: str = ""
    prep_time: str = ""
    cook_time: str = ""
    meal_type: MealType = DEFAULT_MEAL_TYPE
    day: str = ""
    tags: list[str] = Field(default_factory=list)
    notes: str = ""
    error: bool = False

    @property
    def dedup_key(self) -> str:
        """Title key used to detect duplicates within one document."""
        return self.title.strip().lower()

    def add_tag(self, tag: str) -> None:
        """Add a tag unless it is empty or already present."""
        if tag and tag not in self.tags:
            self.tags.append(tag)


class ClassificationSignals(_CamelModel):
    """Raw signal counts collected by the classifier."""

    day_count: int = 0
    meal_type_count: int = 0
    day_header_count: int = 0
    listed_meal_count: int = 0
    single_header_count: int = 0


class Classification(_CamelModel):
    """Classifier decision together with the signals behind it."""

    is_meal_plan: bool
    signals: ClassificationSignals = Field(
        default_factory=ClassificationSignals)


class ExtractionResult(_CamelModel):
    """Outcome of one extraction run.

    Every recipe in ``recipes`` passed validation and has a unique title
    (case and surrounding whitespace ignored).
    """

    is_meal_plan: bool
    recipes: list[Recipe] = Field(default_factory=list)
    requires_ai: bool = Field(default=False, alias="requiresAI")
    signals: ClassificationSignals = Field(
        default_factory=ClassificationSignals)
    duplicates_removed: int = 0
    rejected_recipes: int = 0

    @computed_field(alias="totalRecipes")
    @property
    def total_recipes(self) -> int:
        return len(self.recipes)
