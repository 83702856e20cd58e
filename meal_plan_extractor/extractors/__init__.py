"""Extractors package."""
from .classifier import classify_text
from .recipe_filters import deduplicate_recipes, is_valid_recipe
from .segmenter import MealPlanSegmenter, RecipeIdGenerator

__all__ = [
    "MealPlanSegmenter",
    "RecipeIdGenerator",
    "classify_text",
    "deduplicate_recipes",
    "is_valid_recipe",
]
