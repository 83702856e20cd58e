#!/usr/bin/env python3

from __future__ import annotations

import unittest

from meal_plan_extractor.const import PLACEHOLDER_INGREDIENTS, PLACEHOLDER_INSTRUCTIONS
from meal_plan_extractor.extractors.recipe_filters import deduplicate_recipes, is_valid_recipe
from meal_plan_extractor.models.recipe import Recipe


def make_recipe(title: str, index: int = 1, **fields) -> Recipe:
    fields.setdefault("ingredients", ["1 cup rice"])
    fields.setdefault("instructions", ["Simmer the rice for 15 minutes."])
    return Recipe(id=f"recipe_test_{index}", title=title, **fields)


class ValidatorTests(unittest.TestCase):
    def test_complete_recipe_is_valid(self) -> None:
        self.assertTrue(is_valid_recipe(make_recipe("Rice Bowl")))

    def test_mapping_is_accepted(self) -> None:
        recipe = {"title": "Rice Bowl", "ingredients": ("1 cup rice",),
                  "instructions": ["Cook the rice."]}
        self.assertTrue(is_valid_recipe(recipe))

    def test_placeholder_ingredients_are_invalid(self) -> None:
        recipe = make_recipe("Rice Bowl", ingredients=[PLACEHOLDER_INGREDIENTS])
        self.assertFalse(is_valid_recipe(recipe))

    def test_placeholder_instructions_are_invalid(self) -> None:
        recipe = make_recipe("Rice Bowl", instructions=[PLACEHOLDER_INSTRUCTIONS])
        self.assertFalse(is_valid_recipe(recipe))

    def test_corruption_markers(self) -> None:
        for line in ("Failed to generate steps", "⚠ check this", "please retry later",
                     "ERROR: quota exceeded"):
            with self.subTest(line=line):
                recipe = make_recipe("Rice Bowl", instructions=["Cook the rice.", line])
                self.assertFalse(is_valid_recipe(recipe))

    def test_empty_or_missing_fields_are_invalid(self) -> None:
        self.assertFalse(is_valid_recipe(make_recipe("Rice Bowl", ingredients=[])))
        self.assertFalse(is_valid_recipe(make_recipe("Rice Bowl", instructions=[])))
        self.assertFalse(is_valid_recipe({"title": "Rice Bowl", "ingredients": ["1 cup rice"]}))
        self.assertFalse(is_valid_recipe(
            {"ingredients": "1 cup rice", "instructions": ["Cook the rice."]}))
        self.assertFalse(is_valid_recipe(None))


class DeduplicatorTests(unittest.TestCase):
    def test_titles_compare_trimmed_and_case_insensitive(self) -> None:
        recipes = [
            make_recipe("Chicken Stir-Fry", 1),
            make_recipe("chicken stir-fry ", 2),
        ]
        unique, removed = deduplicate_recipes(recipes)
        self.assertEqual([recipe.id for recipe in unique], ["recipe_test_1"])
        self.assertEqual(removed, 1)

    def test_first_occurrence_order_is_kept(self) -> None:
        recipes = [
            make_recipe("Oatmeal", 1),
            make_recipe("Lentil Soup", 2),
            make_recipe("OATMEAL", 3),
            make_recipe("Baked Salmon", 4),
            make_recipe("lentil soup", 5),
        ]
        unique, removed = deduplicate_recipes(recipes)
        self.assertEqual([recipe.title for recipe in unique],
                         ["Oatmeal", "Lentil Soup", "Baked Salmon"])
        self.assertEqual(removed, 2)

    def test_duplicate_callback(self) -> None:
        dropped = []
        recipes = [make_recipe("Tacos", 1), make_recipe(" tacos", 2)]
        deduplicate_recipes(recipes, on_duplicate=dropped.append)
        self.assertEqual([recipe.id for recipe in dropped], ["recipe_test_2"])

    def test_no_duplicates(self) -> None:
        recipes = [make_recipe("Tacos", 1), make_recipe("Burritos", 2)]
        unique, removed = deduplicate_recipes(recipes)
        self.assertEqual(unique, recipes)
        self.assertEqual(removed, 0)


if __name__ == "__main__":
    unittest.main()
