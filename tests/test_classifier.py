#!/usr/bin/env python3

from __future__ import annotations

import unittest

from meal_plan_extractor.extractors.classifier import classify_text, count_signals, is_meal_plan
from meal_plan_extractor.models.recipe import ClassificationSignals

THREE_DAY_PLAN = """\
Day 1
Breakfast: Oatmeal with Berries
Lunch: Turkey Wrap
Dinner: Baked Salmon

Day 2
Breakfast: Greek Yogurt Parfait
Lunch: Quinoa Salad
Dinner: Chicken Stir-Fry

Day 3
Breakfast: Veggie Omelette
Lunch: Lentil Soup
Dinner: Beef Tacos
"""

SINGLE_RECIPE = """\
# Chicken Alfredo

Ingredients:
- 8 oz fettuccine
- 2 chicken breasts
- 1 cup heavy cream

Instructions:
1. Boil the pasta until al dente.
2. Sear the chicken and slice it.
3. Simmer the cream with parmesan and toss everything together.
"""


class ClassifierTests(unittest.TestCase):
    def test_day_headers_with_meal_lines_form_a_meal_plan(self) -> None:
        classification = classify_text(THREE_DAY_PLAN)
        self.assertTrue(classification.is_meal_plan)
        self.assertEqual(classification.signals.day_count, 3)
        self.assertEqual(classification.signals.day_header_count, 3)
        self.assertEqual(classification.signals.meal_type_count, 9)

    def test_single_heading_without_days_is_a_recipe(self) -> None:
        classification = classify_text(SINGLE_RECIPE)
        self.assertFalse(classification.is_meal_plan)
        self.assertEqual(classification.signals.single_header_count, 1)
        self.assertEqual(classification.signals.day_count, 0)

    def test_listed_meals_form_a_meal_plan(self) -> None:
        text = "- Breakfast: Eggs\n- Lunch: Chicken Wrap\n* Dinner: Pasta\n"
        classification = classify_text(text)
        self.assertEqual(classification.signals.listed_meal_count, 3)
        self.assertTrue(classification.is_meal_plan)

    def test_many_meal_type_mentions_form_a_meal_plan(self) -> None:
        text = "\n".join(["Breakfast", "Lunch", "Dinner", "Snack"] * 2)
        self.assertTrue(classify_text(text).is_meal_plan)

    def test_day_headings_do_not_count_as_single_headers(self) -> None:
        signals = count_signals("# Day 1\n# Day 2\n# Monday\n")
        self.assertEqual(signals.single_header_count, 0)
        self.assertEqual(signals.day_header_count, 3)

    def test_heading_is_ignored_when_days_are_mentioned(self) -> None:
        text = "# My Week\n" + THREE_DAY_PLAN
        self.assertTrue(classify_text(text).is_meal_plan)

    def test_too_few_signals_is_not_a_meal_plan(self) -> None:
        text = "Day 1\nBreakfast: Eggs\nDinner: Soup\n"
        self.assertFalse(classify_text(text).is_meal_plan)

    def test_decision_rule_thresholds(self) -> None:
        self.assertTrue(is_meal_plan(ClassificationSignals(day_count=3)))
        self.assertFalse(is_meal_plan(ClassificationSignals(day_count=2)))
        self.assertTrue(is_meal_plan(ClassificationSignals(meal_type_count=8)))
        self.assertFalse(is_meal_plan(
            ClassificationSignals(meal_type_count=8, single_header_count=1)))

    def test_classification_is_deterministic(self) -> None:
        self.assertEqual(classify_text(THREE_DAY_PLAN), classify_text(THREE_DAY_PLAN))

    def test_empty_text(self) -> None:
        classification = classify_text("")
        self.assertFalse(classification.is_meal_plan)
        self.assertEqual(classification.signals, ClassificationSignals())


if __name__ == "__main__":
    unittest.main()
