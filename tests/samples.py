"""Meal plan texts shared by the test modules."""

MEAL_PLAN = """\
# 3-Day Meal Plan

## Day 1
Breakfast: Oatmeal with Berries
Ingredients:
- 1 cup rolled oats
- 1/2 cup blueberries
Instructions:
1. Cook oats in water for 5 minutes.
2. Top with blueberries.

Lunch: Turkey Wrap
Ingredients:
- 1 tortilla
- 3 oz sliced turkey
Instructions:
1. Layer turkey on the tortilla.
2. Roll up and slice.

## Day 2
Dinner: Chicken Stir-Fry
Servings: 4
Prep Time: 10 minutes
Ingredients:
- 1 lb chicken breast
- 2 cups broccoli
Instructions:
1. Stir-fry chicken until golden.
2. Add broccoli and cook 4 minutes.

## Day 3
Dinner: chicken stir-fry 
Ingredients:
- 1 lb chicken thighs
Instructions:
1. Cook everything together.
"""

PLAN_WITH_INCOMPLETE_RECIPE = """\
Day 1
Breakfast: Greek Yogurt Parfait
Ingredients:
- 1 cup Greek yogurt
Instructions:
- Layer yogurt and granola.

Day 2
Lunch: Mystery Bowl

Day 3
Dinner: Baked Salmon
Ingredients:
- 2 salmon fillets
Instructions:
- Bake at 400F for 12 minutes.
"""

SINGLE_RECIPE = """\
# Chicken Alfredo

Ingredients:
- 8 oz fettuccine
- 1 cup heavy cream

Instructions:
1. Boil the pasta.
2. Simmer the cream and toss with the pasta.
"""
