"""
Line patterns for meal plan segmentation.

Day headers, meal-type headers and the ordered recipe-start patterns. Each
recipe-start pattern is paired with an extractor that turns its match into
a RecipeStart; the first pattern whose extractor yields a result wins.
"""
from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple

DAY_NAMES = r"Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"
MEAL_NAMES = r"Breakfast|Lunch|Dinner|Snack"
MEAL_EMOJI = r"(?:🍳|🥗|🍽️|🍽|🥪|🍎|🥞|🥙|🍲|🍝|🥘|🍪)"

# Heading words that never name a recipe
SECTION_WORDS = (
    r"Ingredients?|Instructions?|Directions?|Method|Steps|Preparation|Notes?|"
    r"Tips?|Grocery|Shopping|Main Components?|Sauce|Garnish|Protein|Dairy|"
    r"Vegetables?|Spices?|Seasonings?"
)
NON_RECIPE_HEADINGS = (
    r"Grocery|Shopping|Estimated|Total|Money-Saving|Meal\s+Plan|Meal\s+Prep|"
    r"Weekly|Overview|Summary"
)

_DAY_TOKEN = rf"(Day\s+\d+|Week\s+\d+|{DAY_NAMES})\b(?:\*\*)?"
# A tail of the form "MealType: Name" belongs to a recipe start instead
_NO_MEAL_TAIL = rf"(?!\s*[-–:]?\s*(?:\*\*)?(?:{MEAL_NAMES})s?(?:\*\*)?\s*:)"

# "## Day 1 (Monday)", "## Monday Meals", "**Day 2:**"
HEADING_DAY_HEADER_PATTERN = re.compile(
    rf"^(?:#{{1,3}}\s*(?:\*\*)?|\*\*){_DAY_TOKEN}{_NO_MEAL_TAIL}.*$",
    re.IGNORECASE,
)

# "Day 3", "Week 1 - High Protein", "Day 1 (Monday)", "Day 1 Monday"
DAY_HEADER_PATTERN = re.compile(
    rf"^{_DAY_TOKEN}{_NO_MEAL_TAIL}"
    rf"(?:\s*[-–:(].*|\s+(?:Day\s+\d+|{DAY_NAMES})\b.*)?$",
    re.IGNORECASE,
)

# "Breakfast", "**Lunch**", "### Dinner:", "Snacks", "🍳 Breakfast"
MEAL_TYPE_HEADER_PATTERN = re.compile(
    rf"^(?:{MEAL_EMOJI}\s*)?(?:#{{1,3}}\s*)?(?:\*\*)?({MEAL_NAMES})s?(?:\*\*)?"
    rf"\s*:?\s*(?:\*\*)?\s*$",
    re.IGNORECASE,
)

_MEAL_PREFIX_PATTERN = re.compile(rf"^({MEAL_NAMES})s?:\s*(.+)", re.IGNORECASE)
_DAY_MEAL_PREFIX_PATTERN = re.compile(
    rf"^(Day\s+\d+|{DAY_NAMES})\s*[-–:]?\s*({MEAL_NAMES})s?:\s*(.+)", re.IGNORECASE)


class RecipeStart(NamedTuple):
    """Title and context read from a recipe-start line."""

    title: str
    meal_type: str | None = None
    day: str | None = None


def clean_title(text: str) -> str:
    """Strip markdown emphasis, heading marks and a trailing colon from a title."""
    title = text.replace("**", "").replace("*", "")
    title = re.sub(r"^#+\s*", "", title.strip())
    return title.strip().rstrip(":").strip()


def format_day_label(text: str) -> str:
    """Normalize a day token: 'day  3' -> 'Day 3', 'MONDAY' -> 'Monday'."""
    return re.sub(r"\s+", " ", text.strip()).title()


def _start(title: str, meal_type: str | None = None,
           day: str | None = None) -> RecipeStart | None:
    cleaned = clean_title(title)
    if not cleaned:
        return None
    return RecipeStart(cleaned, meal_type, day)


def _meal_and_name(match: re.Match[str]) -> RecipeStart | None:
    return _start(match.group(2), meal_type=match.group(1))


def _name_only(match: re.Match[str]) -> RecipeStart | None:
    return _start(match.group(1))


def _day_meal_and_name(match: re.Match[str]) -> RecipeStart | None:
    return _start(match.group(3), meal_type=match.group(2),
                  day=format_day_label(match.group(1)))


def _titled_line(match: re.Match[str]) -> RecipeStart | None:
    # Headings and emoji lines may still carry "Day 1 - Lunch:" or "Lunch:"
    rest = re.sub(rf"^{MEAL_EMOJI}\s*", "", match.group(1).strip())
    day_match = _DAY_MEAL_PREFIX_PATTERN.match(rest)
    if day_match:
        return _day_meal_and_name(day_match)
    meal_match = _MEAL_PREFIX_PATTERN.match(rest)
    if meal_match:
        return _meal_and_name(meal_match)
    return _start(rest)


RecipeStartExtractor = Callable[[re.Match[str]], RecipeStart | None]

RECIPE_START_PATTERNS: list[tuple[re.Pattern[str], RecipeStartExtractor]] = [
    # "Breakfast: Oatmeal", "Snacks: Trail mix"
    (re.compile(rf"^({MEAL_NAMES})s?:\s*(.+)", re.IGNORECASE), _meal_and_name),
    # "- Breakfast: Oatmeal with berries"
    (re.compile(rf"^-\s*({MEAL_NAMES})s?:\s*(.+)", re.IGNORECASE), _meal_and_name),
    # "* Lunch: Turkey sandwich"
    (re.compile(rf"^\*\s*({MEAL_NAMES})s?:\s*(.+)", re.IGNORECASE), _meal_and_name),
    # "**Dinner:** Salmon with rice"
    (re.compile(rf"^\*\*({MEAL_NAMES})s?:?\*\*:?\s*(.+)", re.IGNORECASE),
     _meal_and_name),
    # "Recipe Name: Chicken Stir-fry"
    (re.compile(r"^Recipe Name:\s*(.+)", re.IGNORECASE), _name_only),
    # "Recipe: Pasta"
    (re.compile(r"^Recipe:\s*(.+)", re.IGNORECASE), _name_only),
    # "## Recipe Title", but not section or summary headings
    (re.compile(
        rf"^##\s+(?!(?:{SECTION_WORDS})\s*:?\s*$)(?!(?:{NON_RECIPE_HEADINGS})\b)(.+)",
        re.IGNORECASE), _titled_line),
    # "### Recipe Title", same exclusions
    (re.compile(
        rf"^###\s+(?!(?:{SECTION_WORDS})\s*:?\s*$)(?!(?:{NON_RECIPE_HEADINGS})\b)(.+)",
        re.IGNORECASE), _titled_line),
    # "Day 1 - Breakfast: Oatmeal", "Monday: Lunch: Wrap"
    (_DAY_MEAL_PREFIX_PATTERN, _day_meal_and_name),
    # "1. Chicken stir-fry recipe"
    (re.compile(r"^\d+\.\s+(.+(?:recipe|meal|dish).*)", re.IGNORECASE), _name_only),
    # "🍳 Veggie omelette"
    (re.compile(rf"^{MEAL_EMOJI}\s*(.+)"), _titled_line),
]


def match_recipe_start(line: str) -> RecipeStart | None:
    """Match a line against the recipe-start patterns in priority order.

    Args:
        line: A trimmed, non-empty line

    Returns:
        The RecipeStart of the first matching pattern, or None
    """
    for pattern, extractor in RECIPE_START_PATTERNS:
        match = pattern.match(line)
        if match:
            start = extractor(match)
            if start is not None:
                return start
    return None


def match_day_header(line: str) -> str | None:
    """Return the normalized day label if the line is a day header."""
    match = HEADING_DAY_HEADER_PATTERN.match(line) or DAY_HEADER_PATTERN.match(line)
    if match:
        return format_day_label(match.group(1))
    return None


def match_meal_type_header(line: str) -> str | None:
    """Return the meal type named by a meal-type-only header line."""
    match = MEAL_TYPE_HEADER_PATTERN.match(line)
    if match:
        return match.group(1)
    return None
