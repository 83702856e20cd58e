"""
Line-level field extraction.

Stateless helpers used by the segmenter to read metadata, section headers
and content from a single meal plan line.
"""
from __future__ import annotations

import re

from ..const import (
    DISH_KEYWORDS,
    DISH_NAME_MAX_LENGTH,
    DISH_NAME_MIN_LENGTH,
    SECTION_INGREDIENTS,
    SECTION_INSTRUCTIONS,
    SECTION_NOTES,
)

# Metadata labels mapped to Recipe attributes
METADATA_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("servings", re.compile(r"^Servings?:\s*(.*)$", re.IGNORECASE)),
    ("prep_time", re.compile(
        r"^Prep(?:aration)?\s+Time:\s*(.*)$", re.IGNORECASE)),
    ("cook_time", re.compile(
        r"^Cook(?:ing)?\s+Time:\s*(.*)$", re.IGNORECASE)),
]

SECTION_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (SECTION_INGREDIENTS, re.compile(r"^Ingredients?:?\s*$", re.IGNORECASE)),
    (SECTION_INSTRUCTIONS, re.compile(
        r"^(?:Instructions?|Directions?|Method|Steps?):?\s*$", re.IGNORECASE)),
    (SECTION_NOTES, re.compile(r"^(?:Notes?|Tips?):?\s*$", re.IGNORECASE)),
]

# Headers that look like section starts inside another section
MISPLACED_HEADER_PATTERNS: dict[str, re.Pattern[str]] = {
    SECTION_INGREDIENTS: re.compile(
        r"^(?:Instructions?|Directions?|Method|Steps?|Notes?|Tips?):",
        re.IGNORECASE),
    SECTION_INSTRUCTIONS: re.compile(
        r"^(?:Notes?|Tips?|Grocery|Shopping):", re.IGNORECASE),
}

LIST_END_PATTERN = re.compile(
    r"^(?:Grocery\s+List|Shopping\s+List|Estimated\s+Total|Money-Saving)",
    re.IGNORECASE)

CAPTURE_BLOCKER_PATTERN = re.compile(
    r"^(?:Ingredients?|Instructions?|Directions?|Method|Grocery|Shopping)",
    re.IGNORECASE)

NON_RECIPE_HEADER_PATTERN = re.compile(
    r"^(?:Grocery|Shopping|Estimated|Total|Tips|Notes|Ingredients?|Instructions?)",
    re.IGNORECASE)

LIST_PREFIX_PATTERN = re.compile(r"^(?:[-•*]|\d+[.)])")

DISH_KEYWORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(DISH_KEYWORDS) + r")\b", re.IGNORECASE)

LOOSE_INGREDIENT_PATTERNS = [
    re.compile(
        r"^\d+\s*(?:cups?|tbsp|tsp|lbs?|oz|g|kg|ml|l|cans?|jars?|bottles?|"
        r"bunch(?:es)?|cloves?)\b",
        re.IGNORECASE),
    re.compile(
        r"^(?:Salt|Pepper|Oil|Butter|Flour|Sugar|Milk|Eggs|Water|Onion|Garlic|"
        r"Chicken|Beef|Fish|Rice|Pasta)\b",
        re.IGNORECASE),
]

LOOSE_INSTRUCTION_PATTERN = re.compile(
    r"^(?:Heat|Cook|Add|Mix|Stir|Combine|Place|Serve|Season|Chop|Dice|Slice)\b",
    re.IGNORECASE)


def strip_decoration(line: str) -> str:
    """Remove bullet, numbering and markdown emphasis from a content line.

    Examples:
        >>> strip_decoration("- **2 cups** rolled oats")
        '2 cups rolled oats'
        >>> strip_decoration("3) Simmer for 5 minutes")
        'Simmer for 5 minutes'
    """
    text = re.sub(r"^[-•*]\s*", "", line.strip())
    text = re.sub(r"^\d+[.)]\s*", "", text)
    text = text.replace("**", "").replace("*", "")
    return text.strip()


def normalize_header(line: str) -> str:
    """Reduce a line to its bare label for header and metadata matching.

    Leading markdown heading marks, a leading bullet and bold markers are
    dropped, so '### **Ingredients:**' and '- Servings: 4' compare like
    'Ingredients:' and 'Servings: 4'.
    """
    text = re.sub(r"^#+\s*", "", line.strip())
    text = re.sub(r"^[-•]\s*", "", text)
    text = text.replace("**", "")
    return text.strip()


def extract_metadata(line: str) -> tuple[str, str] | None:
    """Extract a metadata field from a line.

    Returns:
        Tuple of (recipe attribute, value) or None if the line carries no
        servings, prep time or cook time label
    """
    label = normalize_header(line)
    for field_name, pattern in METADATA_PATTERNS:
        match = pattern.match(label)
        if match:
            return field_name, match.group(1).strip()
    return None


def detect_section(line: str) -> str | None:
    """Return the section a header line opens, or None."""
    label = normalize_header(line)
    for section, pattern in SECTION_PATTERNS:
        if pattern.match(label):
            return section
    return None


def is_list_end_marker(line: str) -> bool:
    """Check for grocery list and budget summaries that end recipe content."""
    return bool(LIST_END_PATTERN.match(normalize_header(line)))


def is_capture_blocker(line: str) -> bool:
    """Check whether a line must not be captured as a recipe name."""
    return bool(CAPTURE_BLOCKER_PATTERN.match(normalize_header(line)))


def is_misplaced_header(clean_line: str, section: str) -> bool:
    """Check whether a cleaned content line is really another section's header."""
    pattern = MISPLACED_HEADER_PATTERNS.get(section)
    return bool(pattern and pattern.match(clean_line))


def looks_like_dish_name(line: str) -> bool:
    """Heuristically decide whether an undecorated line names a dish.

    The line must not be a list item, must have a plausible length, must
    not be a known non-recipe header or end like a sentence or a lead-in,
    and must mention a food or cooking keyword.
    """
    if LIST_PREFIX_PATTERN.match(line):
        return False
    if not DISH_NAME_MIN_LENGTH <= len(line) <= DISH_NAME_MAX_LENGTH:
        return False
    if NON_RECIPE_HEADER_PATTERN.match(line):
        return False
    if line.endswith((":", ".", "!", "?")):
        return False
    return bool(DISH_KEYWORD_PATTERN.search(line))


def classify_loose_line(clean_line: str) -> str | None:
    """Guess the section of a content line found outside any section.

    Returns:
        SECTION_INGREDIENTS for measured or common ingredients,
        SECTION_INSTRUCTIONS for lines starting with a cooking verb,
        otherwise None
    """
    if any(pattern.match(clean_line) for pattern in LOOSE_INGREDIENT_PATTERNS):
        return SECTION_INGREDIENTS
    if LOOSE_INSTRUCTION_PATTERN.match(clean_line):
        return SECTION_INSTRUCTIONS
    return None
