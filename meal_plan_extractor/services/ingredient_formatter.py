"""
Ingredient Formatter.

This module turns the entries of generated ingredient and instruction
lists into plain strings. Generated replies sometimes describe ingredients
as objects with name, quantity and unit instead of text lines; those are
rendered as 'quantity unit name'. Units are kept as written.
"""
from __future__ import annotations

import logging
import math
import numbers
from typing import Any

_LOGGER = logging.getLogger(__name__)

_NULL_VALUES = ('null', 'None', None, '')


def format_quantity(quantity: Any) -> str:
    """
    Format quantity to remove unnecessary decimals.

    Args:
        quantity: The quantity as a number or as generated text

    Returns:
        Formatted string (empty string if quantity is None, not a number
        or not finite)

    Examples:
        >>> format_quantity(2.0)
        '2'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity("1/2")
        '1/2'
        >>> format_quantity(float("inf"))
        ''
    """
    if quantity in _NULL_VALUES:
        return ""

    if isinstance(quantity, str):
        try:
            quantity = float(quantity)
        except ValueError:
            # Fractions and ranges such as '1/2' or '2-3' stay as written
            return quantity.strip()

    if (isinstance(quantity, bool) or not isinstance(quantity, numbers.Real)
            or not math.isfinite(quantity)):
        _LOGGER.debug("Ignoring unusable quantity: %r", quantity)
        return ""

    # If it's a whole number, return without decimals
    if quantity == int(quantity):
        return str(int(quantity))

    # Otherwise, return with up to 2 decimal places, removing trailing zeros
    return f"{quantity:.2f}".rstrip('0').rstrip('.')


def format_ingredient(ingredient: dict[str, Any]) -> str:
    """Render a structured ingredient as a single line.

    Args:
        ingredient: Dict with name and optional quantity and unit

    Returns:
        Ingredient line such as '2 cups rolled oats', or an empty string
        when the entry has no usable name
    """
    name = ingredient.get('name') or ingredient.get('item')
    if name in _NULL_VALUES:
        _LOGGER.debug("Skipping structured ingredient without name: %s",
                      ingredient)
        return ""

    parts = []
    formatted_qty = format_quantity(ingredient.get('quantity'))
    if formatted_qty:
        parts.append(formatted_qty)

    unit = ingredient.get('unit')
    if unit not in _NULL_VALUES:
        parts.append(str(unit).strip())

    parts.append(str(name).strip())
    return ' '.join(parts)


def coerce_lines(entries: Any) -> list[str]:
    """Convert a generated list into clean text lines.

    Strings are trimmed, structured ingredients are formatted, other
    values are converted with str(). Empty results are dropped. A value
    that is not a list yields an empty list.
    """
    if not isinstance(entries, list):
        return []

    lines = []
    for entry in entries:
        if isinstance(entry, dict):
            line = format_ingredient(entry)
        elif entry is None:
            continue
        else:
            line = str(entry).strip()
        if line:
            lines.append(line)
    return lines
