"""
Structured Reply Parsers.

Parsers for replies where the endpoint already returned ingredient and
instruction arrays, either nested under ``structuredData`` or at the top
level. No JSON decoding is needed for these shapes.
"""
from __future__ import annotations

import logging
from typing import Any

from ..models.enrichment import EnrichedFields, ReplyShape
from ..services.ingredient_formatter import coerce_lines
from .base_parser import BaseReplyParser

_LOGGER = logging.getLogger(__name__)


class StructuredDataParser(BaseReplyParser):
    """Parses ``{"structuredData": {"ingredients": [...], "instructions": [...]}}``."""

    shape = ReplyShape.STRUCTURED_DATA

    def matches(self, reply: dict[str, Any]) -> bool:
        structured = reply.get("structuredData")
        return (isinstance(structured, dict)
                and isinstance(structured.get("instructions"), list))

    def parse(self, reply: dict[str, Any]) -> EnrichedFields:
        structured = reply["structuredData"]
        fields = EnrichedFields(
            ingredients=coerce_lines(structured.get("ingredients")),
            instructions=coerce_lines(structured["instructions"]),
            shape=self.shape,
        )
        _LOGGER.debug("Parsed structured data reply: %d ingredients, %d instructions",
                      len(fields.ingredients), len(fields.instructions))
        return fields


class TopLevelParser(BaseReplyParser):
    """Parses ``{"ingredients": [...], "instructions": [...]}``."""

    shape = ReplyShape.TOP_LEVEL

    def matches(self, reply: dict[str, Any]) -> bool:
        return isinstance(reply.get("instructions"), list)

    def parse(self, reply: dict[str, Any]) -> EnrichedFields:
        fields = EnrichedFields(
            ingredients=coerce_lines(reply.get("ingredients")),
            instructions=coerce_lines(reply["instructions"]),
            shape=self.shape,
        )
        _LOGGER.debug("Parsed top-level reply: %d ingredients, %d instructions",
                      len(fields.ingredients), len(fields.instructions))
        return fields
