"""Enrichment reply parsers."""
from __future__ import annotations

from typing import Any

from ..exceptions import ReplyParseError
from ..models.enrichment import EnrichedFields
from .base_parser import BaseReplyParser
from .structured_parser import StructuredDataParser, TopLevelParser
from .text_parser import ResponseTextParser, repair_truncated_json, strip_code_fences

# Evaluated in order, the first parser whose shape matches wins
REPLY_PARSERS: list[BaseReplyParser] = [
    StructuredDataParser(),
    TopLevelParser(),
    ResponseTextParser(),
]


def parse_reply(reply: Any) -> EnrichedFields:
    """Parse an enrichment reply of any known shape.

    Args:
        reply: The decoded JSON reply of the enrichment endpoint

    Returns:
        The generated ingredients and instructions

    Raises:
        ReplyParseError: If the reply has no known shape or cannot be parsed
    """
    if not isinstance(reply, dict):
        raise ReplyParseError(
            f"Expected a JSON object reply, got {type(reply).__name__}")

    for parser in REPLY_PARSERS:
        if not parser.matches(reply):
            continue
        try:
            return parser.parse(reply)
        except ReplyParseError:
            raise
        except (TypeError, ValueError, AttributeError, OverflowError) as err:
            raise ReplyParseError(
                f"Malformed {parser.shape.value} reply: {err}") from err

    raise ReplyParseError(
        f"Reply matched no known shape (keys: {sorted(reply)})")


__all__ = [
    "BaseReplyParser",
    "REPLY_PARSERS",
    "ResponseTextParser",
    "StructuredDataParser",
    "TopLevelParser",
    "parse_reply",
    "repair_truncated_json",
    "strip_code_fences",
]
