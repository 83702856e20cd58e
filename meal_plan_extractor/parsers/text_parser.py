"""
Free-text Reply Parser.

This module handles replies of the form ``{"response": "..."}`` where the
generated text should contain a JSON object, possibly wrapped in Markdown
code fences, surrounded by prose, or cut off before it was complete.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from ..const import TRUNCATION_HINT_LENGTH
from ..exceptions import ReplyParseError
from ..models.enrichment import EnrichedFields, ReplyShape
from ..services.ingredient_formatter import coerce_lines
from .base_parser import BaseReplyParser

_LOGGER = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences such as ```json from generated text."""
    return _FENCE_PATTERN.sub("", text).strip()


def repair_truncated_json(text: str) -> str:
    """Close a JSON document that was cut off mid-way.

    Closes an unterminated string, drops a dangling comma, completes a
    dangling key with null and appends the closing brackets for every
    object or array still open, innermost first.

    Args:
        text: JSON text starting at its opening brace

    Returns:
        The repaired text; it is not guaranteed to be valid JSON

    Examples:
        >>> repair_truncated_json('{"ingredients":["2 eggs"],"instructions":["Whisk e')
        '{"ingredients":["2 eggs"],"instructions":["Whisk e"]}'
    """
    stack: list[str] = []
    in_string = False
    escaped = False

    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(char)
        elif char in ("}", "]") and stack and _CLOSERS[stack[-1]] == char:
            stack.pop()

    repaired = text
    if in_string:
        if escaped:
            repaired = repaired[:-1]
        repaired += '"'

    repaired = repaired.rstrip()
    if repaired.endswith(","):
        repaired = repaired[:-1].rstrip()
    if repaired.endswith(":"):
        repaired += " null"

    return repaired + "".join(_CLOSERS[opener] for opener in reversed(stack))


class ResponseTextParser(BaseReplyParser):
    """Parses ``{"response": "<generated text containing JSON>"}``."""

    shape = ReplyShape.RESPONSE_TEXT

    def matches(self, reply: dict[str, Any]) -> bool:
        return isinstance(reply.get("response"), str)

    def parse(self, reply: dict[str, Any]) -> EnrichedFields:
        text = strip_code_fences(reply["response"])

        start = text.find("{")
        if start == -1:
            raise ReplyParseError("No JSON object found in response text")

        end = text.rfind("}")
        candidate = text[start:end + 1] if end > start else text[start:]
        shape = ReplyShape.RESPONSE_TEXT

        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as err:
            tail = text[start:].rstrip()
            if tail.endswith("}"):
                raise ReplyParseError(
                    f"Invalid JSON in response text: {err}") from err

            if len(text) > TRUNCATION_HINT_LENGTH:
                _LOGGER.warning(
                    "Response of %d characters looks truncated by the token limit, "
                    "attempting repair", len(text))
            else:
                _LOGGER.debug("Response text is not closed, attempting repair")

            try:
                data = json.loads(repair_truncated_json(tail))
            except json.JSONDecodeError as repair_err:
                raise ReplyParseError(
                    f"Could not repair truncated JSON: {repair_err}") from repair_err
            shape = ReplyShape.REPAIRED_TEXT

        if not isinstance(data, dict):
            raise ReplyParseError(
                f"Expected a JSON object, got {type(data).__name__}")

        fields = EnrichedFields(
            ingredients=coerce_lines(data.get("ingredients")),
            instructions=coerce_lines(data.get("instructions")),
            shape=shape,
        )
        _LOGGER.debug("Parsed %s reply: %d ingredients, %d instructions",
                      shape.value, len(fields.ingredients), len(fields.instructions))
        return fields
