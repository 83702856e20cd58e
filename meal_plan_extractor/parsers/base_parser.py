"""
Base Reply Parser.

This module defines the base interface that every enrichment reply parser
must implement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..models.enrichment import EnrichedFields, ReplyShape


class BaseReplyParser(ABC):
    """Abstract base class for enrichment reply parsers.

    Each parser handles exactly one reply shape: ``matches`` tells whether a
    reply has that shape and ``parse`` converts it into EnrichedFields.
    """

    shape: ReplyShape

    @abstractmethod
    def matches(self, reply: dict[str, Any]) -> bool:
        """Check whether the reply has the shape this parser handles.

        Args:
            reply: The decoded JSON reply of the enrichment endpoint

        Returns:
            True if ``parse`` should be used for this reply
        """

    @abstractmethod
    def parse(self, reply: dict[str, Any]) -> EnrichedFields:
        """Parse ingredients and instructions from the reply.

        Args:
            reply: A reply for which ``matches`` returned True

        Returns:
            The generated fields

        Raises:
            ReplyParseError: If the reply content cannot be parsed
        """
