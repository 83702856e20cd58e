"""Models describing replies from the enrichment endpoint."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ReplyShape(str, Enum):
    """The reply variants the enrichment endpoint is known to produce."""

    STRUCTURED_DATA = "structured_data"
    TOP_LEVEL = "top_level"
    RESPONSE_TEXT = "response_text"
    REPAIRED_TEXT = "repaired_text"


class EnrichedFields(BaseModel):
    """Ingredients and instructions generated for a single dish."""

    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    shape: ReplyShape = Field(
        description="Which reply variant the fields were parsed from"
    )
