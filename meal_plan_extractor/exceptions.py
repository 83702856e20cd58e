"""Exceptions raised by the Meal Plan Extractor."""
from __future__ import annotations


class MealPlanExtractorError(Exception):
    """Base class for all Meal Plan Extractor errors."""


class ConfigurationError(MealPlanExtractorError, ValueError):
    """Raised when the extractor configuration is missing or invalid."""


class ReplyParseError(MealPlanExtractorError, ValueError):
    """Raised when an enrichment reply cannot be turned into recipe fields."""


class EnrichmentFailure(MealPlanExtractorError):
    """Raised when enrichment for a dish failed on every attempt.

    Attributes:
        title: The dish the enrichment was requested for
        attempts: Number of attempts made before giving up
    """

    def __init__(self, title: str, attempts: int) -> None:
        super().__init__(
            f"Enrichment failed for '{title}' after {attempts} attempts")
        self.title = title
        self.attempts = attempts
