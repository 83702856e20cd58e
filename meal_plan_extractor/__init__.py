"""The Meal Plan Extractor package."""
from __future__ import annotations

from .config import load_config
from .exceptions import (
    ConfigurationError,
    EnrichmentFailure,
    MealPlanExtractorError,
    ReplyParseError,
)
from .models.recipe import (
    Classification,
    ClassificationSignals,
    ExtractionResult,
    Recipe,
)
from .services.enrichment_client import EnrichmentClient
from .services.recipe_service import async_classify_and_extract, classify_and_extract

__version__ = "1.0.0"

__all__ = [
    "Classification",
    "ClassificationSignals",
    "ConfigurationError",
    "EnrichmentClient",
    "EnrichmentFailure",
    "ExtractionResult",
    "MealPlanExtractorError",
    "Recipe",
    "ReplyParseError",
    "async_classify_and_extract",
    "classify_and_extract",
    "load_config",
]
