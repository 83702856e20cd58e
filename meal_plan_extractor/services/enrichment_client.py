"""
Enrichment Client.

This module requests missing ingredients and instructions for a named dish
from an external text generation endpoint. Every dish gets a bounded number
of attempts with exponential backoff between them; replies are decoded by
the reply parsers, including repair of truncated JSON.
"""
from __future__ import annotations

import logging
import time
from typing import Any

import requests

from ..const import (
    CONF_API_KEY,
    CONF_BACKOFF,
    CONF_ENDPOINT_URL,
    CONF_MAX_RETRIES,
    CONF_MAX_TOKENS,
    CONF_TEMPERATURE,
    CONF_TIMEOUT,
    DEFAULT_BACKOFF,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT,
    ENRICHMENT_CONTEXT,
    MAX_RETRIES,
)
from ..exceptions import ConfigurationError, EnrichmentFailure
from ..extractors.prompts import build_enrichment_prompt
from ..models.enrichment import EnrichedFields
from ..parsers import parse_reply

_LOGGER = logging.getLogger(__name__)


class EnrichmentClient:
    """Fills in recipe fields using an external text generation endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        api_key: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_retries: int = MAX_RETRIES,
        backoff: float = DEFAULT_BACKOFF,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the enrichment client.

        Args:
            endpoint_url: URL of the generation endpoint
            api_key: Optional bearer token sent with every request
            timeout: Request timeout in seconds
            temperature: Sampling temperature passed to the endpoint
            max_tokens: Token limit passed to the endpoint
            max_retries: Maximum number of requests per dish
            backoff: Base delay in seconds, doubled after every failed attempt
            session: Requests session to use, a new one is created if omitted

        Raises:
            ConfigurationError: If the endpoint URL is empty
        """
        if not endpoint_url or not endpoint_url.strip():
            raise ConfigurationError("Endpoint URL cannot be empty")

        self.endpoint_url = endpoint_url.strip()
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.backoff = backoff
        self.api_key = api_key
        # A caller supplied session is used as is and left open on close
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        _LOGGER.debug("Initialized EnrichmentClient for %s", self.endpoint_url)

    @classmethod
    def from_config(cls, config: dict[str, Any],
                    session: requests.Session | None = None) -> EnrichmentClient:
        """Create a client from a configuration dict produced by load_config."""
        return cls(
            endpoint_url=config[CONF_ENDPOINT_URL],
            api_key=config.get(CONF_API_KEY),
            timeout=config.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
            temperature=config.get(CONF_TEMPERATURE, DEFAULT_TEMPERATURE),
            max_tokens=config.get(CONF_MAX_TOKENS, DEFAULT_MAX_TOKENS),
            max_retries=config.get(CONF_MAX_RETRIES, MAX_RETRIES),
            backoff=config.get(CONF_BACKOFF, DEFAULT_BACKOFF),
            session=session,
        )

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> EnrichmentClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def build_request(self, title: str) -> dict[str, Any]:
        """Build the request body asking the endpoint to complete a dish."""
        return {
            "prompt": build_enrichment_prompt(title),
            "context": ENRICHMENT_CONTEXT,
            "options": {
                "temperature": self.temperature,
                "maxTokens": self.max_tokens,
            },
        }

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def _request(self, title: str) -> Any:
        response = self.session.post(
            self.endpoint_url,
            json=self.build_request(title),
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def enrich(self, title: str) -> EnrichedFields:
        """Generate ingredients and instructions for a dish.

        Makes at most ``max_retries`` requests. Transport errors, error
        statuses, non-JSON bodies and unparseable replies all count as a
        failed attempt.

        Args:
            title: The dish name

        Returns:
            The generated fields; lists are empty when the reply lacked them

        Raises:
            EnrichmentFailure: If every attempt failed
        """
        for attempt in range(self.max_retries):
            try:
                _LOGGER.debug("Requesting enrichment for '%s' (attempt %d/%d)",
                              title, attempt + 1, self.max_retries)
                fields = parse_reply(self._request(title))
                _LOGGER.info(
                    "Enriched '%s' with %d ingredients and %d instructions (%s reply)",
                    title, len(fields.ingredients), len(fields.instructions),
                    fields.shape.value)
                return fields
            except (requests.exceptions.RequestException, ValueError) as e:
                # ValueError covers undecodable bodies and ReplyParseError
                if attempt < self.max_retries - 1:
                    wait_time = self.backoff * 2 ** attempt
                    _LOGGER.warning(
                        "Enrichment attempt %d/%d for '%s' failed: %s, retrying after %.1fs",
                        attempt + 1, self.max_retries, title, e, wait_time)
                    if wait_time > 0:
                        time.sleep(wait_time)
                    continue
                _LOGGER.warning("Enrichment attempt %d/%d for '%s' failed: %s",
                                attempt + 1, self.max_retries, title, e)

        raise EnrichmentFailure(title, attempts=self.max_retries)
