"""Configuration loading for the Meal Plan Extractor."""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import voluptuous as vol
from dotenv import load_dotenv

from .const import (
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
    ENV_PREFIX,
    MAX_RETRIES,
)
from .exceptions import ConfigurationError

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ENDPOINT_URL): vol.All(str, vol.Url()),
        vol.Optional(CONF_API_KEY, default=None): vol.Any(None, str),
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(CONF_TEMPERATURE, default=DEFAULT_TEMPERATURE): vol.All(
            vol.Coerce(float), vol.Range(min=0, max=2)),
        vol.Optional(CONF_MAX_TOKENS, default=DEFAULT_MAX_TOKENS): vol.All(
            vol.Coerce(int), vol.Range(min=1)),
        vol.Optional(CONF_MAX_RETRIES, default=MAX_RETRIES): vol.All(
            vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(CONF_BACKOFF, default=DEFAULT_BACKOFF): vol.All(
            vol.Coerce(float), vol.Range(min=0)),
    }
)

CONFIG_KEYS = (
    CONF_ENDPOINT_URL,
    CONF_API_KEY,
    CONF_TIMEOUT,
    CONF_TEMPERATURE,
    CONF_MAX_TOKENS,
    CONF_MAX_RETRIES,
    CONF_BACKOFF,
)


def env_var(key: str) -> str:
    """Return the environment variable backing a configuration key."""
    return f"{ENV_PREFIX}{key.upper()}"


def load_config(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    use_dotenv: bool = True,
) -> dict[str, Any]:
    """Load and validate the extractor configuration.

    Values are read from MEAL_PLAN_* environment variables (after loading a
    .env file) and then replaced by any non-None overrides.

    Args:
        overrides: Explicit values, e.g. from command line arguments
        environ: Environment to read instead of os.environ
        use_dotenv: Whether to load a .env file first

    Returns:
        Validated configuration dict with defaults filled in

    Raises:
        ConfigurationError: If a value is missing or invalid
    """
    if use_dotenv:
        load_dotenv()
    source = os.environ if environ is None else environ

    config: dict[str, Any] = {}
    for key in CONFIG_KEYS:
        value = source.get(env_var(key))
        if value not in (None, ""):
            config[key] = value

    if overrides:
        config.update(
            {key: value for key, value in overrides.items() if value is not None})

    try:
        validated = CONFIG_SCHEMA(config)
    except vol.Invalid as err:
        raise ConfigurationError(f"Invalid configuration: {err}") from err

    _LOGGER.debug("Loaded configuration for endpoint %s",
                  validated[CONF_ENDPOINT_URL])
    return validated
