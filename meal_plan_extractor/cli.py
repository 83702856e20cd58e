"""
Meal Plan Extractor - Extract recipes from generated meal plans

Reads meal plan text from a file or stdin, splits it into recipes and
writes the validated result as JSON.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_config
from .const import CONF_ENDPOINT_URL
from .exceptions import ConfigurationError
from .services.enrichment_client import EnrichmentClient
from .services.recipe_service import classify_and_extract

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 2


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="meal-plan-extractor",
        description="Extract structured recipes from meal plan text into JSON"
    )
    parser.add_argument(
        "file",
        help="Meal plan text file, or - to read from stdin"
    )
    parser.add_argument(
        "--endpoint",
        help="Enrichment endpoint URL (can also be set via MEAL_PLAN_ENDPOINT_URL env var)"
    )
    parser.add_argument(
        "--no-enrich",
        action="store_true",
        help="Do not call the enrichment endpoint; incomplete recipes are dropped"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="File to write the JSON result to (default: stdout)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the meal plan extractor."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        text = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read %s: %s", args.file, e)
        return EXIT_INPUT_ERROR

    client = None
    if not args.no_enrich:
        try:
            config = load_config({CONF_ENDPOINT_URL: args.endpoint})
        except ConfigurationError as e:
            logger.error("%s", e)
            return EXIT_CONFIG_ERROR
        client = EnrichmentClient.from_config(config)

    try:
        result = classify_and_extract(text, enrichment_client=client)
    finally:
        if client is not None:
            client.close()

    output = json.dumps(
        result.model_dump(mode="json", by_alias=True),
        indent=2,
        ensure_ascii=False,
    )
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %d recipes to %s", result.total_recipes, args.output)
    else:
        print(output)

    if result.requires_ai:
        logger.info("Text is not a meal plan; use AI recipe generation instead")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
