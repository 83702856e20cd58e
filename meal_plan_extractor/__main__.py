"""Allow running the extractor with ``python -m meal_plan_extractor``."""
import sys

from .cli import main

sys.exit(main())
