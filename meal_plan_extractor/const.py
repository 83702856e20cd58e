"""Constants for the Meal Plan Extractor."""

# Configuration keys
CONF_ENDPOINT_URL = "endpoint_url"
CONF_API_KEY = "api_key"
CONF_TIMEOUT = "timeout"
CONF_TEMPERATURE = "temperature"
CONF_MAX_TOKENS = "max_tokens"
CONF_MAX_RETRIES = "max_retries"
CONF_BACKOFF = "backoff"

# Environment variables backing the configuration keys
ENV_PREFIX = "MEAL_PLAN_"

# Default values
DEFAULT_TIMEOUT = 30
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2000
DEFAULT_BACKOFF = 1.0
MAX_RETRIES = 2

# Enrichment request context sent along with every prompt
ENRICHMENT_CONTEXT = "meal_plan_recipe_enrichment"

# Replies longer than this that fail to parse were most likely cut off
# by the endpoint's token limit
TRUNCATION_HINT_LENGTH = 6000

# Meal types
MEAL_TYPES = ("Breakfast", "Lunch", "Dinner", "Snack")
DEFAULT_MEAL_TYPE = "Dinner"
DEFAULT_DAY_TAG = "meal plan"

# Placeholder content substituted when enrichment is exhausted
PLACEHOLDER_INGREDIENTS = "⚠️ Failed to generate ingredients - please retry"
PLACEHOLDER_INSTRUCTIONS = "⚠️ Failed to generate instructions - please retry"

# Markers that render a recipe line unusable
CORRUPTION_MARKERS = ("Failed to generate", "⚠", "please retry")
CORRUPTION_MARKERS_CASELESS = ("error",)

# Classifier thresholds
MIN_DAY_COUNT = 3
MIN_MEAL_TYPE_COUNT = 8
MIN_DAY_HEADER_COUNT = 3
MIN_LISTED_MEAL_COUNT = 3

# Standalone dish name heuristics
DISH_NAME_MIN_LENGTH = 5
DISH_NAME_MAX_LENGTH = 99
DISH_KEYWORDS = [
    "with", "and", "chicken", "beef", "salmon", "pasta", "salad", "soup",
    "sandwich", "oatmeal", "eggs", "pancakes", "wrap", "turkey", "avocado",
    "vegetables", "fresh", "grilled", "baked", "roasted", "stir", "rice",
    "quinoa", "beans",
]

# Sections of an open recipe
SECTION_NONE = ""
SECTION_INGREDIENTS = "ingredients"
SECTION_INSTRUCTIONS = "instructions"
SECTION_NOTES = "notes"

# Event names passed to event callbacks
EVENT_CLASSIFIED = "classified"
EVENT_RECIPE_FINALIZED = "recipe_finalized"
EVENT_RECIPE_REJECTED = "recipe_rejected"
EVENT_ENRICHMENT_FAILED = "enrichment_failed"
EVENT_DUPLICATE_REMOVED = "duplicate_removed"

# Event data keys
DATA_TITLE = "title"
DATA_RECIPE = "recipe"
DATA_REASON = "reason"
DATA_ERROR = "error"
DATA_SIGNALS = "signals"
DATA_IS_MEAL_PLAN = "is_meal_plan"
