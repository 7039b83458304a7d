"""
Scoring Engine Constants

Defines dimension names, weight rules, thresholds and defaults used by the
country matching engine. All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Tuple


# =============================================================================
# DIMENSIONS
# =============================================================================

class Dimension(str, Enum):
    """Axes a country is compared on. Values are the public breakdown keys."""
    TAX = "tax"
    COST_OF_LIVING = "costOfLiving"
    INCOME_GROWTH = "incomeGrowth"
    REMOTE_FRIENDLY = "remoteFriendly"
    SAFETY = "safety"
    LIFESTYLE = "lifestyle"

    CLIMATE_MATCH = "climateMatch"
    LANGUAGE_MATCH = "languageMatch"
    EXPAT_SCENE = "expatScene"
    SOCIAL_SCENE = "socialScene"
    LGBT_RIGHTS = "lgbtRights"

    HEALTHCARE_SYSTEM = "healthcareSystem"
    PUBLIC_TRANSPORT = "publicTransport"
    DIGITAL_SERVICES = "digitalServices"
    INFRASTRUCTURE_CLEAN = "infrastructureClean"


# Always present in a breakdown
CORE_DIMENSIONS: Tuple[Dimension, ...] = (
    Dimension.TAX,
    Dimension.COST_OF_LIVING,
    Dimension.INCOME_GROWTH,
    Dimension.REMOTE_FRIENDLY,
    Dimension.SAFETY,
    Dimension.LIFESTYLE,
)

# Present only when derivable for a (country, profile) pair
OPTIONAL_DIMENSIONS: Tuple[Dimension, ...] = tuple(
    d for d in Dimension if d not in CORE_DIMENSIONS
)

# Dimensions dampened when the tax slider is maxed out
GENERAL_QUALITY_DIMENSIONS: Tuple[Dimension, ...] = (
    Dimension.COST_OF_LIVING,
    Dimension.INCOME_GROWTH,
    Dimension.REMOTE_FRIENDLY,
    Dimension.SAFETY,
    Dimension.LIFESTYLE,
)

SCORE_MIN = 0.0
SCORE_MAX = 10.0


# =============================================================================
# EXPLANATION THRESHOLDS
# =============================================================================

STRONG_THRESHOLD = 8.3
MODERATE_THRESHOLD = 6.3


# =============================================================================
# CLIMATE / LANGUAGE DEFAULTS
# =============================================================================

NEUTRAL_CLIMATE_SCORE = 5.0       # cold/warm preference, no sub-score at all
MILD_CLIMATE_DEFAULT = 7.0        # mild preference, no mild sub-score
NEUTRAL_LANGUAGE_SCORE = 5.0      # speaks English, country has no english score
REFERENCE_LANGUAGE = "english"


# =============================================================================
# IMPORTANCE SLIDERS
# =============================================================================

SLIDER_MIN = 1.0
SLIDER_MAX = 10.0

DEFAULT_TAX_IMPORTANCE = 7.0
DEFAULT_COL_IMPORTANCE = 7.0
DEFAULT_CLIMATE_IMPORTANCE = 7.0
DEFAULT_LGBT_IMPORTANCE = 8.0


# =============================================================================
# WEIGHT RULES
# =============================================================================

CORE_BASE_WEIGHT = 1.0
OPTIONAL_BASE_WEIGHT = 0.0

# (weight at slider=1, weight at slider=10)
TAX_WEIGHT_RANGE: Tuple[float, float] = (2.0, 7.0)
COL_WEIGHT_RANGE: Tuple[float, float] = (1.5, 5.0)
CLIMATE_WEIGHT_RANGE: Tuple[float, float] = (1.0, 4.5)

# "not important" keeps a residual weight, never zero
NOT_IMPORTANT_RESIDUAL_WEIGHT = 0.2

CAREER_GROWTH_BONUS = 1.5
REMOTE_WORK_BONUS = 1.5

SAFETY_HIGH_MULTIPLIER = 1.8
SAFETY_MEDIUM_MULTIPLIER = 1.2
SAFETY_NOT_IMPORTANT_WEIGHT = 0.3

LANGUAGE_MUST_HAVE_WEIGHT = 1.8
LANGUAGE_NICE_TO_HAVE_WEIGHT = 1.2
LANGUAGE_FLEXIBLE_WEIGHT = 0.4

EXPAT_SCENE_WEIGHT = 1.4
SOCIAL_SCENE_WEIGHT = 1.3

DEVELOPMENT_BONUS = 1.4
INFRASTRUCTURE_BONUS_FACTOR = 0.9
PUBLIC_TRANSPORT_IMPORTANT_BONUS = 2.0
PUBLIC_TRANSPORT_NICE_BONUS = 1.0

# rights weight = LGBT_WEIGHT_BASE + slider / LGBT_WEIGHT_DIVISOR  (~1.3 to ~3.8)
LGBT_WEIGHT_BASE = 1.0
LGBT_WEIGHT_DIVISOR = 3.5
LGBT_LIFESTYLE_BONUS = 0.5

TAX_DAMPING_SLIDER_THRESHOLD = 9.0
TAX_DAMPING_FACTOR = 0.65


# =============================================================================
# AGGREGATION
# =============================================================================

TAX_TIEBREAK_MIDPOINT = 5.0
TAX_TIEBREAK_SCALE = 1.0


# =============================================================================
# DISQUALIFICATION
# =============================================================================

# (minimum slider, minimum rights score, reason), checked top to bottom
LGBT_DISQUALIFICATION_RULES: Tuple[Tuple[float, float, str], ...] = (
    (
        9.0,
        7.5,
        "LGBTQ+ protections and social acceptance are below the strong level you asked for.",
    ),
    (
        7.0,
        6.0,
        "LGBTQ+ protections and/or marriage rights are below the level you marked as important.",
    ),
)


# =============================================================================
# RANKING CONFIGURATION
# =============================================================================

DISQUALIFIED_TOP_N = 3

# Advisory payload limits
ADVISORY_MAX_DISQUALIFIED = 30
COMMENTARY_MAX_WINNERS = 10
COMMENTARY_MAX_DISQUALIFIED = 5
COMMENTARY_GUARANTEED_TOP = 3


# =============================================================================
# RESPONSE MESSAGES
# =============================================================================

MESSAGE_SUCCESS = "Matches calculated successfully."
MESSAGE_NO_WINNERS = (
    "We couldn't confidently match you to any country with the current data."
)
MESSAGE_INVALID_PROFILE = "Invalid request body."
MESSAGE_INTERNAL_ERROR = "Unexpected error while ranking countries for your profile."

SUMMARY_DEFAULT = (
    "Here are your top country matches based on your answers. The engine balanced "
    "taxes, cost of living, safety, lifestyle, climate and LGBT fit according to "
    "what you said matters."
)
SUMMARY_NO_MATCHES = (
    "We couldn't generate AI insights because there were no country matches."
)


ENGINE_VERSION = "1.0.0"


def linear_weight(importance: float, weight_range: Tuple[float, float]) -> float:
    """Map a 1-10 slider linearly onto ``weight_range``."""
    low, high = weight_range
    return low + (importance - SLIDER_MIN) * (high - low) / (SLIDER_MAX - SLIDER_MIN)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` to [low, high]; NaN collapses to ``low``."""
    if value != value:
        return low
    return min(high, max(low, value))

