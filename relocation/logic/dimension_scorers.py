"""
Dimension Scorers

Derives the per-dimension 0-10 score vector for one country and profile,
plus a short qualitative explanation per dimension.
All logic is deterministic - no AI/ML components.
"""

from typing import Dict, Optional, Tuple

from .constants import (
    MILD_CLIMATE_DEFAULT,
    MODERATE_THRESHOLD,
    NEUTRAL_CLIMATE_SCORE,
    NEUTRAL_LANGUAGE_SCORE,
    STRONG_THRESHOLD,
    Dimension,
)
from .contracts import (
    ClimatePreference,
    CountryRecord,
    DimensionBreakdown,
    DimensionExplanations,
    RelocationProfile,
)


# (strong, moderate, weak) wording per dimension
EXPLANATION_TEXT: Dict[Dimension, Tuple[str, str, str]] = {
    Dimension.TAX: (
        "Very efficient taxes compared to many alternatives.",
        "Taxes are middling - not terrible, not amazing.",
        "Taxes are on the heavier side here.",
    ),
    Dimension.COST_OF_LIVING: (
        "Day-to-day costs are low relative to income potential.",
        "Cost of living is moderate.",
        "Cost of living can feel high versus local incomes.",
    ),
    Dimension.INCOME_GROWTH: (
        "Good potential for income growth and future earning.",
        "Some opportunities for income growth.",
        "Limited upside for income growth compared to other options.",
    ),
    Dimension.REMOTE_FRIENDLY: (
        "Strong remote-work ecosystem, infrastructure and banking.",
        "Remote work is generally fine here.",
        "Remote work support and infrastructure can be clunky.",
    ),
    Dimension.SAFETY: (
        "Very solid scores on safety and stability.",
        "Generally safe with some caveats.",
        "Safety, politics or stability are more fragile.",
    ),
    Dimension.LIFESTYLE: (
        "Lifestyle and general day-to-day vibe are a strong point here.",
        "Lifestyle is decent but not exceptional.",
        "Lifestyle or culture might feel misaligned with what many expats want.",
    ),
    Dimension.CLIMATE_MATCH: (
        "Climate is highly aligned with the weather you said you prefer.",
        "Climate is workable but not perfect for your preferences.",
        "Climate is quite different from what you said you want.",
    ),
    Dimension.LANGUAGE_MATCH: (
        "Language fit should be very comfortable for you.",
        "You can probably get by with your languages, but expect some friction.",
        "Language fit could be challenging in daily life.",
    ),
    Dimension.EXPAT_SCENE: (
        "Big, active expat community - easy to meet people.",
        "Some expat community exists.",
        "Expat community is small or niche.",
    ),
    Dimension.SOCIAL_SCENE: (
        "Strong social and nightlife scene if you want it.",
        "Social life is okay but not a huge highlight.",
        "Social scene is fairly quiet or limited.",
    ),
    Dimension.LGBT_RIGHTS: (
        "LGBTQ+ protections and social climate are strong here.",
        "LGBTQ+ situation is mixed - okay in some areas, weaker in others.",
        "LGBTQ+ protections and/or social acceptance are relatively weak.",
    ),
    Dimension.HEALTHCARE_SYSTEM: (
        "Healthcare quality and access are strong here, especially for residents.",
        "Healthcare is workable, but expect more private spending and variation in quality.",
        "Healthcare system can feel limited or patchy, especially for newcomers.",
    ),
    Dimension.PUBLIC_TRANSPORT: (
        "Public transport is reliable and makes car-free living realistic.",
        "Public transport is okay but may require some compromises.",
        "Public transport is weak - life without a car can be challenging.",
    ),
    Dimension.DIGITAL_SERVICES: (
        "Digital services and bureaucracy are very modern and online-first.",
        "Digital services are mixed - some processes are online, others still offline.",
        "Digital services are limited; expect more in-person paperwork.",
    ),
    Dimension.INFRASTRUCTURE_CLEAN: (
        "Streets, public spaces and infrastructure are generally clean and well maintained.",
        "Infrastructure is mostly fine with some rough edges.",
        "Cleanliness and maintenance can be an issue in parts of this country.",
    ),
}


def score_dimensions(
    profile: RelocationProfile,
    country: CountryRecord
) -> Tuple[DimensionBreakdown, DimensionExplanations]:
    """
    Build the full dimension breakdown for a country.

    Core dimensions are always present. Derived and optional dimensions are
    only present when the country carries the data (and, for climate and
    language, when the profile makes them meaningful).

    Args:
        profile: Canonical user profile
        country: Catalog entry to score

    Returns:
        (breakdown, explanations) keyed by Dimension
    """
    breakdown: DimensionBreakdown = {
        Dimension.TAX: country.tax_score,
        Dimension.COST_OF_LIVING: country.cost_of_living_score,
        Dimension.INCOME_GROWTH: country.income_growth_score,
        Dimension.REMOTE_FRIENDLY: country.remote_friendly_score,
        Dimension.SAFETY: country.safety_score,
        Dimension.LIFESTYLE: country.lifestyle_score,
    }

    optional = {
        Dimension.CLIMATE_MATCH: score_climate_match(profile, country),
        Dimension.LANGUAGE_MATCH: score_language_match(profile, country),
        Dimension.EXPAT_SCENE: country.expat_scene_score,
        Dimension.SOCIAL_SCENE: country.social_scene_score,
        Dimension.LGBT_RIGHTS: country.lgbt_score,
        Dimension.HEALTHCARE_SYSTEM: country.healthcare_score,
        Dimension.PUBLIC_TRANSPORT: country.public_transport_score,
        Dimension.DIGITAL_SERVICES: country.digital_services_score,
        Dimension.INFRASTRUCTURE_CLEAN: country.infrastructure_clean_score,
    }
    for dimension, value in optional.items():
        if value is not None:
            breakdown[dimension] = value

    explanations: DimensionExplanations = {
        dimension: explain(dimension, value)
        for dimension, value in breakdown.items()
    }

    return breakdown, explanations


def score_climate_match(
    profile: RelocationProfile,
    country: CountryRecord
) -> Optional[float]:
    """
    Climate fit for the user's stated preference.

    With no preference the mean of whatever seasonal scores exist is used.
    """
    preference = profile.climate_preference

    if preference == ClimatePreference.COLD:
        return _first_not_none(country.cold_climate_score, country.mild_climate_score, NEUTRAL_CLIMATE_SCORE)
    if preference == ClimatePreference.WARM:
        return _first_not_none(country.warm_climate_score, country.mild_climate_score, NEUTRAL_CLIMATE_SCORE)
    if preference == ClimatePreference.MILD:
        return _first_not_none(country.mild_climate_score, MILD_CLIMATE_DEFAULT)

    values = [
        v for v in (
            country.cold_climate_score,
            country.warm_climate_score,
            country.mild_climate_score,
        )
        if v is not None
    ]
    if not values:
        return None
    return sum(values) / len(values)


def score_language_match(
    profile: RelocationProfile,
    country: CountryRecord
) -> Optional[float]:
    """English accessibility, only for users who speak English."""
    if not profile.speaks_reference_language:
        return None
    return _first_not_none(country.english_score, NEUTRAL_LANGUAGE_SCORE)


def explain(dimension: Dimension, value: float) -> str:
    """Pick the strong / moderate / weak wording for a value."""
    strong, moderate, weak = EXPLANATION_TEXT[dimension]
    if value >= STRONG_THRESHOLD:
        return strong
    if value >= MODERATE_THRESHOLD:
        return moderate
    return weak


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _first_not_none(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None
