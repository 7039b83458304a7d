"""
Weight Calculator

Maps a profile's reason flags and importance sliders to one weight per
dimension. Rules are applied in a fixed order; later rules may adjust the
results of earlier ones.
"""

from .constants import (
    CAREER_GROWTH_BONUS,
    CLIMATE_WEIGHT_RANGE,
    COL_WEIGHT_RANGE,
    CORE_BASE_WEIGHT,
    CORE_DIMENSIONS,
    DEVELOPMENT_BONUS,
    EXPAT_SCENE_WEIGHT,
    GENERAL_QUALITY_DIMENSIONS,
    INFRASTRUCTURE_BONUS_FACTOR,
    LANGUAGE_FLEXIBLE_WEIGHT,
    LANGUAGE_MUST_HAVE_WEIGHT,
    LANGUAGE_NICE_TO_HAVE_WEIGHT,
    LGBT_LIFESTYLE_BONUS,
    LGBT_WEIGHT_BASE,
    LGBT_WEIGHT_DIVISOR,
    NOT_IMPORTANT_RESIDUAL_WEIGHT,
    OPTIONAL_BASE_WEIGHT,
    OPTIONAL_DIMENSIONS,
    PUBLIC_TRANSPORT_IMPORTANT_BONUS,
    PUBLIC_TRANSPORT_NICE_BONUS,
    REMOTE_WORK_BONUS,
    SAFETY_HIGH_MULTIPLIER,
    SAFETY_MEDIUM_MULTIPLIER,
    SAFETY_NOT_IMPORTANT_WEIGHT,
    SOCIAL_SCENE_WEIGHT,
    TAX_DAMPING_FACTOR,
    TAX_DAMPING_SLIDER_THRESHOLD,
    TAX_WEIGHT_RANGE,
    Dimension,
    linear_weight,
)
from .contracts import (
    LanguagePriority,
    ReasonFlag,
    RelocationProfile,
    SafetyIntensity,
    WeightVector,
)


LANGUAGE_WEIGHTS = {
    LanguagePriority.MUST_HAVE: LANGUAGE_MUST_HAVE_WEIGHT,
    LanguagePriority.NICE_TO_HAVE: LANGUAGE_NICE_TO_HAVE_WEIGHT,
    LanguagePriority.FLEXIBLE: LANGUAGE_FLEXIBLE_WEIGHT,
}


def compute_weights(profile: RelocationProfile) -> WeightVector:
    """
    Build a fresh WeightVector for a profile.

    Every dimension is present in the result; 0 means the dimension is
    excluded from aggregation.

    Args:
        profile: Canonical user profile

    Returns:
        Dict mapping Dimension to a non-negative weight
    """
    weights: WeightVector = {d: CORE_BASE_WEIGHT for d in CORE_DIMENSIONS}
    weights.update({d: OPTIONAL_BASE_WEIGHT for d in OPTIONAL_DIMENSIONS})

    # Taxes
    tax_importance = profile.active_tax_importance
    if tax_importance is not None:
        weights[Dimension.TAX] = linear_weight(tax_importance, TAX_WEIGHT_RANGE)
    elif profile.has(ReasonFlag.TAX_NOT_IMPORTANT):
        weights[Dimension.TAX] = NOT_IMPORTANT_RESIDUAL_WEIGHT

    # Cost of living
    col_importance = profile.active_col_importance
    if col_importance is not None:
        weights[Dimension.COST_OF_LIVING] = linear_weight(col_importance, COL_WEIGHT_RANGE)
    elif profile.has(ReasonFlag.COL_NOT_IMPORTANT):
        weights[Dimension.COST_OF_LIVING] = NOT_IMPORTANT_RESIDUAL_WEIGHT

    # Climate
    climate_importance = profile.active_climate_importance
    if climate_importance is not None:
        weights[Dimension.CLIMATE_MATCH] = linear_weight(climate_importance, CLIMATE_WEIGHT_RANGE)

    # Income / remote work
    if profile.has(ReasonFlag.CAREER_GROWTH):
        weights[Dimension.INCOME_GROWTH] += CAREER_GROWTH_BONUS
    if profile.has(ReasonFlag.REMOTE_WORK):
        weights[Dimension.REMOTE_FRIENDLY] += REMOTE_WORK_BONUS

    # Safety
    if profile.safety_intensity == SafetyIntensity.HIGH:
        weights[Dimension.SAFETY] *= SAFETY_HIGH_MULTIPLIER
    elif profile.safety_intensity == SafetyIntensity.MEDIUM:
        weights[Dimension.SAFETY] *= SAFETY_MEDIUM_MULTIPLIER
    elif profile.safety_intensity == SafetyIntensity.NOT_IMPORTANT:
        weights[Dimension.SAFETY] = SAFETY_NOT_IMPORTANT_WEIGHT

    # Language (a language score only exists for English speakers)
    if profile.speaks_reference_language and profile.language_priority is not None:
        weights[Dimension.LANGUAGE_MATCH] = LANGUAGE_WEIGHTS[profile.language_priority]

    # Social / expat scene
    if profile.has(ReasonFlag.EXPAT_COMMUNITY):
        weights[Dimension.EXPAT_SCENE] = EXPAT_SCENE_WEIGHT
    if profile.has(ReasonFlag.SOCIAL_LIFE):
        weights[Dimension.SOCIAL_SCENE] = SOCIAL_SCENE_WEIGHT

    # Development / infrastructure
    if profile.has(ReasonFlag.DEVELOPMENT_CARE_YES) or profile.has(ReasonFlag.DEVELOPMENT_CARE_SOME):
        weights[Dimension.HEALTHCARE_SYSTEM] += DEVELOPMENT_BONUS
        weights[Dimension.DIGITAL_SERVICES] += DEVELOPMENT_BONUS
        weights[Dimension.INFRASTRUCTURE_CLEAN] += DEVELOPMENT_BONUS * INFRASTRUCTURE_BONUS_FACTOR

    if profile.has(ReasonFlag.DEV_PUBLIC_TRANSPORT) or profile.has(ReasonFlag.PUBLIC_TRANSPORT_IMPORTANT):
        weights[Dimension.PUBLIC_TRANSPORT] += PUBLIC_TRANSPORT_IMPORTANT_BONUS
    elif profile.has(ReasonFlag.PUBLIC_TRANSPORT_NICE_TO_HAVE):
        weights[Dimension.PUBLIC_TRANSPORT] += PUBLIC_TRANSPORT_NICE_BONUS

    # LGBTQ+ rights
    lgbt_importance = profile.active_lgbt_importance
    if lgbt_importance is not None:
        weights[Dimension.LGBT_RIGHTS] = LGBT_WEIGHT_BASE + lgbt_importance / LGBT_WEIGHT_DIVISOR
        weights[Dimension.LIFESTYLE] += LGBT_LIFESTYLE_BONUS

    # Extreme tax focus damps the general quality dimensions
    if tax_importance is not None and tax_importance >= TAX_DAMPING_SLIDER_THRESHOLD:
        for dimension in GENERAL_QUALITY_DIMENSIONS:
            weights[dimension] *= TAX_DAMPING_FACTOR

    return weights
