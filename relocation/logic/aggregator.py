"""
Score Aggregator

Combines weighted dimension scores into one 0-10 score per country.
Applies the tax tie-break and clamping.
"""

from typing import Optional

from .constants import (
    SCORE_MAX,
    SCORE_MIN,
    SLIDER_MAX,
    TAX_TIEBREAK_MIDPOINT,
    TAX_TIEBREAK_SCALE,
    Dimension,
    clamp,
)
from .contracts import (
    CountryRecord,
    DimensionBreakdown,
    RelocationProfile,
    ScoredCountry,
    WeightVector,
)
from .dimension_scorers import score_dimensions
from .weights import compute_weights


def aggregate_score(
    breakdown: DimensionBreakdown,
    weights: WeightVector,
    profile: RelocationProfile
) -> Optional[float]:
    """
    Weighted mean over dimensions that are present AND have a positive weight.

    Args:
        breakdown: Dimension scores for one country
        weights: Weights for the profile
        profile: Profile, used for the tax tie-break

    Returns:
        Score in [0, 10], or None when no dimension contributes
    """
    total = 0.0
    weight_sum = 0.0

    for dimension, value in breakdown.items():
        weight = weights.get(dimension)
        if value is None or weight is None or weight <= 0:
            continue
        total += value * weight
        weight_sum += weight

    if not weight_sum:
        return None

    score = total / weight_sum
    score += tax_tiebreak(breakdown, profile)

    return clamp(score, SCORE_MIN, SCORE_MAX)


def tax_tiebreak(breakdown: DimensionBreakdown, profile: RelocationProfile) -> float:
    """
    Small bonus/penalty pushing ties in the direction of a lower-tax request.

    Proportional to the tax score's distance from the midpoint, scaled by the
    tax slider. Zero unless the lower-taxes flag is active.
    """
    importance = profile.active_tax_importance
    tax = breakdown.get(Dimension.TAX)
    if importance is None or tax is None:
        return 0.0

    centered = (tax - TAX_TIEBREAK_MIDPOINT) / TAX_TIEBREAK_MIDPOINT
    return centered * (importance / SLIDER_MAX) * TAX_TIEBREAK_SCALE


def score_country(
    profile: RelocationProfile,
    country: CountryRecord,
    weights: Optional[WeightVector] = None
) -> Optional[ScoredCountry]:
    """
    Compute all dimension scores and aggregate into a base score.

    Args:
        profile: Canonical user profile
        country: Country to score
        weights: Precomputed weights for the profile (computed if omitted)

    Returns:
        ScoredCountry, or None when the country produces no score
    """
    if weights is None:
        weights = compute_weights(profile)

    breakdown, explanations = score_dimensions(profile, country)
    base_score = aggregate_score(breakdown, weights, profile)
    if base_score is None:
        return None

    return ScoredCountry(
        country=country,
        breakdown=breakdown,
        explanations=explanations,
        base_score=base_score,
    )
