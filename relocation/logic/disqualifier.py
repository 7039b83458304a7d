"""
Disqualifier

Hard non-negotiable rules. A country failing a rule is removed from the
winners entirely, whatever its score.
"""

from typing import Optional

from .constants import (
    LGBT_DISQUALIFICATION_RULES,
    SLIDER_MAX,
    SLIDER_MIN,
    Dimension,
    clamp,
)
from .contracts import ReasonFlag, RelocationProfile, ScoredCountry


def disqualification_reason(
    profile: RelocationProfile,
    rights_score: Optional[float],
    fallback_score: Optional[float] = None
) -> Optional[str]:
    """
    Decide pass/fail for the LGBTQ+ rights rule.

    Only evaluated when the profile carries the rights-priority flag.

    Args:
        profile: Canonical user profile
        rights_score: The country's rights score, if known
        fallback_score: Used when the rights score is missing (lifestyle)

    Returns:
        Human-readable reason when disqualified, else None
    """
    if not profile.has(ReasonFlag.BETTER_LGBTQ):
        return None

    score = rights_score if rights_score is not None else fallback_score
    if score is None:
        return None

    importance = clamp(profile.lgbt_importance, SLIDER_MIN, SLIDER_MAX)
    for min_importance, min_score, reason in LGBT_DISQUALIFICATION_RULES:
        if importance >= min_importance and score < min_score:
            return reason

    return None


def check_scored(profile: RelocationProfile, scored: ScoredCountry) -> Optional[str]:
    """Apply the hard rules to a scored country."""
    return disqualification_reason(
        profile,
        rights_score=scored.breakdown.get(Dimension.LGBT_RIGHTS),
        fallback_score=scored.country.lifestyle_score,
    )
