"""
Ranker

Splits scored countries into winners and disqualified, and orders both.
"""

from typing import List, Tuple

from .constants import DISQUALIFIED_TOP_N
from .contracts import (
    DisqualifiedCountry,
    RankedCountry,
    RelocationProfile,
    ScoredCountry,
)
from .disqualifier import check_scored


def split_candidates(
    profile: RelocationProfile,
    scored_countries: List[ScoredCountry]
) -> Tuple[List[RankedCountry], List[DisqualifiedCountry]]:
    """
    Apply hard rules and build winner / disqualified entries.

    Args:
        profile: Canonical user profile
        scored_countries: Countries with base scores

    Returns:
        (winners, disqualified), both unsorted
    """
    winners: List[RankedCountry] = []
    disqualified: List[DisqualifiedCountry] = []

    for scored in scored_countries:
        country = scored.country
        reason = check_scored(profile, scored)

        if reason:
            disqualified.append(DisqualifiedCountry(
                code=country.code,
                name=country.name,
                base_score=scored.base_score,
                breakdown=scored.breakdown,
                explanations=scored.explanations,
                short_note=country.short_note,
                net_income_percent=country.net_income_percent_typical,
                reason=reason,
            ))
        else:
            winners.append(RankedCountry(
                code=country.code,
                name=country.name,
                total_score=scored.base_score,
                breakdown=scored.breakdown,
                explanations=scored.explanations,
                short_note=country.short_note,
                net_income_percent=country.net_income_percent_typical,
            ))

    return winners, disqualified


def rank_winners(winners: List[RankedCountry]) -> List[RankedCountry]:
    """Rank by total score (descending), stable on ties."""
    return sorted(winners, key=lambda x: x.total_score, reverse=True)


def rank_disqualified(
    disqualified: List[DisqualifiedCountry],
    top_n: int = DISQUALIFIED_TOP_N
) -> List[DisqualifiedCountry]:
    """
    Highest pre-filter scores first, truncated to the near misses worth
    showing.
    """
    ranked = sorted(disqualified, key=lambda x: x.base_score, reverse=True)
    return ranked[:top_n]
