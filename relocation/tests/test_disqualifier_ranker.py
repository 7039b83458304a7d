"""
Test the hard rules and the winner / near-miss ordering.
"""

import pytest

from relocation.logic.aggregator import score_country
from relocation.logic.constants import Dimension
from relocation.logic.contracts import RelocationProfile, ScoredCountry
from relocation.logic.disqualifier import check_scored, disqualification_reason
from relocation.logic.ranker import rank_disqualified, rank_winners, split_candidates

from conftest import make_country, make_profile


def _scored(profile, countries):
    return [s for s in (score_country(profile, c) for c in countries) if s is not None]


# =============================================================================
# DISQUALIFIER
# =============================================================================

def test_rule_ignored_without_flag():
    assert disqualification_reason(RelocationProfile(), rights_score=0.0) is None


def test_strong_requirement():
    profile = make_profile("better_lgbtq", lgbtImportance=9)

    reason = disqualification_reason(profile, rights_score=6.5)

    assert reason is not None
    assert "strong level" in reason
    assert disqualification_reason(profile, rights_score=7.5) is None


def test_important_requirement():
    profile = make_profile("better_lgbtq", lgbtImportance=7)

    assert "marked as important" in disqualification_reason(profile, rights_score=5.9)
    assert disqualification_reason(profile, rights_score=6.5) is None


def test_check_scored_decides_on_rights_not_total():
    profile = make_profile("better_lgbtq", lgbtImportance=9)
    country = make_country("TOP", lgbt_score=7.0, lifestyle_score=10.0)

    high = ScoredCountry(country=country, breakdown={Dimension.LGBT_RIGHTS: 7.0}, base_score=10.0)
    low = ScoredCountry(country=country, breakdown={Dimension.LGBT_RIGHTS: 8.0}, base_score=0.5)

    assert "strong level" in check_scored(profile, high)
    assert check_scored(profile, low) is None


def test_low_slider_never_disqualifies():
    profile = make_profile("better_lgbtq", lgbtImportance=6)
    assert disqualification_reason(profile, rights_score=6.5) is None
    assert disqualification_reason(profile, rights_score=0.0) is None


def test_default_slider_is_important_level():
    profile = make_profile("better_lgbtq")
    assert disqualification_reason(profile, rights_score=5.0) is not None


def test_missing_rights_score_uses_fallback():
    profile = make_profile("better_lgbtq", lgbtImportance=9)

    assert disqualification_reason(profile, rights_score=None, fallback_score=6.0) is not None
    assert disqualification_reason(profile, rights_score=None, fallback_score=8.0) is None
    assert disqualification_reason(profile, rights_score=None, fallback_score=None) is None


@pytest.mark.parametrize("score", [0.0, 3.0, 5.9, 6.0, 7.0, 7.4, 7.5, 9.0])
def test_monotonic_in_slider(score):
    disqualified_at = [
        disqualification_reason(make_profile("better_lgbtq", lgbtImportance=s), rights_score=score) is not None
        for s in range(1, 11)
    ]
    # once disqualified at some slider, stays disqualified for every higher one
    first = disqualified_at.index(True) if True in disqualified_at else len(disqualified_at)
    assert all(disqualified_at[first:])


# =============================================================================
# RANKER
# =============================================================================

def test_split_is_disjoint_and_complete(small_catalog):
    profile = make_profile("lower_taxes", "better_lgbtq", lgbtImportance=9)
    scored = _scored(profile, list(small_catalog))

    winners, disqualified = split_candidates(profile, scored)

    winner_codes = {w.code for w in winners}
    disq_codes = {d.code for d in disqualified}
    assert winner_codes.isdisjoint(disq_codes)
    assert winner_codes | disq_codes == {c.code for c in small_catalog}
    assert disq_codes == {"LOW", "ANT", "WEK"}


def test_winners_sorted_descending_and_stable():
    profile = RelocationProfile()
    scored = _scored(profile, [
        make_country("TIA"), make_country("TOP", lifestyle_score=9.0), make_country("TIB"),
    ])
    winners, _ = split_candidates(profile, scored)

    ranked = rank_winners(winners)

    assert [w.code for w in ranked] == ["TOP", "TIA", "TIB"]


def test_disqualified_truncated_to_three():
    profile = make_profile("better_lgbtq", lgbtImportance=10)
    countries = [make_country(f"D{i:02d}", lgbt_score=1.0, lifestyle_score=float(i)) for i in range(6)]
    _, disqualified = split_candidates(profile, _scored(profile, countries))

    top = rank_disqualified(disqualified)

    assert [d.code for d in top] == ["D05", "D04", "D03"]
    assert all(d.reason for d in top)
