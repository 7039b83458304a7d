"""
Test dimension scoring, weight calculation and aggregation.
"""

import pytest

from relocation.logic.aggregator import aggregate_score, score_country, tax_tiebreak
from relocation.logic.constants import Dimension
from relocation.logic.contracts import RelocationProfile
from relocation.logic.dimension_scorers import explain, score_dimensions
from relocation.logic.weights import compute_weights

from conftest import make_country, make_profile


# =============================================================================
# DIMENSION SCORERS
# =============================================================================

def test_core_dimensions_always_present():
    breakdown, explanations = score_dimensions(RelocationProfile(), make_country())

    for dim in (Dimension.TAX, Dimension.COST_OF_LIVING, Dimension.INCOME_GROWTH,
                Dimension.REMOTE_FRIENDLY, Dimension.SAFETY, Dimension.LIFESTYLE):
        assert breakdown[dim] == 5.0
        assert explanations[dim]

    assert Dimension.CLIMATE_MATCH not in breakdown
    assert Dimension.LANGUAGE_MATCH not in breakdown
    assert Dimension.LGBT_RIGHTS not in breakdown


def test_missing_optional_data_is_omitted_not_zero():
    country = make_country(expat_scene_score=7.0)
    breakdown, _ = score_dimensions(RelocationProfile(), country)

    assert breakdown[Dimension.EXPAT_SCENE] == 7.0
    assert Dimension.SOCIAL_SCENE not in breakdown


@pytest.mark.parametrize("reason, expected", [
    ("climate_pref_cold", 9.0),
    ("climate_pref_warm", 2.0),
    ("climate_pref_mild", 6.0),
])
def test_climate_match_uses_preferred_season(reason, expected):
    country = make_country(cold_climate_score=9.0, warm_climate_score=2.0, mild_climate_score=6.0)
    breakdown, _ = score_dimensions(make_profile(reason), country)

    assert breakdown[Dimension.CLIMATE_MATCH] == expected


def test_climate_match_fallbacks():
    mild_only = make_country(mild_climate_score=6.5)
    nothing = make_country()

    cold, _ = score_dimensions(make_profile("climate_pref_cold"), mild_only)
    cold_none, _ = score_dimensions(make_profile("climate_pref_cold"), nothing)
    mild_none, _ = score_dimensions(make_profile("climate_pref_mild"), nothing)

    assert cold[Dimension.CLIMATE_MATCH] == 6.5
    assert cold_none[Dimension.CLIMATE_MATCH] == 5.0
    assert mild_none[Dimension.CLIMATE_MATCH] == 7.0


def test_climate_match_without_preference_is_mean():
    country = make_country(cold_climate_score=4.0, warm_climate_score=8.0)
    breakdown, _ = score_dimensions(RelocationProfile(), country)

    assert breakdown[Dimension.CLIMATE_MATCH] == pytest.approx(6.0)


def test_language_match_only_for_english_speakers():
    country = make_country(english_score=9.0)
    speaker = make_profile(languagesSpoken=["English"])
    non_speaker = make_profile(languagesSpoken=["French"])

    assert score_dimensions(speaker, country)[0][Dimension.LANGUAGE_MATCH] == 9.0
    assert Dimension.LANGUAGE_MATCH not in score_dimensions(non_speaker, country)[0]
    assert score_dimensions(speaker, make_country())[0][Dimension.LANGUAGE_MATCH] == 5.0


def test_explanation_bands():
    assert explain(Dimension.TAX, 8.3) != explain(Dimension.TAX, 8.29)
    assert explain(Dimension.TAX, 6.3) != explain(Dimension.TAX, 6.29)
    assert explain(Dimension.TAX, 9.9) == explain(Dimension.TAX, 8.3)


# =============================================================================
# WEIGHTS
# =============================================================================

def test_default_weights():
    weights = compute_weights(RelocationProfile())

    assert weights[Dimension.TAX] == 1.0
    assert weights[Dimension.SAFETY] == 1.0
    assert weights[Dimension.CLIMATE_MATCH] == 0.0
    assert weights[Dimension.LGBT_RIGHTS] == 0.0


def test_tax_weight_scales_with_slider():
    assert compute_weights(make_profile("lower_taxes", taxImportance=1))[Dimension.TAX] == pytest.approx(2.0)
    assert compute_weights(make_profile("lower_taxes", taxImportance=10))[Dimension.TAX] == pytest.approx(7.0)


def test_not_important_keeps_residual_weight():
    weights = compute_weights(make_profile("tax_not_important", "col_not_important", "safety_not_important"))

    assert weights[Dimension.TAX] == pytest.approx(0.2)
    assert weights[Dimension.COST_OF_LIVING] == pytest.approx(0.2)
    assert weights[Dimension.SAFETY] == pytest.approx(0.3)


def test_climate_weight_range():
    assert compute_weights(make_profile("better_weather", climateImportance=1))[Dimension.CLIMATE_MATCH] == pytest.approx(1.0)
    assert compute_weights(make_profile("better_weather", climateImportance=10))[Dimension.CLIMATE_MATCH] == pytest.approx(4.5)


def test_language_weight_needs_english():
    speaker = make_profile("language_must_have", languagesSpoken=["english"])
    non_speaker = make_profile("language_must_have", languagesSpoken=["german"])

    assert compute_weights(speaker)[Dimension.LANGUAGE_MATCH] == pytest.approx(1.8)
    assert compute_weights(non_speaker)[Dimension.LANGUAGE_MATCH] == 0.0


def test_lgbt_and_development_weights():
    weights = compute_weights(make_profile(
        "better_lgbtq", "development_care_yes", "public_transport_nice_to_have",
        lgbtImportance=7,
    ))

    assert weights[Dimension.LGBT_RIGHTS] == pytest.approx(3.0)
    assert weights[Dimension.LIFESTYLE] == pytest.approx(1.5)
    assert weights[Dimension.HEALTHCARE_SYSTEM] == pytest.approx(1.4)
    assert weights[Dimension.INFRASTRUCTURE_CLEAN] == pytest.approx(1.26)
    assert weights[Dimension.PUBLIC_TRANSPORT] == pytest.approx(1.0)


def test_high_tax_slider_damps_general_dimensions():
    weights = compute_weights(make_profile("lower_taxes", "safety_importance_high", taxImportance=9))

    assert weights[Dimension.SAFETY] == pytest.approx(1.8 * 0.65)
    assert weights[Dimension.LIFESTYLE] == pytest.approx(0.65)
    assert weights[Dimension.TAX] == pytest.approx(2 + 8 * 5 / 9)


def test_sliders_ignored_without_their_flags():
    weights = compute_weights(make_profile(
        "expat_community",
        taxImportance=10, colImportance=10, climateImportance=10, lgbtImportance=10,
    ))
    defaults = compute_weights(RelocationProfile())

    for dim in (Dimension.TAX, Dimension.COST_OF_LIVING, Dimension.CLIMATE_MATCH,
                Dimension.LGBT_RIGHTS, Dimension.LIFESTYLE, Dimension.SAFETY):
        assert weights[dim] == pytest.approx(defaults[dim])


def test_weights_are_fresh_per_call():
    profile = make_profile("lower_taxes")
    first = compute_weights(profile)
    first[Dimension.TAX] = 99.0

    assert compute_weights(profile)[Dimension.TAX] != 99.0


# =============================================================================
# AGGREGATOR
# =============================================================================

def test_weighted_mean_with_tax_tiebreak():
    profile = make_profile("lower_taxes", taxImportance=10)
    breakdown, _ = score_dimensions(profile, make_country(tax_score=9.0))
    weights = compute_weights(profile)

    expected_mean = (9.0 * 7.0 + 5.0 * 0.65 * 5) / (7.0 + 0.65 * 5)
    assert tax_tiebreak(breakdown, profile) == pytest.approx(0.8)
    assert aggregate_score(breakdown, weights, profile) == pytest.approx(expected_mean + 0.8)


def test_no_contributing_dimension_gives_none():
    weights = {d: 0.0 for d in Dimension}
    breakdown, _ = score_dimensions(RelocationProfile(), make_country())

    assert aggregate_score(breakdown, weights, RelocationProfile()) is None


def test_score_is_clamped():
    profile = make_profile("lower_taxes", taxImportance=10)
    country = make_country(
        tax_score=10.0, cost_of_living_score=10.0, income_growth_score=10.0,
        remote_friendly_score=10.0, safety_score=10.0, lifestyle_score=10.0,
    )

    scored = score_country(profile, country)

    assert scored.base_score == 10.0


def test_tiebreak_zero_without_flag():
    breakdown, _ = score_dimensions(RelocationProfile(), make_country(tax_score=10.0))
    assert tax_tiebreak(breakdown, RelocationProfile()) == 0.0
