"""
Test quiz payload validation and profile normalization.
"""

import math

import pytest

from relocation.logic.contracts import (
    ClimatePreference,
    LanguagePriority,
    ReasonFlag,
    SafetyIntensity,
)
from relocation.logic.profile_normalizer import (
    ProfileValidationError,
    normalize_profile,
    normalize_slider,
    parse_quiz_input,
)


def test_flags_and_camel_case_fields():
    profile = normalize_profile({
        "reasons": ["lower_taxes", "better_lgbtq"],
        "languagesSpoken": ["English", "Spanish"],
        "taxImportance": 9,
        "currentCountry": "Brazil",
    })

    assert profile.has(ReasonFlag.LOWER_TAXES)
    assert profile.has(ReasonFlag.BETTER_LGBTQ)
    assert profile.speaks_reference_language is True
    assert profile.tax_importance == 9.0
    assert profile.demographics["currentCountry"] == "Brazil"


def test_english_detection_is_case_insensitive():
    assert normalize_profile({"languagesSpoken": ["  ENGLISH "]}).speaks_reference_language
    assert not normalize_profile({"languagesSpoken": ["German"]}).speaks_reference_language


@pytest.mark.parametrize("payload", [None, [], "lower_taxes", 42, {}])
def test_rejects_non_object_or_empty(payload):
    with pytest.raises(ProfileValidationError):
        parse_quiz_input(payload)


def test_unknown_flag_is_rejected():
    with pytest.raises(ProfileValidationError):
        normalize_profile({"reasons": ["lower_taxes", "free_unicorns"]})


def test_wrongly_typed_slider_is_rejected():
    with pytest.raises(ProfileValidationError):
        normalize_profile({"reasons": [], "taxImportance": "very"})


def test_sliders_clamped_and_defaulted():
    profile = normalize_profile({
        "reasons": ["lower_taxes"],
        "taxImportance": 42,
        "colImportance": -3,
    })

    assert profile.tax_importance == 10.0
    assert profile.col_importance == 1.0
    assert profile.climate_importance == 7.0
    assert profile.lgbt_importance == 8.0


def test_normalize_slider_nan_uses_default():
    assert normalize_slider(math.nan, 7.0) == 7.0
    assert normalize_slider(None, 8.0) == 8.0
    assert normalize_slider(0.5, 7.0) == 1.0


def test_slider_only_active_with_its_flag():
    without_flag = normalize_profile({"reasons": ["better_weather"], "taxImportance": 10})
    with_flag = normalize_profile({"reasons": ["lower_taxes"], "taxImportance": 10})

    assert without_flag.active_tax_importance is None
    assert with_flag.active_tax_importance == 10.0


def test_exclusive_groups_resolve_by_precedence():
    profile = normalize_profile({
        "reasons": [
            "climate_pref_mild", "climate_pref_cold", "climate_pref_warm",
            "safety_not_important", "safety_importance_high",
            "language_flexible", "language_nice_to_have",
        ],
    })

    assert profile.climate_preference == ClimatePreference.COLD
    assert profile.safety_intensity == SafetyIntensity.HIGH
    assert profile.language_priority == LanguagePriority.NICE_TO_HAVE


def test_profile_is_immutable():
    profile = normalize_profile({"reasons": ["lower_taxes"]})
    with pytest.raises(Exception):
        profile.tax_importance = 3.0
