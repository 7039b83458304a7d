"""
Profile Normalizer

Turns the raw quiz payload into the canonical RelocationProfile:
validated flags, resolved mutually exclusive groups and clamped sliders.
"""

import logging
import math
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from .constants import (
    DEFAULT_CLIMATE_IMPORTANCE,
    DEFAULT_COL_IMPORTANCE,
    DEFAULT_LGBT_IMPORTANCE,
    DEFAULT_TAX_IMPORTANCE,
    REFERENCE_LANGUAGE,
    SLIDER_MAX,
    SLIDER_MIN,
    clamp,
)
from .contracts import (
    ClimatePreference,
    LanguagePriority,
    QuizInput,
    ReasonFlag,
    RelocationProfile,
    SafetyIntensity,
)

logger = logging.getLogger(__name__)


class ProfileValidationError(ValueError):
    """Raised when the submitted profile is malformed or empty."""


# Checked in order; the first flag present wins
CLIMATE_PRECEDENCE: Tuple[Tuple[ReasonFlag, ClimatePreference], ...] = (
    (ReasonFlag.CLIMATE_PREF_COLD, ClimatePreference.COLD),
    (ReasonFlag.CLIMATE_PREF_WARM, ClimatePreference.WARM),
    (ReasonFlag.CLIMATE_PREF_MILD, ClimatePreference.MILD),
)

SAFETY_PRECEDENCE: Tuple[Tuple[ReasonFlag, SafetyIntensity], ...] = (
    (ReasonFlag.SAFETY_IMPORTANCE_HIGH, SafetyIntensity.HIGH),
    (ReasonFlag.SAFETY_IMPORTANCE_MEDIUM, SafetyIntensity.MEDIUM),
    (ReasonFlag.SAFETY_NOT_IMPORTANT, SafetyIntensity.NOT_IMPORTANT),
)

LANGUAGE_PRECEDENCE: Tuple[Tuple[ReasonFlag, LanguagePriority], ...] = (
    (ReasonFlag.LANGUAGE_MUST_HAVE, LanguagePriority.MUST_HAVE),
    (ReasonFlag.LANGUAGE_NICE_TO_HAVE, LanguagePriority.NICE_TO_HAVE),
    (ReasonFlag.LANGUAGE_FLEXIBLE, LanguagePriority.FLEXIBLE),
)


def parse_quiz_input(payload: Any) -> QuizInput:
    """
    Validate a raw JSON body into a QuizInput.

    Args:
        payload: Decoded request body

    Returns:
        QuizInput

    Raises:
        ProfileValidationError: body is not an object, is empty, or carries
            unknown flags / wrongly typed fields
    """
    if not isinstance(payload, dict):
        raise ProfileValidationError("Profile must be a JSON object.")
    if not payload:
        raise ProfileValidationError("Profile is empty.")

    try:
        return QuizInput.model_validate(payload)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid profile: {e}") from e


def normalize_profile(quiz: Union[QuizInput, Dict[str, Any]]) -> RelocationProfile:
    """
    Build the canonical profile from quiz input.

    Accepts either an already validated QuizInput or a raw dict.
    """
    if not isinstance(quiz, QuizInput):
        quiz = parse_quiz_input(quiz)

    flags = frozenset(quiz.reasons)
    languages = tuple(lang.strip() for lang in quiz.languages_spoken if lang and lang.strip())

    profile = RelocationProfile(
        flags=flags,
        languages_spoken=languages,
        speaks_reference_language=any(
            lang.lower() == REFERENCE_LANGUAGE for lang in languages
        ),
        climate_preference=_first_present(flags, CLIMATE_PRECEDENCE),
        safety_intensity=_first_present(flags, SAFETY_PRECEDENCE),
        language_priority=_first_present(flags, LANGUAGE_PRECEDENCE),
        tax_importance=normalize_slider(quiz.tax_importance, DEFAULT_TAX_IMPORTANCE),
        col_importance=normalize_slider(quiz.col_importance, DEFAULT_COL_IMPORTANCE),
        climate_importance=normalize_slider(quiz.climate_importance, DEFAULT_CLIMATE_IMPORTANCE),
        lgbt_importance=normalize_slider(quiz.lgbt_importance, DEFAULT_LGBT_IMPORTANCE),
        demographics=_demographics(quiz),
    )

    logger.debug(
        f"Normalized profile: {len(flags)} flags, climate={profile.climate_preference}, "
        f"safety={profile.safety_intensity}, language={profile.language_priority}"
    )
    return profile


def normalize_slider(value: Optional[float], default: float) -> float:
    """Clamp a 1-10 slider; missing or NaN values take ``default``."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        value = default
    return clamp(float(value), SLIDER_MIN, SLIDER_MAX)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _first_present(flags: Iterable[ReasonFlag], precedence):
    for flag, value in precedence:
        if flag in flags:
            return value
    return None


def _demographics(quiz: QuizInput) -> Dict[str, Any]:
    """Informational fields forwarded to advisory prompts, never scored."""
    return {
        "ageRange": quiz.age_range,
        "currentCountry": quiz.current_country,
        "familyStatus": quiz.family_status,
        "relocatingWith": quiz.relocating_with,
        "passportCountry": quiz.passport_country,
        "workSituation": list(quiz.work_situation),
        "monthlyIncome": quiz.monthly_income,
        "incomeCurrency": quiz.income_currency,
    }
