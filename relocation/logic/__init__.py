"""
Relocation Logic Module

Provides the deterministic scoring engine for country matching.
"""

from .contracts import (
    QuizInput,
    RelocationProfile,
    CountryRecord,
    RankedCountry,
    DisqualifiedCountry,
    RankingResult,
    RecommendationOutput,
    ReasonFlag,
    MergeSource,
)
from .engine import RelocationEngine, RankingError, UnknownCountryError, get_matches
from .profile_normalizer import ProfileValidationError, normalize_profile, parse_quiz_input
from .catalog import load_catalog
from .constants import Dimension

__all__ = [
    # Main engine
    "RelocationEngine",
    "get_matches",
    "normalize_profile",
    "parse_quiz_input",
    "load_catalog",

    # Errors
    "ProfileValidationError",
    "RankingError",
    "UnknownCountryError",

    # Contracts
    "QuizInput",
    "RelocationProfile",
    "CountryRecord",
    "RankedCountry",
    "DisqualifiedCountry",
    "RankingResult",
    "RecommendationOutput",

    # Enums
    "ReasonFlag",
    "MergeSource",
    "Dimension",
]
