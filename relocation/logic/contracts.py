"""
Data Contracts for the Country Matching Engine

Defines Pydantic models for the quiz input, the canonical RelocationProfile,
catalog CountryRecords and the ranking / advisory outputs.
These contracts are the API boundary for the scoring engine.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .constants import (
    DEFAULT_CLIMATE_IMPORTANCE,
    DEFAULT_COL_IMPORTANCE,
    DEFAULT_LGBT_IMPORTANCE,
    DEFAULT_TAX_IMPORTANCE,
    Dimension,
    ENGINE_VERSION,
)


# =============================================================================
# PREFERENCE FLAGS
# =============================================================================

class ReasonFlag(str, Enum):
    """Every preference identifier the questionnaire can submit."""
    # Taxes & cost of living
    LOWER_TAXES = "lower_taxes"
    TAX_NOT_IMPORTANT = "tax_not_important"
    LOWER_COST_OF_LIVING = "lower_cost_of_living"
    COL_NOT_IMPORTANT = "col_not_important"

    # Climate / weather
    BETTER_WEATHER = "better_weather"
    CLIMATE_PREF_COLD = "climate_pref_cold"
    CLIMATE_PREF_MILD = "climate_pref_mild"
    CLIMATE_PREF_WARM = "climate_pref_warm"
    CLIMATE_DONT_CARE = "climate_dont_care"
    CLIMATE_MUST_HAVE = "climate_must_have"

    # Language fit
    LANGUAGE_MUST_HAVE = "language_must_have"
    LANGUAGE_NICE_TO_HAVE = "language_nice_to_have"
    LANGUAGE_FLEXIBLE = "language_flexible"

    # Safety & stability
    SAFETY_IMPORTANCE_HIGH = "safety_importance_high"
    SAFETY_IMPORTANCE_MEDIUM = "safety_importance_medium"
    SAFETY_NOT_IMPORTANT = "safety_not_important"
    SAFETY_STABILITY_PRIORITY = "safety_stability_priority"
    PERSONAL_SAFETY = "personal_safety"
    PERSONAL_SAFETY_LOW_PRIORITY = "personal_safety_low_priority"
    POLITICAL_STABILITY = "political_stability"
    POLITICAL_STABILITY_LOW_PRIORITY = "political_stability_low_priority"
    LOW_CORRUPTION = "low_corruption"
    LOW_CORRUPTION_LOW_PRIORITY = "low_corruption_low_priority"

    # Healthcare
    HEALTHCARE_STRONG_PUBLIC = "healthcare_strong_public"
    HEALTHCARE_MIXED = "healthcare_mixed"
    HEALTHCARE_PRIVATE = "healthcare_private"
    HEALTHCARE_NOT_IMPORTANT = "healthcare_not_important"

    # LGBTQ+
    BETTER_LGBTQ = "better_lgbtq"
    LGBT_FULL_RIGHTS = "lgbt_full_rights"
    LGBT_FRIENDLY = "lgbt_friendly"
    LGBT_DONT_CARE = "lgbt_dont_care"

    # Culture & vibe
    CULTURE_NORTHERN_EUROPE = "culture_northern_europe"
    CULTURE_MEDITERRANEAN = "culture_mediterranean"
    CULTURE_NORTH_AMERICA = "culture_north_america"
    CULTURE_LATIN_AMERICA = "culture_latin_america"
    CULTURE_ASIA = "culture_asia"
    CULTURE_NOT_IMPORTANT = "culture_not_important"
    CULTURE_MUST_HAVE = "culture_must_have"

    # Development & infrastructure
    DEVELOPMENT_CARE_YES = "development_care_yes"
    DEVELOPMENT_CARE_SOME = "development_care_some"
    DEVELOPMENT_NOT_IMPORTANT = "development_not_important"
    DEV_PUBLIC_TRANSPORT = "dev_public_transport"
    DEV_DIGITAL_SERVICES = "dev_digital_services"
    DEV_INFRASTRUCTURE_CLEAN = "dev_infrastructure_clean"
    DEV_EVERYDAY_SERVICES = "dev_everyday_services"
    PUBLIC_TRANSPORT_IMPORTANT = "public_transport_important"
    PUBLIC_TRANSPORT_NICE_TO_HAVE = "public_transport_nice_to_have"

    # Work & lifestyle
    CAREER_GROWTH = "career_growth"
    REMOTE_WORK = "remote_work"
    EXPAT_COMMUNITY = "expat_community"
    SOCIAL_LIFE = "social_life"


class ClimatePreference(str, Enum):
    COLD = "cold"
    WARM = "warm"
    MILD = "mild"


class SafetyIntensity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    NOT_IMPORTANT = "not_important"


class LanguagePriority(str, Enum):
    MUST_HAVE = "must_have"
    NICE_TO_HAVE = "nice_to_have"
    FLEXIBLE = "flexible"


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class QuizInput(BaseModel):
    """
    Raw questionnaire payload as submitted by the form.
    Demographic fields are informational only and never affect scoring.
    """
    # Basics
    age_range: Optional[str] = Field(default=None, alias="ageRange")
    current_country: Optional[str] = Field(default=None, alias="currentCountry")
    family_status: Optional[str] = Field(default=None, alias="familyStatus")
    relocating_with: Optional[str] = Field(default=None, alias="relocatingWith")
    passport_country: Optional[str] = Field(default=None, alias="passportCountry")
    second_passport_country: Optional[str] = Field(default=None, alias="secondPassportCountry")

    # Work / income
    work_situation: List[str] = Field(default_factory=list, alias="workSituation")
    monthly_income: Optional[Union[float, str]] = Field(default=None, alias="monthlyIncome")
    income_currency: Optional[str] = Field(default=None, alias="incomeCurrency")

    # Languages + priorities
    languages_spoken: List[str] = Field(default_factory=list, alias="languagesSpoken")
    reasons: List[ReasonFlag] = Field(default_factory=list)

    # Sliders (1-10)
    tax_importance: Optional[float] = Field(default=None, alias="taxImportance")
    col_importance: Optional[float] = Field(default=None, alias="colImportance")
    climate_importance: Optional[float] = Field(default=None, alias="climateImportance")
    lgbt_importance: Optional[float] = Field(default=None, alias="lgbtImportance")
    language_importance: Optional[float] = Field(default=None, alias="languageImportance")

    class Config:
        populate_by_name = True


class RelocationProfile(BaseModel):
    """
    Canonical, request-local profile the engine scores against.
    Mutually exclusive flag groups are collapsed into single enum fields.
    """
    flags: FrozenSet[ReasonFlag] = frozenset()
    languages_spoken: Tuple[str, ...] = ()
    speaks_reference_language: bool = False

    climate_preference: Optional[ClimatePreference] = None
    safety_intensity: Optional[SafetyIntensity] = None
    language_priority: Optional[LanguagePriority] = None

    tax_importance: float = DEFAULT_TAX_IMPORTANCE
    col_importance: float = DEFAULT_COL_IMPORTANCE
    climate_importance: float = DEFAULT_CLIMATE_IMPORTANCE
    lgbt_importance: float = DEFAULT_LGBT_IMPORTANCE

    demographics: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        frozen = True

    def has(self, flag: ReasonFlag) -> bool:
        return flag in self.flags

    @property
    def active_tax_importance(self) -> Optional[float]:
        return self.tax_importance if self.has(ReasonFlag.LOWER_TAXES) else None

    @property
    def active_col_importance(self) -> Optional[float]:
        return self.col_importance if self.has(ReasonFlag.LOWER_COST_OF_LIVING) else None

    @property
    def active_climate_importance(self) -> Optional[float]:
        return self.climate_importance if self.has(ReasonFlag.BETTER_WEATHER) else None

    @property
    def active_lgbt_importance(self) -> Optional[float]:
        return self.lgbt_importance if self.has(ReasonFlag.BETTER_LGBTQ) else None


# =============================================================================
# CATALOG
# =============================================================================

class CountryRecord(BaseModel):
    """
    Static catalog entry. Optional scores are None when the data is missing,
    never zero.
    """
    code: str
    name: str
    short_note: str = ""

    # Core baseline scores (0-10)
    tax_score: float = Field(ge=0.0, le=10.0)
    cost_of_living_score: float = Field(ge=0.0, le=10.0)
    income_growth_score: float = Field(ge=0.0, le=10.0)
    remote_friendly_score: float = Field(ge=0.0, le=10.0)
    safety_score: float = Field(ge=0.0, le=10.0)
    lifestyle_score: float = Field(ge=0.0, le=10.0)

    # Climate by season
    cold_climate_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    warm_climate_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    mild_climate_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)

    english_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    expat_scene_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    social_scene_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    lgbt_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)

    # Development / infrastructure
    healthcare_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    public_transport_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    digital_services_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    infrastructure_clean_score: Optional[float] = Field(default=None, ge=0.0, le=10.0)

    net_income_percent_typical: float = Field(default=0.0, ge=0.0, le=100.0)

    class Config:
        frozen = True


# =============================================================================
# SCORING STRUCTURES
# =============================================================================

DimensionBreakdown = Dict[Dimension, float]
DimensionExplanations = Dict[Dimension, str]
WeightVector = Dict[Dimension, float]


class ScoredCountry(BaseModel):
    """
    A country with its breakdown and pre-filter score.
    Used between aggregation and disqualification stages.
    """
    country: CountryRecord
    breakdown: DimensionBreakdown = Field(default_factory=dict)
    explanations: DimensionExplanations = Field(default_factory=dict)
    base_score: float = Field(ge=0.0, le=10.0)


class RankedCountry(BaseModel):
    """A winner: passed every hard rule."""
    code: str
    name: str
    total_score: float = Field(ge=0.0, le=10.0)
    breakdown: DimensionBreakdown = Field(default_factory=dict)
    explanations: DimensionExplanations = Field(default_factory=dict)
    short_note: str = ""
    net_income_percent: float = 0.0


class DisqualifiedCountry(BaseModel):
    """Removed by a hard rule; ``base_score`` ignores the violated rule."""
    code: str
    name: str
    base_score: float = Field(ge=0.0, le=10.0)
    breakdown: DimensionBreakdown = Field(default_factory=dict)
    explanations: DimensionExplanations = Field(default_factory=dict)
    short_note: str = ""
    net_income_percent: float = 0.0
    reason: str


class RankingResult(BaseModel):
    """Numeric ranking before any advisory pass."""
    winners: List[RankedCountry] = Field(default_factory=list)
    disqualified_top: List[DisqualifiedCountry] = Field(default_factory=list)
    total_evaluated: int = 0
    total_disqualified: int = 0
    total_unscored: int = 0


# =============================================================================
# ADVISORY CONTRACTS
# =============================================================================

class MergeSource(str, Enum):
    """Which path produced the final winners order."""
    ADVISORY = "advisory"
    NUMERIC_FALLBACK = "numeric_fallback"


class AdvisoryEntry(BaseModel):
    """One item of the collaborator's ``ranked`` / ``disqualifiedNotes`` arrays."""
    code: str = Field(min_length=1)
    rank: float = Field(validation_alias=AliasChoices("rank", "aiRank"), allow_inf_nan=False)
    note: str = Field(default="", validation_alias=AliasChoices("note", "aiNote"))

    @field_validator("note", mode="before")
    @classmethod
    def _note_text(cls, value: Any) -> str:
        # code and rank decide validity; a missing or odd note is just empty
        return value if isinstance(value, str) else ""


class AdvisoryOutcome(BaseModel):
    source: MergeSource
    winners: List[RankedCountry] = Field(default_factory=list)
    notes: Dict[str, str] = Field(default_factory=dict)
    disqualified_notes: Dict[str, str] = Field(default_factory=dict)
    fallback_reason: Optional[str] = None


class CountryComment(BaseModel):
    code: str
    comment: str
    synthesized: bool = False


class CommentaryOutcome(BaseModel):
    source: MergeSource
    overall_summary: str
    winners: List[CountryComment] = Field(default_factory=list)
    disqualified: List[CountryComment] = Field(default_factory=list)
    fallback_reason: Optional[str] = None


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class RecommendationOutput(BaseModel):
    """
    Output contract for the engine.
    Contains the final winners order with summary statistics.
    """
    request_id: Optional[str] = None

    ok: bool = True
    message: str = ""

    winners: List[RankedCountry] = Field(default_factory=list)
    disqualified_top: List[DisqualifiedCountry] = Field(default_factory=list)
    best_match: Optional[RankedCountry] = None
    simple_score: float = 0.0

    # Advisory metadata
    merge_source: MergeSource = MergeSource.NUMERIC_FALLBACK
    fallback_reason: Optional[str] = None
    advisory_notes: Dict[str, str] = Field(default_factory=dict)
    disqualified_notes: Dict[str, str] = Field(default_factory=dict)

    # Summary statistics
    total_evaluated: int = 0
    total_disqualified: int = 0

    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION
