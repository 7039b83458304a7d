"""
Relocation Quiz API Routes

Exposes the country matching engine via REST API.
Main endpoint: POST /quiz
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from db import get_db
from .ai.advisor import AdvisoryClient
from .ai.config import AdvisoryConfig
from .ai.explainer import explain_matches
from .logic.catalog import load_catalog, load_catalog_from_db
from .logic.constants import (
    ENGINE_VERSION,
    MESSAGE_INTERNAL_ERROR,
    MESSAGE_INVALID_PROFILE,
    Dimension,
)
from .logic.contracts import (
    CountryRecord,
    DisqualifiedCountry,
    RankedCountry,
    RecommendationOutput,
    RelocationProfile,
)
from .logic.engine import RankingError, RelocationEngine, UnknownCountryError
from .logic.profile_normalizer import ProfileValidationError, normalize_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["quiz"])


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_catalog(db_session: Optional[Session] = Depends(get_db)) -> Tuple[CountryRecord, ...]:
    """Catalog from the database when configured and seeded, else the bundled file."""
    if db_session is not None:
        records = load_catalog_from_db(db_session)
        if records:
            return records
        logger.info("rec_countries is empty, using bundled catalog")
    return load_catalog()


@lru_cache(maxsize=1)
def get_advisor() -> AdvisoryClient:
    return AdvisoryClient.from_config(AdvisoryConfig.from_env())


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class MatchIn(BaseModel):
    """A winner as returned by POST /quiz."""
    code: str
    name: str
    total_score: float = Field(alias="totalScore", ge=0.0, le=10.0)
    breakdown: Dict[Dimension, float] = Field(default_factory=dict)
    explanations: Dict[Dimension, str] = Field(default_factory=dict)
    short_note: str = Field(default="", alias="shortNote")
    net_income_percent: float = Field(default=0.0, alias="netIncomePercent")


class DisqualifiedIn(BaseModel):
    """A disqualified country as returned by POST /quiz."""
    code: str
    name: str
    base_score: float = Field(alias="baseScore", ge=0.0, le=10.0)
    breakdown: Dict[Dimension, float] = Field(default_factory=dict)
    explanations: Dict[Dimension, str] = Field(default_factory=dict)
    short_note: str = Field(default="", alias="shortNote")
    net_income_percent: float = Field(default=0.0, alias="netIncomePercent")
    reason: str


class ExplainRequest(BaseModel):
    """Request body for the commentary endpoint."""
    profile: Dict[str, Any] = Field(default_factory=dict)
    top_matches: List[MatchIn] = Field(default_factory=list, alias="topMatches")
    disqualified_top: List[DisqualifiedIn] = Field(default_factory=list, alias="disqualifiedTop")


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("", summary="Match countries to a quiz profile")
@router.post("/", summary="Match countries to a quiz profile", include_in_schema=False)
def match_countries(
    payload: Any = Body(default=None),
    catalog=Depends(get_catalog),
    advisor: AdvisoryClient = Depends(get_advisor),
):
    """
    Rank every catalog country for the submitted questionnaire.

    **Response:**
    - `topMatches`: winners, best first (possibly reordered by the advisor)
    - `disqualifiedTop`: strongest countries removed by a hard rule
    - `bestMatch` / `simpleScore`: first winner and its score
    """
    try:
        profile = normalize_profile(payload)
    except ProfileValidationError as e:
        return _error_response(400, MESSAGE_INVALID_PROFILE, payload, detail=str(e))

    try:
        output = RelocationEngine(catalog).recommend(profile, advisor=advisor)
    except RankingError as e:
        logger.error(f"Ranking failed: {e}")
        return _error_response(500, MESSAGE_INTERNAL_ERROR, payload)

    return _serialize_output(output, payload)


@router.post("/explain", summary="Commentary for a finished ranking")
def explain(
    request: ExplainRequest,
    advisor: AdvisoryClient = Depends(get_advisor),
):
    """
    Produce an overall summary and per-country comments.

    Always succeeds when the body is well formed; the advisor's failures are
    replaced with templated comments.
    """
    try:
        profile = normalize_profile(request.profile) if request.profile else RelocationProfile()
    except ProfileValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    winners = [
        RankedCountry(
            code=m.code,
            name=m.name,
            total_score=m.total_score,
            breakdown=m.breakdown,
            explanations=m.explanations,
            short_note=m.short_note,
            net_income_percent=m.net_income_percent,
        )
        for m in request.top_matches
    ]
    disqualified = [
        DisqualifiedCountry(
            code=d.code,
            name=d.name,
            base_score=d.base_score,
            breakdown=d.breakdown,
            explanations=d.explanations,
            short_note=d.short_note,
            net_income_percent=d.net_income_percent,
            reason=d.reason,
        )
        for d in request.disqualified_top
    ]

    outcome = explain_matches(profile, winners, disqualified, advisor)

    return {
        "overallSummary": outcome.overall_summary,
        "winners": [{"code": c.code, "aiComment": c.comment} for c in outcome.winners],
        "disqualified": [{"code": c.code, "aiComment": c.comment} for c in outcome.disqualified],
        "source": outcome.source.value,
        "fallbackReason": outcome.fallback_reason,
    }


@router.post("/countries/{code}", summary="Detailed scoring for one country")
def score_country_detail(
    code: str,
    payload: Any = Body(default=None),
    catalog=Depends(get_catalog),
):
    """Breakdown, weights and disqualification status of a single country."""
    try:
        profile = normalize_profile(payload)
    except ProfileValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        detail = RelocationEngine(catalog).score_single_country(profile, code)
    except UnknownCountryError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "code": detail["code"],
        "name": detail["name"],
        "baseScore": _round(detail["base_score"]),
        "taxTiebreak": round(detail["tax_tiebreak"], 3),
        "isDisqualified": detail["is_disqualified"],
        "disqualificationReason": detail["disqualification_reason"],
        "dimensions": {
            dim.value: {
                "score": round(d["score"], 3),
                "weight": round(d["weight"], 3),
                "weightedScore": round(d["weighted_score"], 3),
                "explanation": d["explanation"],
            }
            for dim, d in detail["dimensions"].items()
        },
    }


@router.get("/countries", summary="List catalog countries")
def list_countries(catalog=Depends(get_catalog)):
    return {
        "countries": [
            {"code": c.code, "name": c.name, "shortNote": c.short_note}
            for c in catalog
        ],
        "count": len(catalog),
    }


# =============================================================================
# SERIALIZATION
# =============================================================================

def _serialize_output(output: RecommendationOutput, payload: Any) -> Dict[str, Any]:
    """Convert RecommendationOutput to the camelCase response shape."""
    notes = output.advisory_notes
    matches = [_serialize_match(w, notes.get(w.code)) for w in output.winners]

    return {
        "ok": output.ok,
        "message": output.message,
        "requestId": output.request_id,
        "simpleScore": round(output.simple_score, 2),
        "bestMatch": matches[0] if matches else None,
        "topMatches": matches,
        "disqualifiedTop": [
            _serialize_disqualified(d, output.disqualified_notes.get(d.code))
            for d in output.disqualified_top
        ],
        "mergeSource": output.merge_source.value,
        "fallbackReason": output.fallback_reason,
        "summary": {
            "totalEvaluated": output.total_evaluated,
            "totalDisqualified": output.total_disqualified,
            "processingTimeMs": output.processing_time_ms,
        },
        "engineVersion": output.engine_version,
        "receivedData": payload,
    }


def _serialize_match(match: RankedCountry, note: Optional[str] = None) -> Dict[str, Any]:
    data = {
        "code": match.code,
        "name": match.name,
        "totalScore": round(match.total_score, 2),
        "breakdown": _by_dimension(match.breakdown),
        "explanations": _by_dimension(match.explanations),
        "shortNote": match.short_note,
        "netIncomePercent": match.net_income_percent,
    }
    if note:
        data["aiNote"] = note
    return data


def _serialize_disqualified(country: DisqualifiedCountry, note: Optional[str] = None) -> Dict[str, Any]:
    data = {
        "code": country.code,
        "name": country.name,
        "baseScore": round(country.base_score, 2),
        "breakdown": _by_dimension(country.breakdown),
        "explanations": _by_dimension(country.explanations),
        "shortNote": country.short_note,
        "netIncomePercent": country.net_income_percent,
        "reason": country.reason,
    }
    if note:
        data["aiNote"] = note
    return data


def _by_dimension(mapping: Dict[Dimension, Any]) -> Dict[str, Any]:
    return {
        dim.value: round(value, 2) if isinstance(value, float) else value
        for dim, value in mapping.items()
    }


def _round(value: Optional[float], digits: int = 3) -> Optional[float]:
    return round(value, digits) if value is not None else None


def _error_response(status_code: int, message: str, payload: Any, detail: Optional[str] = None) -> JSONResponse:
    content = {
        "ok": False,
        "message": message,
        "simpleScore": 0,
        "bestMatch": None,
        "topMatches": [],
        "disqualifiedTop": [],
        "receivedData": payload,
    }
    if detail:
        content["detail"] = detail
    return JSONResponse(status_code=status_code, content=content)


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check(advisor: AdvisoryClient = Depends(get_advisor)):
    """Check if the matching engine is operational."""
    return {
        "status": "ok",
        "engine": "relocation",
        "version": ENGINE_VERSION,
        "advisoryConfigured": advisor.configured,
    }
