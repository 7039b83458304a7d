from typing import Dict, Any, List

from ..logic.constants import (
    ADVISORY_MAX_DISQUALIFIED,
    COMMENTARY_MAX_DISQUALIFIED,
    COMMENTARY_MAX_WINNERS,
)
from ..logic.contracts import DisqualifiedCountry, RankedCountry, RelocationProfile
from .safety_rules import (
    COMMENTARY_OUTPUT_FORMAT,
    COMMENTARY_ROLE_DEFINITION,
    COMMENTARY_RULES,
    RANKING_OUTPUT_FORMAT,
    RANKING_ROLE_DEFINITION,
    RANKING_RULES,
)


def build_rerank_system_prompt() -> str:
    """Constructs the static system prompt for the reordering pass."""
    return _compose(RANKING_ROLE_DEFINITION, RANKING_RULES, RANKING_OUTPUT_FORMAT)


def build_commentary_system_prompt() -> str:
    """Constructs the static system prompt for the commentary pass."""
    return _compose(COMMENTARY_ROLE_DEFINITION, COMMENTARY_RULES, COMMENTARY_OUTPUT_FORMAT)


def build_rerank_payload(
    profile: RelocationProfile,
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
) -> Dict[str, Any]:
    """
    User message for the reordering pass.
    Every numeric winner is sent; disqualified entries are truncated.
    """
    return {
        "profile": _profile_summary(profile),
        "candidates": [
            {
                "code": w.code,
                "name": w.name,
                "totalScore": round(w.total_score, 2),
                "breakdown": _plain(w.breakdown),
                "netIncomePercent": w.net_income_percent,
                "shortNote": w.short_note,
            }
            for w in winners
        ],
        "disqualified": [
            _disqualified_summary(d, include_explanations=False)
            for d in disqualified[:ADVISORY_MAX_DISQUALIFIED]
        ],
    }


def build_commentary_payload(
    profile: RelocationProfile,
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
) -> Dict[str, Any]:
    """User message for the commentary pass: top winners and near misses only."""
    return {
        "profile": _profile_summary(profile),
        "topMatches": [
            {
                "code": w.code,
                "name": w.name,
                "totalScore": round(w.total_score, 2),
                "shortNote": w.short_note,
                "netIncomePercent": w.net_income_percent,
                "breakdown": _plain(w.breakdown),
                "explanations": _plain(w.explanations),
            }
            for w in winners[:COMMENTARY_MAX_WINNERS]
        ],
        "disqualifiedTop": [
            _disqualified_summary(d, include_explanations=True)
            for d in disqualified[:COMMENTARY_MAX_DISQUALIFIED]
        ],
    }


def _compose(role: str, rules: List[str], output_format: str) -> str:
    rules_str = "\n".join([f"- {rule}" for rule in rules])

    return f"""{role}

HARD RULES:
{rules_str}

OUTPUT FORMAT:
{output_format}
"""


def _profile_summary(profile: RelocationProfile) -> Dict[str, Any]:
    """Only fields the advisor needs; informational demographics included."""
    demographics = profile.demographics
    return {
        "currentCountry": demographics.get("currentCountry"),
        "ageRange": demographics.get("ageRange"),
        "languagesSpoken": list(profile.languages_spoken),
        "reasons": sorted(flag.value for flag in profile.flags),
        "monthlyIncome": demographics.get("monthlyIncome"),
        "incomeCurrency": demographics.get("incomeCurrency"),
    }


def _disqualified_summary(d: DisqualifiedCountry, include_explanations: bool) -> Dict[str, Any]:
    summary = {
        "code": d.code,
        "name": d.name,
        "baseScore": round(d.base_score, 2),
        "breakdown": _plain(d.breakdown),
        "netIncomePercent": d.net_income_percent,
        "reason": d.reason,
        "shortNote": d.short_note,
    }
    if include_explanations:
        summary["explanations"] = _plain(d.explanations)
    return summary


def _plain(mapping: Dict[Any, Any]) -> Dict[str, Any]:
    """Dimension-keyed dict to plain string keys."""
    return {getattr(k, "value", k): v for k, v in mapping.items()}
