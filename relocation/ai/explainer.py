"""
Match Explainer

Commentary pass: an overall summary plus one comment per top winner and per
near miss. Never raises; missing or failed answers are filled with
templated comments built from the numeric data.
"""

import logging
from typing import Any, Iterable, List, Optional

from ..logic.constants import (
    COMMENTARY_GUARANTEED_TOP,
    COMMENTARY_MAX_DISQUALIFIED,
    COMMENTARY_MAX_WINNERS,
    SUMMARY_DEFAULT,
    SUMMARY_NO_MATCHES,
)
from ..logic.contracts import (
    CommentaryOutcome,
    CountryComment,
    DisqualifiedCountry,
    MergeSource,
    RankedCountry,
    RelocationProfile,
)
from .advisor import AdvisoryClient, AdvisoryUnavailable
from .prompt_builder import build_commentary_payload, build_commentary_system_prompt

logger = logging.getLogger(__name__)


def explain_matches(
    profile: RelocationProfile,
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
    advisor: Optional[AdvisoryClient] = None
) -> CommentaryOutcome:
    """
    Produce commentary for a finished ranking.

    Args:
        profile: Canonical user profile
        winners: Final winners order
        disqualified: Disqualified countries, best first
        advisor: Injected client; None yields templated commentary

    Returns:
        CommentaryOutcome
    """
    if not winners:
        return CommentaryOutcome(
            source=MergeSource.NUMERIC_FALLBACK,
            overall_summary=SUMMARY_NO_MATCHES,
            fallback_reason="no winners",
        )

    sent_winners = winners[:COMMENTARY_MAX_WINNERS]
    sent_disqualified = disqualified[:COMMENTARY_MAX_DISQUALIFIED]

    if advisor is None or not advisor.configured:
        return _templated(sent_winners, sent_disqualified, "advisory not configured")

    try:
        answer = advisor.complete_json(
            build_commentary_system_prompt(),
            build_commentary_payload(profile, sent_winners, sent_disqualified),
        )
    except AdvisoryUnavailable as e:
        logger.warning(f"Advisory commentary failed, using templated comments: {e}")
        return _templated(sent_winners, sent_disqualified, str(e))
    except Exception as e:
        logger.warning(f"Advisory commentary raised {type(e).__name__}, using templated comments: {e}")
        return _templated(sent_winners, sent_disqualified, f"advisory error: {type(e).__name__}")

    summary = answer.get("overallSummary")
    if not isinstance(summary, str):
        logger.warning("Advisory commentary has no overallSummary, using templated comments")
        return _templated(sent_winners, sent_disqualified, "missing overallSummary")

    winner_comments = _parse_comments(answer.get("winners"), [w.code for w in sent_winners])
    commented = {c.code for c in winner_comments}
    for w in sent_winners[:COMMENTARY_GUARANTEED_TOP]:
        if w.code not in commented:
            winner_comments.append(winner_comment(w))

    return CommentaryOutcome(
        source=MergeSource.ADVISORY,
        overall_summary=summary if summary.strip() else SUMMARY_DEFAULT,
        winners=winner_comments,
        disqualified=_parse_comments(answer.get("disqualified"), [d.code for d in sent_disqualified]),
    )


def winner_comment(winner: RankedCountry) -> CountryComment:
    return CountryComment(
        code=winner.code,
        comment=(
            f"Good fit overall: strong score of {winner.total_score:.1f}/10 "
            f"and a mix of {winner.short_note.lower()}."
        ),
        synthesized=True,
    )


def disqualified_comment(country: DisqualifiedCountry) -> CountryComment:
    return CountryComment(
        code=country.code,
        comment=(
            f"Was a strong potential match (around {country.base_score:.1f}/10) "
            f"but was removed because: {country.reason}"
        ),
        synthesized=True,
    )


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _templated(
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
    reason: str
) -> CommentaryOutcome:
    return CommentaryOutcome(
        source=MergeSource.NUMERIC_FALLBACK,
        overall_summary=SUMMARY_DEFAULT,
        winners=[winner_comment(w) for w in winners[:COMMENTARY_GUARANTEED_TOP]],
        disqualified=[disqualified_comment(d) for d in disqualified],
        fallback_reason=reason,
    )


def _parse_comments(raw: Any, allowed_codes: Iterable[str]) -> List[CountryComment]:
    """Keep ``{code, aiComment}`` items for known codes, first occurrence wins."""
    if not isinstance(raw, list):
        return []

    allowed = set(allowed_codes)
    comments: List[CountryComment] = []
    seen = set()
    for item in raw:
        if not isinstance(item, dict):
            continue
        code = item.get("code")
        text = item.get("aiComment", item.get("comment"))
        if not isinstance(code, str) or not isinstance(text, str) or not text.strip():
            continue
        if code not in allowed or code in seen:
            continue
        seen.add(code)
        comments.append(CountryComment(code=code, comment=text.strip()))
    return comments
