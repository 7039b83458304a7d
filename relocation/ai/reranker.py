"""
Advisory Re-ranker

Asks the advisor to reorder the numeric winners and merges its answer.
Never raises: every failure degrades to the numeric order.
"""

import logging
from typing import List, Optional

from ..logic.advisory_merge import collect_notes, merge_advisory_order, parse_advisory_entries
from ..logic.constants import ADVISORY_MAX_DISQUALIFIED
from ..logic.contracts import (
    AdvisoryOutcome,
    DisqualifiedCountry,
    MergeSource,
    RankedCountry,
    RelocationProfile,
)
from .advisor import AdvisoryClient, AdvisoryUnavailable
from .prompt_builder import build_rerank_payload, build_rerank_system_prompt

logger = logging.getLogger(__name__)


def rerank_winners(
    profile: RelocationProfile,
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
    advisor: Optional[AdvisoryClient] = None
) -> AdvisoryOutcome:
    """
    Reorder winners with the advisor's help.

    Args:
        profile: Canonical user profile
        winners: Numeric winners, already ranked
        disqualified: Disqualified countries, best first
        advisor: Injected client; None keeps the numeric order

    Returns:
        AdvisoryOutcome whose winners are a permutation of ``winners``
    """
    if not winners:
        return _numeric_fallback(winners, disqualified, "no winners to reorder")

    if advisor is None or not advisor.configured:
        return _numeric_fallback(winners, disqualified, "advisory not configured")

    try:
        answer = advisor.complete_json(
            build_rerank_system_prompt(),
            build_rerank_payload(profile, winners, disqualified),
        )
    except AdvisoryUnavailable as e:
        logger.warning(f"Advisory rerank failed, using numeric order: {e}")
        return _numeric_fallback(winners, disqualified, str(e))
    except Exception as e:
        logger.warning(f"Advisory rerank raised {type(e).__name__}, using numeric order: {e}")
        return _numeric_fallback(winners, disqualified, f"advisory error: {type(e).__name__}")

    entries = parse_advisory_entries(answer.get("ranked"))
    merged = merge_advisory_order(winners, entries)
    if merged is None:
        logger.warning("Advisory rerank returned no usable entries, using numeric order")
        return _numeric_fallback(winners, disqualified, "no usable advisory entries")

    sent_disqualified = [d.code for d in disqualified[:ADVISORY_MAX_DISQUALIFIED]]
    disqualified_entries = parse_advisory_entries(answer.get("disqualifiedNotes"))

    logger.info(f"Advisory reordered {len(merged)} winners")
    return AdvisoryOutcome(
        source=MergeSource.ADVISORY,
        winners=merged,
        notes=collect_notes(entries, [w.code for w in winners]),
        disqualified_notes=collect_notes(disqualified_entries, sent_disqualified),
    )


def _numeric_fallback(
    winners: List[RankedCountry],
    disqualified: List[DisqualifiedCountry],
    reason: str
) -> AdvisoryOutcome:
    """Keep the numeric order; disqualified notes repeat the rule that removed them."""
    return AdvisoryOutcome(
        source=MergeSource.NUMERIC_FALLBACK,
        winners=list(winners),
        disqualified_notes={d.code: d.reason for d in disqualified},
        fallback_reason=reason,
    )
