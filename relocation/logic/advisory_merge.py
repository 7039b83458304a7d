"""
Advisory Merge

Reconciles the numeric winners order with an advisory order returned by an
external reasoning collaborator. The advisory order can only reorder: the
result is always a permutation of the numeric winners.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .contracts import AdvisoryEntry, RankedCountry

logger = logging.getLogger(__name__)


def parse_advisory_entries(raw: Any) -> List[AdvisoryEntry]:
    """
    Validate the collaborator's array of ``{code, rank, note}`` items.

    Entries that do not match the shape are dropped individually; anything
    that is not a list yields no entries.
    """
    if not isinstance(raw, list):
        return []

    entries: List[AdvisoryEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            entries.append(AdvisoryEntry.model_validate(item))
        except ValidationError:
            logger.debug(f"Dropping malformed advisory entry: {item!r}")
    return entries


def filter_known(entries: List[AdvisoryEntry], known_codes: Iterable[str]) -> List[AdvisoryEntry]:
    """Drop entries whose code was never sent to the collaborator."""
    allowed = set(known_codes)
    kept = [e for e in entries if e.code in allowed]
    dropped = [e.code for e in entries if e.code not in allowed]
    if dropped:
        logger.info(f"Ignoring advisory codes not in the candidate set: {dropped}")
    return kept


def merge_advisory_order(
    winners: List[RankedCountry],
    entries: List[AdvisoryEntry]
) -> Optional[List[RankedCountry]]:
    """
    Build the final winners order.

    Validly reordered countries come first in ascending advisory rank
    (first occurrence of a code wins), then every remaining winner in its
    numeric order.

    Args:
        winners: Numeric winners, already ranked
        entries: Parsed advisory entries

    Returns:
        The merged order, or None when no entry survives validation
    """
    by_code: Dict[str, RankedCountry] = {w.code: w for w in winners}
    valid = filter_known(entries, by_code.keys())
    if not valid:
        return None

    placed: List[RankedCountry] = []
    seen = set()
    for entry in sorted(valid, key=lambda e: e.rank):
        if entry.code in seen:
            continue
        seen.add(entry.code)
        placed.append(by_code[entry.code])

    remaining = [w for w in winners if w.code not in seen]
    return placed + remaining


def collect_notes(entries: Iterable[AdvisoryEntry], known_codes: Iterable[str]) -> Dict[str, str]:
    """First non-empty note per known code."""
    allowed = set(known_codes)
    notes: Dict[str, str] = {}
    for entry in entries:
        if entry.code in allowed and entry.note and entry.code not in notes:
            notes[entry.code] = entry.note
    return notes
