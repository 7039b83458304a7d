"""
Country Catalog

Loads the static set of candidate countries, either from the bundled JSON
file or from the ``rec_countries`` table.
"""

import json
import logging
import os
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from .contracts import CountryRecord
from ..models import RecCountry

logger = logging.getLogger(__name__)

CATALOG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "data",
    "countries.json",
)

_RECORD_FIELDS = tuple(CountryRecord.model_fields)


class CatalogError(RuntimeError):
    """Catalog data is missing or inconsistent."""


@lru_cache(maxsize=None)
def load_catalog(path: str = CATALOG_PATH) -> Tuple[CountryRecord, ...]:
    """
    Load and validate the bundled catalog once per process.

    Args:
        path: JSON file holding a list of country objects

    Returns:
        Immutable tuple of CountryRecord
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = tuple(CountryRecord.model_validate(entry) for entry in data)
    _ensure_unique_codes(records)

    logger.info(f"Loaded {len(records)} countries from {os.path.basename(path)}")
    return records


def load_catalog_from_db(db: Session) -> Tuple[CountryRecord, ...]:
    """
    Read the catalog from the ``rec_countries`` table.

    Returns an empty tuple when the table has no rows.
    """
    rows = db.execute(select(RecCountry).order_by(RecCountry.code)).scalars().all()

    records = []
    for row in rows:
        payload = {
            name: getattr(row, name)
            for name in _RECORD_FIELDS
            if getattr(row, name, None) is not None
        }
        records.append(CountryRecord.model_validate(payload))

    _ensure_unique_codes(records)
    logger.debug(f"Loaded {len(records)} countries from database")
    return tuple(records)


def seed_catalog(db: Session, records: Optional[Iterable[CountryRecord]] = None) -> int:
    """
    Insert catalog records into ``rec_countries``, skipping codes already present.

    Args:
        db: Database session (caller commits)
        records: Records to insert; defaults to the bundled catalog

    Returns:
        Number of rows added
    """
    if records is None:
        records = load_catalog()

    existing = set(db.execute(select(RecCountry.code)).scalars().all())
    added = 0
    for record in records:
        if record.code in existing:
            continue
        db.add(RecCountry(**record.model_dump(), data_source="bundled"))
        existing.add(record.code)
        added += 1

    db.flush()
    logger.info(f"Seeded {added} countries into rec_countries")
    return added


def get_country(catalog: Iterable[CountryRecord], code: str) -> Optional[CountryRecord]:
    """Case-insensitive lookup by code."""
    wanted = code.strip().upper()
    for country in catalog:
        if country.code.upper() == wanted:
            return country
    return None


def _ensure_unique_codes(records: Iterable[CountryRecord]) -> None:
    seen = set()
    for record in records:
        if record.code in seen:
            raise CatalogError(f"Duplicate country code in catalog: {record.code}")
        seen.add(record.code)
