"""
Shared fixtures for the relocation engine tests.
"""

import pytest

from relocation.logic.contracts import CountryRecord
from relocation.logic.profile_normalizer import normalize_profile


def make_country(code: str = "AAA", **overrides) -> CountryRecord:
    """Catalog entry with neutral core scores and no optional data."""
    data = {
        "code": code,
        "name": f"Country {code}",
        "short_note": "Balanced taxes and lifestyle",
        "tax_score": 5.0,
        "cost_of_living_score": 5.0,
        "income_growth_score": 5.0,
        "remote_friendly_score": 5.0,
        "safety_score": 5.0,
        "lifestyle_score": 5.0,
        "net_income_percent_typical": 70.0,
    }
    data.update(overrides)
    return CountryRecord(**data)


def make_profile(*reasons: str, **fields):
    """Profile from raw quiz fields, e.g. make_profile("lower_taxes", taxImportance=9)."""
    payload = {"reasons": list(reasons)}
    payload.update(fields)
    return normalize_profile(payload)


class FakeAdvisor:
    """Stands in for AdvisoryClient: returns a canned answer or raises."""

    def __init__(self, answer=None, error=None, configured=True):
        self.answer = answer
        self.error = error
        self.configured = configured
        self.calls = []

    def complete_json(self, system_prompt, payload):
        self.calls.append((system_prompt, payload))
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def small_catalog():
    return (
        make_country("HIG", tax_score=9.0, lgbt_score=9.0, lifestyle_score=8.0),
        make_country("MID", tax_score=6.0, lgbt_score=8.0),
        make_country("LOW", tax_score=3.0, lgbt_score=7.0, safety_score=4.0),
        make_country("ANT", tax_score=9.5, lgbt_score=1.0, lifestyle_score=7.0),
        make_country("WEK", tax_score=8.0, lgbt_score=5.5),
    )
