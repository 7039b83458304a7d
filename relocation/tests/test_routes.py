"""
Test the /quiz API with FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from relocation.ai.advisor import AdvisoryClient
from relocation.logic.constants import MESSAGE_INVALID_PROFILE, SUMMARY_DEFAULT, SUMMARY_NO_MATCHES
from relocation.routes import get_advisor

from conftest import FakeAdvisor


QUIZ = {
    "ageRange": "25-34",
    "currentCountry": "Brazil",
    "languagesSpoken": ["English", "Portuguese"],
    "reasons": ["lower_taxes", "better_lgbtq", "better_weather", "climate_pref_mild"],
    "taxImportance": 8,
    "lgbtImportance": 9,
}


@pytest.fixture
def client():
    app.dependency_overrides[get_advisor] = lambda: AdvisoryClient(api_key=None)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_quiz_returns_ranked_matches(client):
    response = client.post("/quiz", json=QUIZ)

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["mergeSource"] == "numeric_fallback"
    assert data["bestMatch"] == data["topMatches"][0]
    assert data["simpleScore"] == data["topMatches"][0]["totalScore"]
    assert data["receivedData"] == QUIZ
    assert len(data["disqualifiedTop"]) <= 3

    scores = [m["totalScore"] for m in data["topMatches"]]
    assert scores == sorted(scores, reverse=True)
    assert "costOfLiving" in data["topMatches"][0]["breakdown"]
    assert "climateMatch" in data["topMatches"][0]["breakdown"]


def test_quiz_with_advisor_reorders(client):
    ranked_last = client.post("/quiz", json=QUIZ).json()["topMatches"][-1]["code"]
    app.dependency_overrides[get_advisor] = lambda: FakeAdvisor(
        answer={"ranked": [{"code": ranked_last, "rank": 1, "note": "Advisor pick"}]}
    )

    data = client.post("/quiz", json=QUIZ).json()

    assert data["mergeSource"] == "advisory"
    assert data["bestMatch"]["code"] == ranked_last
    assert data["bestMatch"]["aiNote"] == "Advisor pick"


@pytest.mark.parametrize("body", [
    {"reasons": ["lower_taxes", "not_a_flag"]},
    {},
    [],
    "lower_taxes",
])
def test_quiz_rejects_bad_profiles(client, body):
    response = client.post("/quiz", json=body)

    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert response.json()["message"] == MESSAGE_INVALID_PROFILE
    assert response.json()["topMatches"] == []


def test_quiz_rejects_malformed_json(client):
    response = client.post("/quiz", content="{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["ok"] is False


def test_quiz_internal_error(client, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("relocation.logic.aggregator.aggregate_score", explode)

    response = client.post("/quiz", json=QUIZ)

    assert response.status_code == 500
    assert response.json()["ok"] is False


def test_explain_round_trip_templates_without_advisor(client):
    quiz = client.post("/quiz", json=QUIZ).json()

    response = client.post("/quiz/explain", json={
        "profile": QUIZ,
        "topMatches": quiz["topMatches"],
        "disqualifiedTop": quiz["disqualifiedTop"],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["overallSummary"] == SUMMARY_DEFAULT
    assert [w["code"] for w in data["winners"]] == [m["code"] for m in quiz["topMatches"][:3]]
    assert len(data["disqualified"]) == len(quiz["disqualifiedTop"])
    assert data["source"] == "numeric_fallback"


def test_explain_without_matches(client):
    response = client.post("/quiz/explain", json={"profile": QUIZ, "topMatches": []})

    assert response.status_code == 200
    assert response.json()["overallSummary"] == SUMMARY_NO_MATCHES
    assert response.json()["winners"] == []


def test_country_detail(client):
    response = client.post("/quiz/countries/prt", json=QUIZ)

    assert response.status_code == 200
    data = response.json()
    assert data["code"] == "PRT"
    assert data["isDisqualified"] is False
    assert "lgbtRights" in data["dimensions"]


def test_country_detail_unknown_code(client):
    assert client.post("/quiz/countries/XYZ", json=QUIZ).status_code == 404


def test_list_countries_and_health(client):
    countries = client.get("/quiz/countries").json()
    health = client.get("/quiz/health").json()

    assert countries["count"] == len(countries["countries"])
    assert {"code", "name", "shortNote"} <= set(countries["countries"][0])
    assert health["status"] == "ok"
    assert health["advisoryConfigured"] is False
