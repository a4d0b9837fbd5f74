import pytest
from fastapi.testclient import TestClient

import app as app_module
from config.settings import settings


RISKY_TEXT = "We may share your data with third party advertisers."


@pytest.fixture
def client():
    with TestClient(app_module.app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == settings.APP_VERSION
    assert body["features"]["risk_scoring"] is True


def test_analyze_returns_result_with_processing_metadata(client):
    response = client.post("/api/analyze", json={"text": RISKY_TEXT, "url": "https://www.twitter.com/tos"})

    assert response.status_code == 200
    body = response.json()
    assert body["risk_score"] == 76.5
    assert body["risk_level"] == "HIGH"
    assert body["red_flags"][0]["category"] == "DATA_SHARING_RESALE"
    assert body["benchmark"]["industry"] == "SOCIAL_MEDIA"
    assert body["metadata"]["text_length"] == len(RISKY_TEXT)
    assert body["metadata"]["language"] == "en"
    assert body["metadata"]["deterministic_analysis"] is True
    assert "processing_time_ms" in body["metadata"]
    assert "timestamp" in body["metadata"]


def test_analyze_applies_user_preferences(client):
    text     = ("We share your data with third parties and data brokers. "
                "You agree to binding arbitration of every claim against us.")
    response = client.post("/api/analyze", json={"text": text,
                                                 "user_preferences": {"privacy_weight": 1,
                                                                      "legal_rights_weight": 0,
                                                                      "convenience_weight": 0}})

    assert response.status_code == 200
    assert response.json()["risk_score"] == 85.0


@pytest.mark.parametrize("payload", [{}, {"text": ""}, {"text": "   "}, {"text": 42}])
def test_analyze_rejects_missing_text(client, payload):
    response = client.post("/api/analyze", json=payload)

    assert response.status_code == 400
    assert "non-empty string" in response.json()["error"]


def test_analyze_rejects_oversized_text(client):
    response = client.post("/api/analyze", json={"text": "a" * (settings.MAX_TEXT_LENGTH + 1)})

    assert response.status_code == 413


def test_analyze_rejects_out_of_range_preferences(client):
    response = client.post("/api/analyze", json={"text": RISKY_TEXT, "user_preferences": {"privacy_weight": 2}})

    assert response.status_code == 422


def test_analyze_failure_returns_fallback(client, monkeypatch):
    def broken_analyze(**kwargs):
        raise RuntimeError("pattern table unavailable")

    monkeypatch.setattr(app_module.analysis_engine, "analyze", broken_analyze)

    response = client.post("/api/analyze", json={"text": RISKY_TEXT})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Analysis failed"
    assert body["message"] == "pattern table unavailable"
    assert body["fallback"]["fallback"] is True
    assert body["fallback"]["risk_level"] == "UNKNOWN"


def test_analyze_without_engine_returns_fallback():
    # No context manager, so the startup handler never builds the engine
    test_client = TestClient(app_module.app)

    response = test_client.post("/api/analyze", json={"text": RISKY_TEXT})

    assert response.status_code == 503
    assert response.json()["fallback"]["fallback"] is True


def test_batch_analysis(client):
    response = client.post("/api/analyze/batch", json={"texts": [{"text": RISKY_TEXT},
                                                                 {"text": "Nothing risky lives inside this friendly sentence."}]})

    assert response.status_code == 200
    body = response.json()
    assert body["metadata"]["batch_size"] == 2
    assert [analysis["risk_score"] for analysis in body["analyses"]] == [76.5, 0.0]


@pytest.mark.parametrize("texts", [[], [{"text": RISKY_TEXT}] * 11, "not a list", None])
def test_batch_rejects_bad_sizes(client, texts):
    response = client.post("/api/analyze/batch", json={"texts": texts})

    assert response.status_code == 400


def test_batch_rejects_bad_items(client):
    assert client.post("/api/analyze/batch", json={"texts": ["plain string"]}).status_code == 400
    assert client.post("/api/analyze/batch", json={"texts": [{"text": ""}]}).status_code == 400
    assert client.post("/api/analyze/batch", json={"texts": [{"text": "a" * (settings.MAX_TEXT_LENGTH + 1)}]}).status_code == 413


def test_model_info(client):
    body = client.get("/api/model/info").json()

    assert body["model"] == settings.ENGINE_NAME
    assert body["deterministic"] is True


def test_categories(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    assert [category["key"] for category in response.json()][:2] == ["DATA_SHARING_RESALE", "FORCED_ARBITRATION"]


def test_batch_rejects_non_string_url(client):
    response = client.post("/api/analyze/batch", json={"texts": [{"text": RISKY_TEXT, "url": 12345}]})

    assert response.status_code == 400
    assert "url must be a string" in response.json()["error"]


def test_analyze_rejects_non_string_url(client):
    response = client.post("/api/analyze", json={"text": RISKY_TEXT, "url": 12345})

    assert response.status_code == 422
