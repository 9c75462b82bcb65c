from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from salesguard.apps.api.main import app


def test_review_without_credentials_is_byte_identical_across_images() -> None:
    with TestClient(app) as client:
        first = client.post("/api/review", json={"image": "aaaa", "industry": "SaaS", "product": "CRM", "role": "电销"})
        second = client.post("/api/review", json={"image": "bbbb", "industry": "Retail", "product": "POS", "role": "KA"})

    assert first.status_code == 200
    assert first.content == second.content
    assert first.json()["overallScore"] == 72


def test_review_requires_image() -> None:
    with TestClient(app) as client:
        response = client.post("/api/review", json={"industry": "SaaS"})

    assert response.status_code == 400
    assert response.json() == {"error": "Image is required"}


def test_review_calls_workflow_when_configured(monkeypatch, provider_transport) -> None:
    monkeypatch.setenv("SALESGUARD_REVIEW_API_KEY", "review-key")
    seen = provider_transport(
        lambda request: httpx.Response(200, json={"data": {"outputs": {"text": '{"overallScore": 64, "stageScores": [], "mistakes": []}'}}})
    )

    with TestClient(app) as client:
        response = client.post("/api/review", json={"image": "img", "industry": "SaaS", "product": "CRM", "role": "电销"})

    assert response.status_code == 200
    assert response.json() == {"overallScore": 64, "stageScores": [], "mistakes": []}
    assert seen[0].headers["Authorization"] == "Bearer review-key"
    assert str(seen[0].url).endswith("/workflows/run")


def test_review_provider_failure_is_internal_error(monkeypatch, provider_transport) -> None:
    monkeypatch.setenv("SALESGUARD_REVIEW_API_KEY", "review-key")
    provider_transport(lambda request: httpx.Response(500, json={}))

    with TestClient(app) as client:
        response = client.post("/api/review", json={"image": "img"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_review_accepts_null_setup_fields() -> None:
    with TestClient(app) as client:
        response = client.post("/api/review", json={"image": "img", "industry": None, "product": None, "role": None})

    assert response.status_code == 200
    assert response.json()["overallScore"] == 72


def test_review_rejects_out_of_range_score(monkeypatch, provider_transport) -> None:
    monkeypatch.setenv("SALESGUARD_REVIEW_API_KEY", "review-key")
    provider_transport(lambda request: httpx.Response(200, json={"data": {"outputs": {"result": '{"overallScore": 250}'}}}))

    with TestClient(app) as client:
        response = client.post("/api/review", json={"image": "img"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
