import pytest
from fastapi.testclient import TestClient

from app import create_app
from errors import FetchError
from services.apod import get_service


@pytest.fixture
def client(service):
    app = create_app()
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client


def test_ready(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json()["service"] == "apod-api"


def test_today(client, source):
    response = client.get("/api/apod/today")
    assert response.status_code == 200
    assert response.json()["date"] == "2024-03-10"
    assert source.calls == ["2024-03-10"]


def test_by_date(client, source):
    response = client.get("/api/apod", params={"date": "2023-12-25"})
    assert response.status_code == 200
    assert response.json()["date"] == "2023-12-25"

    client.get("/api/apod", params={"date": "2023-12-25"})
    assert source.count("2023-12-25") == 1


@pytest.mark.parametrize("raw", ["yesterday", "2024-13-01", "2024/03/10"])
def test_by_date_rejects_malformed_date(client, source, raw):
    response = client.get("/api/apod", params={"date": raw})
    assert response.status_code == 400
    assert "Invalid date" in response.json()["error"]
    assert source.calls == []


def test_by_date_requires_date(client):
    assert client.get("/api/apod").status_code == 422


def test_by_date_not_found_when_upstream_empty(client, source):
    source.values["2024-01-01"] = None
    response = client.get("/api/apod", params={"date": "2024-01-01"})
    assert response.status_code == 404


def test_fetch_error_maps_to_bad_gateway(client, source):
    source.values["2024-01-01"] = FetchError("NASA APOD API error", upstream_status=503)
    response = client.get("/api/apod", params={"date": "2024-01-01"})

    assert response.status_code == 502
    assert response.json()["upstream_status"] == 503


def test_recent_defaults_to_ten_days(client):
    response = client.get("/api/apod/recent")
    assert response.status_code == 200
    dates = [item["date"] for item in response.json()]
    assert len(dates) == 10
    assert dates[0] == "2024-03-10"
    assert dates[-1] == "2024-03-01"


@pytest.mark.parametrize("days, expected", [(0, 1), (-3, 1), (3, 3), (30, 30), (500, 30)])
def test_recent_clamps_days(client, days, expected):
    response = client.get("/api/apod/recent", params={"days": days})
    assert len(response.json()) == expected


def test_recent_failure_returns_no_partial_list(client, source):
    source.values["2024-03-09"] = FetchError("boom")
    response = client.get("/api/apod/recent", params={"days": 3})
    assert response.status_code == 502
    assert source.calls == ["2024-03-10", "2024-03-09"]


def test_health_reports_cache_and_upstream(client):
    response = client.get("/health")
    body = response.json()

    assert body["status"] == "ok"
    assert body["upstream"] == "connected"
    assert body["cache"]["size"] == 1
    assert body["cache"]["max_size"] == 50


def test_health_degraded_when_upstream_fails(client, source):
    source.values["2024-03-10"] = FetchError("down")
    body = client.get("/health").json()

    assert body["status"] == "degraded"
    assert body["upstream"] == "error"


def test_security_headers(client):
    response = client.get("/ready")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
