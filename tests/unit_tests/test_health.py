"""Tests for the /api/health endpoint."""

from app.config import ENVIRONMENT
from tests.mocks.models import MOCK_COURSES


def test_health_returns_ok(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200

    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["environment"] == ENVIRONMENT
    assert data["courses"] == len(MOCK_COURSES)
    assert "timestamp" in data


def test_health_reports_cache_counters(client):
    for _ in range(2):
        client.post("/api/search", json={"date": "2025-03-14"})

    cache = client.get("/api/health").json()["cache"]
    assert cache["backend"] == "memory"
    assert cache["ttl_seconds"] == 600
    # First search misses on all four courses, the second hits all four.
    assert cache["misses"] == len(MOCK_COURSES)
    assert cache["hits"] == len(MOCK_COURSES)
    assert cache["stale"] == 0
