"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • the canned courses from tests.mocks.models (no data files read)
  • mock provider adapters (no external HTTP)
  • an in-memory slot cache

The `client` fixture runs the full lifespan so the aggregator, cache
and pruner are built exactly as in production.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models import Provider
from app.services.reference import ReferenceData
from app.services.registry import AdapterRegistry
from tests.mocks.adapters import MockAdapter
from tests.mocks.models import (
    MOCK_CHRONOGOLF_COURSE,
    MOCK_COURSES,
    MOCK_MICLUB_COURSE,
    MOCK_QUICK18_COURSE,
    MOCK_TEEITUP_COURSE,
    make_slot,
)


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def mock_adapters() -> dict[Provider, MockAdapter]:
    """One mock adapter per provider, each with a couple of canned slots."""
    return {
        Provider.MICLUB: MockAdapter(
            Provider.MICLUB,
            slots={
                MOCK_MICLUB_COURSE.id: [
                    make_slot(MOCK_MICLUB_COURSE, "07:00", holes=None, max_players=4, booked_players=2, free_spots=2),
                    make_slot(MOCK_MICLUB_COURSE, "07:08", holes=None, max_players=4, booked_players=4, free_spots=0),
                ],
            },
        ),
        Provider.QUICK18: MockAdapter(
            Provider.QUICK18,
            slots={
                MOCK_QUICK18_COURSE.id: [
                    make_slot(MOCK_QUICK18_COURSE, "06:52", min_players=1, max_players=4, free_spots=4, price=45.0),
                ],
            },
        ),
        Provider.TEEITUP: MockAdapter(
            Provider.TEEITUP,
            slots={MOCK_TEEITUP_COURSE.id: [make_slot(MOCK_TEEITUP_COURSE, "08:10")]},
        ),
        Provider.CHRONOGOLF: MockAdapter(
            Provider.CHRONOGOLF,
            errors={MOCK_CHRONOGOLF_COURSE.id: RuntimeError("boom")},
        ),
    }


@pytest.fixture()
def _test_env(monkeypatch, mock_adapters):
    """
    Internal fixture that patches reference data, the adapter registry
    and the cache backend so the app lifespan runs against mocks.
    """
    # ── Reference data ────────────────────────────────────────────────
    monkeypatch.setattr(
        "app.main.load_reference_data",
        lambda *_: ReferenceData(courses=MOCK_COURSES, fee_groups={}),
    )

    # ── Mock adapter registry ─────────────────────────────────────────
    test_registry = AdapterRegistry()
    for provider, adapter in mock_adapters.items():
        test_registry.register(provider, adapter)

    # Prevent the lifespan from registering real adapters
    test_registry.register_defaults = lambda *a, **kw: None  # type: ignore[assignment]
    monkeypatch.setattr("app.main.AdapterRegistry", lambda: test_registry)

    # ── In-memory cache ───────────────────────────────────────────────
    monkeypatch.setattr("app.main.CACHE_BACKEND", "memory")
    monkeypatch.setattr("app.main.CACHE_TTL_SECONDS", 600.0)

    # ── Disable rate limiting in tests ────────────────────────────────
    from app.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return test_registry


@pytest.fixture()
def mock_registry(_test_env) -> AdapterRegistry:
    return _test_env


@pytest.fixture()
def client(_test_env: AdapterRegistry) -> TestClient:
    """FastAPI TestClient with mock adapters; the lifespan runs."""
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()
