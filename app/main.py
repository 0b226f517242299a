"""Main FastAPI application for Tee Time Finder."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import (
    CACHE_BACKEND,
    CACHE_DB_PATH,
    CACHE_PRUNE_INTERVAL,
    CACHE_TTL_SECONDS,
    COURSE_TIMEOUT_SECONDS,
    COURSES_PATH,
    FEE_GROUPS_PATH,
    HTTP_TIMEOUT_SECONDS,
    LOG_LEVEL,
)
from app.rate_limit import limiter
from app.routers import courses, health, search
from app.services.aggregator import SearchAggregator
from app.services.background import CachePruner
from app.services.cache import InMemorySlotStore, SlotCache, SlotStore, SqliteSlotStore
from app.services.reference import load_reference_data
from app.services.registry import AdapterRegistry

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def _open_store() -> SlotStore:
    if CACHE_BACKEND == "sqlite":
        store = SqliteSlotStore(CACHE_DB_PATH)
        await store.open()
        return store
    if CACHE_BACKEND != "memory":
        logger.warning("Unknown CACHE_BACKEND %r, using in-memory slot cache", CACHE_BACKEND)
    return InMemorySlotStore()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    reference = load_reference_data(COURSES_PATH, FEE_GROUPS_PATH)

    cache = SlotCache(await _open_store(), ttl_seconds=CACHE_TTL_SECONDS)
    adapters = AdapterRegistry()
    adapters.register_defaults(reference.fee_groups, timeout=HTTP_TIMEOUT_SECONDS)
    pruner = CachePruner(cache, interval=CACHE_PRUNE_INTERVAL)

    app.state.reference = reference
    app.state.cache = cache
    app.state.aggregator = SearchAggregator(adapters, cache, course_timeout=COURSE_TIMEOUT_SECONDS)

    await pruner.start()
    try:
        yield
    finally:
        await pruner.stop()
        await adapters.close()
        await cache.close()


app = FastAPI(
    title="Tee Time Finder API",
    description="Aggregates public golf tee time availability across booking platforms",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(health.router)
app.include_router(courses.router)
app.include_router(search.router)
