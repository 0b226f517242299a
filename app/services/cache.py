"""
Short-lived cache of per-course search results.

Sits in front of live scraping so that repeated searches for the same
course and criteria inside the freshness window do not hit the upstream
booking system again.  Empty results are cached too (negative caching),
so a source with nothing available, or one that is currently broken, is
not re-fetched on every search.

Usage::

    cache = SlotCache(InMemorySlotStore(), ttl_seconds=600)
    key = CacheKey.for_search(course.id, criteria)
    slots = await cache.lookup(key)          # None on miss / expiry
    if slots is None:
        slots = await adapter.fetch_slots(course, criteria)
        await cache.store(key, course.name, course.provider, slots)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Protocol

import aiosqlite
from pydantic import TypeAdapter, ValidationError

from app.models import CacheStats, Provider, SearchCriteria, Slot

logger = logging.getLogger(__name__)

_SLOTS_ADAPTER = TypeAdapter(list[Slot])

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheKey:
    """
    Composite cache key.

    ``holes``, ``earliest`` and ``latest`` may be None; None only ever
    matches None (an unspecified hole count never matches 9 or 18).
    """

    course_id: str
    date: date
    holes: int | None
    party_size: int
    earliest: str | None = None
    latest: str | None = None

    @classmethod
    def for_search(cls, course_id: str, criteria: SearchCriteria) -> CacheKey:
        return cls(
            course_id=course_id,
            date=criteria.date,
            holes=criteria.holes,
            party_size=criteria.party_size,
            earliest=criteria.earliest,
            latest=criteria.latest,
        )


@dataclass(frozen=True)
class CacheEntry:
    slots: list[Slot]
    written_at: float  # epoch seconds
    course_name: str | None = None
    provider: Provider | None = None

    def age(self, now: float) -> float:
        return now - self.written_at

    def is_fresh(self, ttl_seconds: float, now: float) -> bool:
        return self.age(now) <= ttl_seconds


class SlotStore(Protocol):
    """Storage backend behind SlotCache.  Each put replaces one key atomically."""

    backend: str

    async def get(self, key: CacheKey) -> CacheEntry | None:
        ...

    async def put(self, key: CacheKey, entry: CacheEntry) -> None:
        ...

    async def prune(self, older_than: float) -> int:
        """Delete entries written before *older_than*; return how many."""
        ...

    async def close(self) -> None:
        ...


# ── In-memory store ───────────────────────────────────────────────────────


class InMemorySlotStore:
    """
    Dict-backed store.

    Every put swaps in a fresh immutable CacheEntry, so readers never see
    a partially written value.
    """

    backend = "memory"

    def __init__(self) -> None:
        self._entries: dict[CacheKey, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: CacheKey) -> CacheEntry | None:
        return self._entries.get(key)

    async def put(self, key: CacheKey, entry: CacheEntry) -> None:
        self._entries[key] = CacheEntry(
            slots=list(entry.slots),
            written_at=entry.written_at,
            course_name=entry.course_name,
            provider=entry.provider,
        )

    async def prune(self, older_than: float) -> int:
        stale = [k for k, e in self._entries.items() if e.written_at < older_than]
        for k in stale:
            self._entries.pop(k, None)
        return len(stale)

    async def close(self) -> None:
        self._entries.clear()


# ── SQLite store ──────────────────────────────────────────────────────────

_SCHEMA = """
CREATE TABLE IF NOT EXISTS slot_cache (
    course_id   TEXT NOT NULL,
    date        TEXT NOT NULL,
    holes       INTEGER NOT NULL,   -- 0 = unspecified
    party_size  INTEGER NOT NULL,
    earliest    TEXT NOT NULL,      -- '' = unspecified
    latest      TEXT NOT NULL,      -- '' = unspecified
    course_name TEXT,
    provider    TEXT,
    slots       TEXT NOT NULL,      -- JSON array of slots
    updated_at  REAL NOT NULL,
    PRIMARY KEY (course_id, date, holes, party_size, earliest, latest)
);

CREATE INDEX IF NOT EXISTS idx_slot_cache_updated ON slot_cache(updated_at);
"""


def _key_params(key: CacheKey) -> tuple:
    # SQLite treats NULLs in a primary key as distinct, which would stop
    # INSERT OR REPLACE from replacing; map None to sentinels instead.
    return (
        key.course_id,
        key.date.isoformat(),
        key.holes or 0,
        key.party_size,
        key.earliest or "",
        key.latest or "",
    )


def _provider_or_none(raw: str | None) -> Provider | None:
    try:
        return Provider(raw) if raw else None
    except ValueError:
        return None


class SqliteSlotStore:
    """aiosqlite-backed store; survives restarts and can be shared by workers."""

    backend = "sqlite"

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def open(self) -> None:
        """Open the database and create the table if it doesn't exist."""
        path = Path(self._db_path)
        if self._db_path != ":memory:":
            path.parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.execute("PRAGMA journal_mode=WAL")
        await self._db.executescript(_SCHEMA)
        await self._db.commit()
        logger.info("Slot cache database ready at %s", self._db_path)

    def _conn(self) -> aiosqlite.Connection:
        assert self._db is not None, "Slot cache not opened, call open() first"
        return self._db

    async def get(self, key: CacheKey) -> CacheEntry | None:
        cursor = await self._conn().execute(
            """
            SELECT course_name, provider, slots, updated_at FROM slot_cache
            WHERE course_id = ? AND date = ? AND holes = ? AND party_size = ?
              AND earliest = ? AND latest = ?
            """,
            _key_params(key),
        )
        row = await cursor.fetchone()
        await cursor.close()
        if row is None:
            return None

        try:
            slots = _SLOTS_ADAPTER.validate_json(row["slots"])
        except ValidationError:
            logger.warning("Corrupt slot cache payload for %s on %s, treating as miss", key.course_id, key.date)
            return None

        return CacheEntry(
            slots=slots,
            written_at=row["updated_at"],
            course_name=row["course_name"],
            provider=_provider_or_none(row["provider"]),
        )

    async def put(self, key: CacheKey, entry: CacheEntry) -> None:
        payload = _SLOTS_ADAPTER.dump_json(entry.slots).decode()
        db = self._conn()
        await db.execute(
            """
            INSERT OR REPLACE INTO slot_cache
                (course_id, date, holes, party_size, earliest, latest,
                 course_name, provider, slots, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                *_key_params(key),
                entry.course_name,
                entry.provider.value if entry.provider else None,
                payload,
                entry.written_at,
            ),
        )
        await db.commit()

    async def prune(self, older_than: float) -> int:
        db = self._conn()
        cursor = await db.execute("DELETE FROM slot_cache WHERE updated_at < ?", (older_than,))
        await db.commit()
        return cursor.rowcount

    async def close(self) -> None:
        if self._db is not None:
            await self._db.close()
            self._db = None
            logger.info("Slot cache database closed")


# ── Cache facade ──────────────────────────────────────────────────────────


class SlotCache:
    """
    TTL discipline over a SlotStore.

    Entries older than *ttl_seconds* are reported as a miss even though they
    are still physically present; the CachePruner removes them later.
    """

    def __init__(
        self,
        store: SlotStore,
        *,
        ttl_seconds: float = 600.0,
        clock: Clock = time.time,
    ) -> None:
        self._store = store
        self._ttl = ttl_seconds
        self._clock = clock
        self.stats: dict[str, int] = {"hits": 0, "misses": 0, "stale": 0}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def store_backend(self) -> SlotStore:
        return self._store

    def snapshot(self) -> CacheStats:
        """Current counters, for the health endpoint."""
        return CacheStats(backend=self._store.backend, ttl_seconds=self._ttl, **self.stats)

    async def lookup_entry(self, key: CacheKey) -> CacheEntry | None:
        """Raw entry with its write timestamp, fresh or not."""
        try:
            return await self._store.get(key)
        except (aiosqlite.Error, ValueError):
            logger.warning("Slot cache read failed for %s, treating as miss", key.course_id, exc_info=True)
            return None

    async def lookup(self, key: CacheKey) -> list[Slot] | None:
        """Cached slots for *key*, or None on a miss or an expired entry."""
        entry = await self.lookup_entry(key)
        if entry is None:
            self.stats["misses"] += 1
            return None
        if not entry.is_fresh(self._ttl, self._clock()):
            self.stats["stale"] += 1
            return None
        self.stats["hits"] += 1
        return list(entry.slots)

    async def store(
        self,
        key: CacheKey,
        course_name: str | None,
        provider: Provider | None,
        slots: list[Slot],
    ) -> None:
        """Overwrite *key* unconditionally; an empty list is a valid value."""
        entry = CacheEntry(
            slots=list(slots),
            written_at=self._clock(),
            course_name=course_name,
            provider=provider,
        )
        await self._store.put(key, entry)

    async def prune(self) -> int:
        removed = await self._store.prune(self._clock() - self._ttl)
        if removed:
            logger.info("Pruned %d expired slot cache entries", removed)
        return removed

    async def close(self) -> None:
        await self._store.close()
