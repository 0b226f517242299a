"""
Search aggregator – fans a search out to every configured course.

For each course, independently and concurrently:

1.  Look the (course, criteria) key up in the slot cache.
2.  On a fresh hit, use the cached slots as-is.
3.  Otherwise run the provider adapter and write its result back,
    including an empty list when the adapter failed.

Once every course has settled the slot lists are flattened, filtered by
time window and capacity, and returned.  No single course can fail or
stall the search as a whole.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from app.models import Course, SearchCriteria, Slot
from app.services.cache import CacheKey, SlotCache
from app.services.filters import filter_by_capacity, filter_by_window
from app.services.provider import AdapterResult
from app.services.registry import AdapterRegistry

logger = logging.getLogger(__name__)


class SearchAggregator:
    def __init__(
        self,
        adapters: AdapterRegistry,
        cache: SlotCache,
        *,
        course_timeout: float = 9.0,
    ) -> None:
        self._adapters = adapters
        self._cache = cache
        self._course_timeout = course_timeout

    async def search(self, courses: Iterable[Course], criteria: SearchCriteria) -> list[Slot]:
        """Slots for *criteria* across all *courses*.  Never raises."""
        courses = list(courses)
        started = time.perf_counter()

        results = await asyncio.gather(
            *(self._resolve_safely(course, criteria) for course in courses),
            return_exceptions=True,
        )

        merged: list[Slot] = []
        for course, result in zip(courses, results):
            if isinstance(result, BaseException):
                logger.error("Resolution for %s ended with %r", course.name, result)
                continue
            merged.extend(result)

        slots = filter_by_window(merged, criteria.earliest, criteria.latest)
        slots = filter_by_capacity(slots, criteria.party_size)
        slots.sort(key=lambda s: (s.date, s.time, s.course))

        logger.info(
            "Search %s (party=%d, holes=%s) → %d slots from %d courses in %.2fs",
            criteria.date,
            criteria.party_size,
            criteria.holes,
            len(slots),
            len(courses),
            time.perf_counter() - started,
        )
        return slots

    async def _resolve_safely(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        try:
            return await self._resolve(course, criteria)
        except Exception:
            logger.exception("Unexpected failure resolving %s", course.name)
            return []

    async def _resolve(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        key = CacheKey.for_search(course.id, criteria)

        cached = await self._cache.lookup(key)
        if cached is not None:
            logger.debug("Cache hit for %s on %s", course.name, criteria.date)
            return cached

        result = await self._fetch(course, criteria)
        try:
            await self._cache.store(key, course.name, course.provider, result.slots)
        except Exception:
            logger.exception("Failed to cache slots for %s", course.name)
        return result.slots

    async def _fetch(self, course: Course, criteria: SearchCriteria) -> AdapterResult:
        adapter = self._adapters.get(course.provider)
        if adapter is None:
            logger.warning("No adapter registered for %s (%s)", course.name, course.provider.value)
            return AdapterResult.failed("no adapter")

        try:
            return await asyncio.wait_for(adapter.fetch_slots(course, criteria), self._course_timeout)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %.1fs", course.name, self._course_timeout)
            return AdapterResult.failed("course timeout")
        except Exception:
            logger.exception("Adapter for %s raised", course.name)
            return AdapterResult.failed("internal error")
