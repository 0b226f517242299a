from __future__ import annotations

import asyncio
import contextlib
import logging

from app.services.cache import SlotCache

logger = logging.getLogger(__name__)


class BackgroundWorker:
    """Periodic maintenance job owned by the app lifespan."""

    def __init__(self, *, interval: float, name: str) -> None:
        self._interval = interval
        self._name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self._name)
        logger.info("%s started (every %.0fs)", self._name, self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("%s stopped", self._name)

    async def run_once(self) -> None:
        raise NotImplementedError

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.run_once()
            except Exception:
                logger.exception("%s run failed, retrying in %.0fs", self._name, self._interval)


class CachePruner(BackgroundWorker):
    """Deletes slot cache entries that are past the freshness window."""

    def __init__(self, cache: SlotCache, *, interval: float) -> None:
        super().__init__(interval=interval, name="cache-pruner")
        self._cache = cache

    async def run_once(self) -> None:
        removed = await self._cache.prune()
        logger.debug("cache-pruner removed %d entries", removed)
