"""
Common interface for booking platform integrations.

Every provider adapter subclasses ProviderAdapter so the aggregator is
decoupled from the upstream wire format.  Subclasses implement
``_fetch``; the public ``fetch_slots`` wraps it so that no network,
parse or configuration failure ever escapes the adapter.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import httpx

from app.models import Course, Provider, SearchCriteria, Slot
from app.services.errors import ConfigurationError, ParseError, ProviderError

logger = logging.getLogger(__name__)


@dataclass
class AdapterResult:
    """Slots for one course, plus why there are none when something failed."""

    slots: list[Slot] = field(default_factory=list)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def failed(cls, reason: str) -> AdapterResult:
        return cls(slots=[], reason=reason)


class ProviderAdapter(ABC):
    """Base class for the per-platform adapters."""

    provider: Provider

    async def fetch_slots(self, course: Course, criteria: SearchCriteria) -> AdapterResult:
        """Return this course's slots; never raises."""
        try:
            slots = await self._fetch(course, criteria)
        except httpx.TimeoutException:
            return self._fail(course, "upstream timeout")
        except httpx.HTTPStatusError as exc:
            return self._fail(course, f"upstream HTTP {exc.response.status_code}")
        except httpx.HTTPError as exc:
            return self._fail(course, f"transport error: {exc.__class__.__name__}")
        except ConfigurationError as exc:
            return self._fail(course, f"configuration: {exc.message}")
        except ParseError as exc:
            return self._fail(course, f"parse: {exc.message}")
        except ProviderError as exc:
            return self._fail(course, exc.message)
        except Exception:
            logger.exception("[%s] Unexpected error for %s", self.provider.value, course.name)
            return AdapterResult.failed("internal error")

        logger.info(
            "[%s] %s: date=%s, found %d slots",
            self.provider.value,
            course.name,
            criteria.date,
            len(slots),
        )
        return AdapterResult(slots=slots)

    @abstractmethod
    async def _fetch(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        """Fetch and normalize one course's tee times.  May raise."""
        ...

    async def close(self) -> None:
        """Release HTTP resources."""

    def _fail(self, course: Course, reason: str) -> AdapterResult:
        logger.warning("[%s] %s yielded no slots: %s", self.provider.value, course.name, reason)
        return AdapterResult.failed(reason)
