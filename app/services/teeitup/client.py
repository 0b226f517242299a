"""
Low-level HTTP client for the TeeItUp public availability API.

Returns the decoded JSON as-is; shape discovery happens in the service.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from app.config import HTTP_TIMEOUT_SECONDS
from app.models import Provider
from app.services.errors import ParseError
from app.services.teeitup.config import AVAILABILITY_URL, DEFAULT_HEADERS, MAX_RESULTS

logger = logging.getLogger(__name__)


class TeeItUpClient:
    """Async HTTP client for the TeeItUp availability API."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get_availability(
        self,
        course_id: str,
        day: date,
        holes: int,
        golfers: int,
        referer: str | None = None,
    ) -> Any:
        params = {
            "course": course_id,
            "date": day.isoformat(),
            "holes": str(holes),
            "golfers": str(golfers),
            "max": MAX_RESULTS,
        }
        headers = {"Origin": referer, "Referer": referer} if referer else None

        logger.debug("TeeItUp availability request: %s", params)
        resp = await self._client.get(AVAILABILITY_URL, params=params, headers=headers)
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError("response is not JSON", Provider.TEEITUP.value) from exc
