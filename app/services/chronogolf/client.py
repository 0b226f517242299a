"""Low-level HTTP client for the Chronogolf tee time API."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from app.config import HTTP_TIMEOUT_SECONDS
from app.models import Provider
from app.services.chronogolf.config import DEFAULT_HEADERS, TEETIMES_URL
from app.services.errors import ParseError

logger = logging.getLogger(__name__)


class ChronogolfClient:
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

    async def get_teetimes(
        self,
        club_id: str,
        course_id: str,
        day: date,
        nb_holes: int,
        players: int,
        affiliation_type_ids: str | None = None,
        referer: str | None = None,
    ) -> Any:
        params = {
            "date": day.isoformat(),
            "course_id": course_id,
            "nb_holes": str(nb_holes),
            "players": str(players),
        }
        if affiliation_type_ids:
            params["affiliation_type_ids"] = affiliation_type_ids
        headers = {"Referer": referer} if referer else None

        url = TEETIMES_URL.format(club_id=club_id)
        logger.debug("Chronogolf teetimes request: %s %s", url, params)
        resp = await self._client.get(url, params=params, headers=headers)
        resp.raise_for_status()
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError("response is not JSON", Provider.CHRONOGOLF.value) from exc
