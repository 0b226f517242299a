from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urljoin

import httpx
from bs4 import Tag

from app.config import HTTP_TIMEOUT_SECONDS
from app.services.miclub.config import (
    AVAILABLE_RE,
    BOOK_WORD_RE,
    BOOKING_LINK_MARKER,
    DEFAULT_HEADERS,
    FRACTION_RE,
    OF_RE,
    ROW_DELIMITER_RE,
    ROW_SELECTOR,
    STANDARD_FOURBALL,
    TAKEN_RE,
)
from app.services.parsing import Page, ParsingStrategy, StrategyResult, collapse, find_price, run_strategies
from app.services.timeparse import find_time

logger = logging.getLogger(__name__)


@dataclass
class ParsedTeeTime:
    time: str  # "HH:MM"
    booked: int
    total: int
    booking_link: str | None = None
    price: float | None = None

    @property
    def free(self) -> int:
        return max(self.total - self.booked, 0)


def count_players(text: str) -> tuple[int, int] | None:
    """
    ``(booked, total)`` from one row's text, or None if the row has no
    recognisable capacity markers.
    """
    available = len(AVAILABLE_RE.findall(text))
    taken = len(TAKEN_RE.findall(text))
    if available + taken:
        return taken, available + taken

    for pattern in (FRACTION_RE, OF_RE):
        match = pattern.search(text)
        if match:
            booked, total = int(match.group(1)), int(match.group(2))
            if 0 < total and booked <= total:
                return booked, total
    return None


def _rows(page: Page) -> list[Tag]:
    # Skip container rows that wrap other rows so nothing is counted twice.
    return [row for row in page.soup.select(ROW_SELECTOR) if row.select_one(ROW_SELECTOR) is None]


def _booking_link(row: Tag, base_url: str | None) -> str | None:
    link = row.select_one(f'a[href*="{BOOKING_LINK_MARKER}"]')
    if link is None:
        return None
    href = str(link.get("href", "")).strip()
    if not href:
        return None
    return urljoin(base_url, href) if base_url else href


# ── Parsing strategies (ranked) ──────────────────────────────────────────


class StructuredRowStrategy:
    """Rows with explicit per-player markers or a booked/total fraction."""

    name = "structured-rows"

    def parse(self, page: Page) -> list[ParsedTeeTime]:
        results: list[ParsedTeeTime] = []
        for row in _rows(page):
            text = collapse(row.get_text(" "))
            found = find_time(text)
            if found is None:
                continue
            counts = count_players(text)
            if counts is None:
                continue
            booked, total = counts
            results.append(
                ParsedTeeTime(
                    time=found[0],
                    booked=booked,
                    total=total,
                    booking_link=_booking_link(row, page.url),
                    price=find_price(text),
                )
            )
        return results


class TextSegmentStrategy:
    """Split the page text on the row-delimiter phrase and count per segment."""

    name = "text-segments"

    def parse(self, page: Page) -> list[ParsedTeeTime]:
        results: list[ParsedTeeTime] = []
        for segment in ROW_DELIMITER_RE.split(page.text):
            found = find_time(segment)
            if found is None:
                continue
            counts = count_players(segment)
            if counts is None:
                continue
            booked, total = counts
            results.append(ParsedTeeTime(time=found[0], booked=booked, total=total, price=find_price(segment)))
        return results


class BookingLinkStrategy:
    """
    Last resort: a row with a time and a booking link is a standard
    four-ball.  Without explicit counts it is reported full rather than
    claiming availability we cannot see.
    """

    name = "booking-link-heuristic"

    def parse(self, page: Page) -> list[ParsedTeeTime]:
        results: list[ParsedTeeTime] = []
        for row in _rows(page):
            text = collapse(row.get_text(" "))
            found = find_time(text)
            if found is None:
                continue
            link = _booking_link(row, page.url)
            if link is None and not BOOK_WORD_RE.search(text):
                continue
            results.append(
                ParsedTeeTime(
                    time=found[0],
                    booked=STANDARD_FOURBALL,
                    total=STANDARD_FOURBALL,
                    booking_link=link,
                    price=find_price(text),
                )
            )
        return results


STRATEGIES: tuple[ParsingStrategy[ParsedTeeTime], ...] = (
    StructuredRowStrategy(),
    TextSegmentStrategy(),
    BookingLinkStrategy(),
)


class MiClubClient:
    """HTTP client for MiClub public timesheets."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch_timesheet(self, url: str) -> StrategyResult[ParsedTeeTime]:
        logger.debug("Fetching MiClub timesheet: %s", url)
        resp = await self._client.get(url)
        resp.raise_for_status()
        return self.parse_timesheet(resp.text, str(resp.url))

    def parse_timesheet(self, html: str, url: str | None = None) -> StrategyResult[ParsedTeeTime]:
        return run_strategies(STRATEGIES, Page(html=html, url=url), "MiClub")
