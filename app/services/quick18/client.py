from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from app.config import HTTP_TIMEOUT_SECONDS
from app.services.parsing import Page, ParsingStrategy, StrategyResult, collapse, find_price, run_strategies
from app.services.quick18.config import (
    DEFAULT_HEADERS,
    MATRIX_ROW_SELECTOR,
    PLAYER_RANGE_RE,
    PLAYER_SINGLE_RE,
    PLAYERS_CELL_SELECTOR,
    PLAYERS_LOOKAHEAD_CHARS,
    PRICE_CELL_SELECTOR,
    PRICE_LOOKAHEAD_CHARS,
    TIME_CELL_SELECTOR,
)
from app.services.timeparse import TIME_TOKEN_RE, find_time, to_24h

logger = logging.getLogger(__name__)


@dataclass
class ParsedTeeTime:
    time: str  # "HH:MM"
    min_players: int | None = None
    max_players: int | None = None
    price: float | None = None


@dataclass
class PlayerRange:
    min_players: int | None
    max_players: int
    end: int  # offset just past the phrase


def parse_players(text: str) -> PlayerRange | None:
    """
    Parse the first player-count phrase in *text*.

    ``"1 to 4 players"`` → (1, 4); ``"3 players"`` → (None, 3).
    """
    ranged = PLAYER_RANGE_RE.search(text)
    single = PLAYER_SINGLE_RE.search(text)
    if ranged and (single is None or ranged.start() <= single.start()):
        low, high = int(ranged.group(1)), int(ranged.group(2))
        if low > high:
            low, high = high, low
        return PlayerRange(min_players=low, max_players=high, end=ranged.end())
    if single:
        return PlayerRange(min_players=None, max_players=int(single.group(1)), end=single.end())
    return None


# ── Parsing strategies (ranked) ──────────────────────────────────────────


class MatrixRowStrategy:
    """The structured ``#searchMatrix .matrixRow`` layout."""

    name = "matrix-rows"

    def parse(self, page: Page) -> list[ParsedTeeTime]:
        results: list[ParsedTeeTime] = []
        for row in page.soup.select(MATRIX_ROW_SELECTOR):
            time_cell = row.select_one(TIME_CELL_SELECTOR)
            found = find_time(collapse(time_cell.get_text(" ")) if time_cell else collapse(row.get_text(" ")))
            if found is None:
                continue

            tee = ParsedTeeTime(time=found[0])

            players_cell = row.select_one(PLAYERS_CELL_SELECTOR)
            players_text = collapse(players_cell.get_text(" ")) if players_cell else collapse(row.get_text(" "))
            players = parse_players(players_text)
            if players is not None:
                tee.min_players, tee.max_players = players.min_players, players.max_players
            elif players_text.isdigit():
                tee.max_players = int(players_text)

            price_cell = row.select_one(PRICE_CELL_SELECTOR)
            tee.price = find_price(collapse(price_cell.get_text(" ")) if price_cell else collapse(row.get_text(" ")))
            results.append(tee)
        return results


class TextScanStrategy:
    """
    Scan the flattened page text: a time token followed, within a bounded
    window that stops at the next time token, by a player-count phrase.
    """

    name = "text-scan"

    def parse(self, page: Page) -> list[ParsedTeeTime]:
        text = page.text
        tokens = [
            (m, value)
            for m in TIME_TOKEN_RE.finditer(text)
            if (value := to_24h(int(m.group(1)), int(m.group(2)), m.group(3))) is not None
        ]

        results: list[ParsedTeeTime] = []
        for i, (match, value) in enumerate(tokens):
            boundary = tokens[i + 1][0].start() if i + 1 < len(tokens) else len(text)
            window = text[match.end():min(match.end() + PLAYERS_LOOKAHEAD_CHARS, boundary)]
            players = parse_players(window)
            if players is None:
                continue

            start = match.end() + players.end
            price = find_price(text[start:min(start + PRICE_LOOKAHEAD_CHARS, boundary)])
            if price is None:
                price = find_price(window[:players.end])

            results.append(
                ParsedTeeTime(
                    time=value,
                    min_players=players.min_players,
                    max_players=players.max_players,
                    price=price,
                )
            )
        return results


STRATEGIES: tuple[ParsingStrategy[ParsedTeeTime], ...] = (
    MatrixRowStrategy(),
    TextScanStrategy(),
)


class Quick18Client:
    """HTTP client for Quick18 search matrix pages."""

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

    async def fetch_matrix(self, url: str) -> StrategyResult[ParsedTeeTime]:
        logger.debug("Fetching Quick18 matrix: %s", url)
        resp = await self._client.get(url)
        resp.raise_for_status()
        return self.parse_matrix(resp.text)

    def parse_matrix(self, html: str) -> StrategyResult[ParsedTeeTime]:
        return run_strategies(STRATEGIES, Page(html=html), "Quick18")
