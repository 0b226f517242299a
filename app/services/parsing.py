"""
Tiered HTML/text parsing.

Scraped booking pages drift without notice, so each HTML provider ranks
several parsing strategies (structural pass first, text fallbacks after)
and uses the first one that yields at least one tee time.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from typing import Generic, Protocol, TypeVar

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

_WHITESPACE_RE = re.compile(r"\s+")

# Currency-prefixed decimal, e.g. "$45", "$ 52.50", "A$39.00"
PRICE_RE = re.compile(r"\$\s*(\d{1,4}(?:,\d{3})*(?:\.\d{1,2})?)")


def collapse(text: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def find_price(text: str) -> float | None:
    match = PRICE_RE.search(text)
    if match is None:
        return None
    return float(match.group(1).replace(",", ""))


@dataclass
class Page:
    """A fetched HTML document with lazily built views."""

    html: str
    url: str | None = None

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")

    @cached_property
    def text(self) -> str:
        return collapse(self.soup.get_text(" "))


class ParsingStrategy(Protocol[T_co]):
    name: str

    def parse(self, page: Page) -> list[T_co]:
        ...


@dataclass
class StrategyResult(Generic[T]):
    strategy: str | None
    items: list[T]


def run_strategies(strategies: Sequence[ParsingStrategy[T]], page: Page, label: str) -> StrategyResult[T]:
    """Try *strategies* in order; the first non-empty result wins."""
    for strategy in strategies:
        items = strategy.parse(page)
        if items:
            logger.debug("%s: %d tee times via %s", label, len(items), strategy.name)
            return StrategyResult(strategy=strategy.name, items=items)
    logger.debug("%s: no strategy found tee times", label)
    return StrategyResult(strategy=None, items=[])
