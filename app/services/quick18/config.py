"""
Quick18 integration configuration.

Quick18 search pages are served per club (``https://<club>.quick18.com/teetimes/searchmatrix``)
and take the date as ``teedate=YYYYMMDD``.
"""

from __future__ import annotations

import re

DATE_PARAM = "teedate"

# Structured layout: one .matrixRow per tee time inside #searchMatrix.
MATRIX_ROW_SELECTOR = "#searchMatrix .matrixRow, table.matrixTable tr.matrixRow"
TIME_CELL_SELECTOR = ".time, .mtrxTeeTimes"
PRICE_CELL_SELECTOR = ".price, .mtrxPrice"
PLAYERS_CELL_SELECTOR = ".available, .mtrxPlayers, .players"

# "1 to 4 players", "2-4 players", "3 players", "1 player"
PLAYER_RANGE_RE = re.compile(r"\b(\d)\s*(?:to|-|–)\s*(\d)\s*players?\b", re.IGNORECASE)
PLAYER_SINGLE_RE = re.compile(r"\b(\d)\s*players?\b", re.IGNORECASE)

# How far past a time token to look for its player phrase / price.
PLAYERS_LOOKAHEAD_CHARS = 160
PRICE_LOOKAHEAD_CHARS = 120

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; TeeTimeFinder/0.1)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}
