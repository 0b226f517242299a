"""
Tee time normalization shared by all providers.

Every adapter reports times as 24-hour ``"HH:MM"`` strings.
"""

from __future__ import annotations

import re

# "7:05 pm", "07:05PM", "7:05 p.m.", "19:05"
TIME_TOKEN_RE = re.compile(r"\b(\d{1,2}):(\d{2})(?::\d{2})?(?:\s*([ap])\.?\s*m\b\.?)?", re.IGNORECASE)

_LEADING_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[T\s]")


def to_24h(hour: int, minute: int, meridiem: str | None = None) -> str | None:
    """
    Convert hour/minute (optionally 12-hour with ``"am"``/``"pm"``) to ``"HH:MM"``.

    Returns None when the values are not a valid time of day.
    """
    marker = (meridiem or "").strip().lower()[:1]
    if marker:
        if not 1 <= hour <= 12:
            return None
        if marker == "p" and hour != 12:
            hour += 12
        elif marker == "a" and hour == 12:
            hour = 0
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return f"{hour:02d}:{minute:02d}"


def normalize_time(raw: object) -> str | None:
    """
    Normalize a loosely formatted time value to ``"HH:MM"``.

    Handles ``"7:05 pm"``, ``"19:05"``, ``"19:05:00"`` and ISO-ish timestamps
    such as ``"2025-12-04T06:30:00+08:00"`` (the date and offset are dropped,
    the wall-clock time is kept).
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    text = _LEADING_DATE_RE.sub("", text)
    match = TIME_TOKEN_RE.search(text)
    if match is None:
        return None
    return to_24h(int(match.group(1)), int(match.group(2)), match.group(3))


def find_time(text: str) -> tuple[str, re.Match[str]] | None:
    """Return the first valid time token in *text* with its match object."""
    for match in TIME_TOKEN_RE.finditer(text):
        value = to_24h(int(match.group(1)), int(match.group(2)), match.group(3))
        if value is not None:
            return value, match
    return None


def in_window(value: str, earliest: str | None, latest: str | None) -> bool:
    """True when ``"HH:MM"`` *value* lies within the inclusive bounds."""
    if earliest and value < earliest:
        return False
    if latest and value > latest:
        return False
    return True
