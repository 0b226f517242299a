"""
MiClub integration configuration.

MiClub clubs each host their own public timesheet
(``/guests/bookings/ViewPublicTimesheet.msp``); the course URL in the
reference data points at it.
"""

from __future__ import annotations

import re

# Literal placeholder some course URLs carry instead of a selectedDate param.
DATE_PLACEHOLDER = "YYYY-MM-DD"

# Links to the per-tee-time booking page contain this path fragment.
BOOKING_LINK_MARKER = "TimesheetBooking"

# Rows seen across MiClub timesheet layouts (table and div based).
ROW_SELECTOR = "tr, div.row-time, div.timesheet-row, li.teetime"

# Per-player cell vocabulary, counted within one row only.
AVAILABLE_RE = re.compile(r"\bAvailable\b", re.IGNORECASE)
TAKEN_RE = re.compile(r"\b(?:Taken|Booked|Full|Sold Out)\b", re.IGNORECASE)

# "2/4" or "2 of 4" booked/total notations used by some layouts.
FRACTION_RE = re.compile(r"\b([0-8])\s*/\s*([1-8])\b")
OF_RE = re.compile(r"\b([0-8])\s+of\s+([1-8])\b", re.IGNORECASE)

# Phrases that start each tee row when the page is read as plain text.
ROW_DELIMITER_RE = re.compile(r"\b(?:Book\s+Group|Tee\s+Time)\b", re.IGNORECASE)

BOOK_WORD_RE = re.compile(r"\bBook\b", re.IGNORECASE)

# A MiClub tee time is a four-ball unless the row says otherwise.
STANDARD_FOURBALL = 4

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; TeeTimeFinder/0.1)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}
