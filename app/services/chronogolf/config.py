"""
Chronogolf integration configuration.

Course URLs look like::

    https://www.chronogolf.com/club/16370/widget?medium=widget#?course_id=23233&nb_holes=18&affiliation_type_ids=67260

The club id lives in the path, the course and affiliation ids in the
fragment (which carries its own query string).
"""

from __future__ import annotations

import re

from app.services.extraction import (
    FIRST_LIST_VALUE,
    PAYLOAD_IS_LIST,
    TeeTimeFields,
    items_at,
    keys,
    path,
)

TEETIMES_URL = "https://api.chronogolf.com/clubs/{club_id}/teetimes"

CLUB_PATH_RE = re.compile(r"/club/(\d+)")

DEFAULT_HOLES = 18

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; TeeTimeFinder/0.1)",
    "Accept": "application/json, text/plain, */*",
    "Origin": "https://www.chronogolf.com",
}

FIELDS = TeeTimeFields(
    items=(
        PAYLOAD_IS_LIST,
        items_at("teetimes"),
        FIRST_LIST_VALUE,
    ),
    time=keys("time", "tee_time", "teeTime", "start_time", "startTime", "datetime"),
    free_spots=keys("available_spots", "availableSpots", "remaining", "capacity"),
    max_players=keys("max_player_size", "max_players"),
    price=(
        *keys("price", "green_fee", "greenFee"),
        path("fee", "amount"),
        path("green_fees", 0, "green_fee"),
    ),
    booking_url=keys("booking_url", "bookingUrl"),
    sold_out=keys("out_of_capacity"),
)
