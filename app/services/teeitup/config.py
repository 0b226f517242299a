"""
TeeItUp integration configuration.

TeeItUp booking sites (``https://<club>.book-v2.teeitup.golf/?course=15309``)
are backed by a public availability API keyed by the ``course`` id.
"""

from __future__ import annotations

from app.services.extraction import (
    FIRST_LIST_VALUE,
    PAYLOAD_IS_LIST,
    TeeTimeFields,
    difference,
    items_at,
    keys,
    nested_items,
    path,
)

AVAILABILITY_URL = "https://phx-api.teeitup.com/api/v1/public/availability"

# Query parameter on the booking site URL that carries the course id.
COURSE_PARAM = "course"

DEFAULT_HOLES = 18
MAX_RESULTS = "999999"

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; TeeTimeFinder/0.1)",
    "Accept": "application/json, text/plain, */*",
}

FIELDS = TeeTimeFields(
    items=(
        nested_items("teetimes"),
        PAYLOAD_IS_LIST,
        items_at("availability"),
        items_at("availableTeeTimes"),
        items_at("teeTimes"),
        FIRST_LIST_VALUE,
    ),
    time=keys("teeTime", "tee_time", "teetime", "time", "startTime", "start_time"),
    free_spots=(
        *keys("availableSpots", "available_spots", "spotsAvailable", "spots", "capacity"),
        difference("maxPlayers", "bookedPlayers"),
    ),
    max_players=keys("maxPlayers", "max_players"),
    price=(*keys("price", "greenFee"), path("fee", "amount")),
    booking_url=keys("bookingUrl", "booking_url"),
)
