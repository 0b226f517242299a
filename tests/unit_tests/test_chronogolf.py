from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock

import httpx

from app.models import Provider
from app.services.chronogolf.client import ChronogolfClient
from app.services.chronogolf.service import ChronogolfAdapter, ChronogolfIds, booking_url, resolve_ids
from tests.mocks.models import MOCK_CHRONOGOLF_COURSE, make_criteria

# ── Sample payloads ──────────────────────────────────────────────────────────

TEETIMES_PAYLOAD = [
    {
        "date": "2025-03-14",
        "start_time": "06:40",
        "out_of_capacity": False,
        "green_fees": [{"green_fee": 48.0, "affiliation_type_id": 77123}],
    },
    {
        "date": "2025-03-14",
        "start_time": "06:50",
        "out_of_capacity": True,
        "green_fees": [],
    },
    {
        "date": "2025-03-14",
        "start_time": "07:00",
        "available_spots": 2,
        "max_player_size": 4,
    },
]


class TestResolveIds:
    def test_from_path_and_fragment(self):
        assert resolve_ids(MOCK_CHRONOGOLF_COURSE) == ChronogolfIds(club_id="18159", course_id="22411")

    def test_affiliation_from_fragment(self):
        course = MOCK_CHRONOGOLF_COURSE.model_copy(
            update={"url": "https://www.chronogolf.example/club/1/widget?medium=widget#?course_id=2&affiliation_type_ids=3,4"}
        )
        assert resolve_ids(course) == ChronogolfIds(club_id="1", course_id="2", affiliation_type_ids="3,4")

    def test_explicit_fields_win(self):
        course = MOCK_CHRONOGOLF_COURSE.model_copy(
            update={"chronogolf_club_id": "500", "chronogolf_course_id": "600"}
        )
        assert resolve_ids(course) == ChronogolfIds(club_id="500", course_id="600")

    def test_missing_course_id(self):
        course = MOCK_CHRONOGOLF_COURSE.model_copy(update={"url": "https://www.chronogolf.example/club/18159"})
        assert resolve_ids(course) is None


class TestBookingUrl:
    def test_fragment_rewritten_for_day(self):
        ids = ChronogolfIds(club_id="18159", course_id="22411", affiliation_type_ids="77123,77124")
        url = booking_url(MOCK_CHRONOGOLF_COURSE, ids, date(2025, 3, 14), 9)
        assert url == (
            "https://www.chronogolf.example/club/18159/widget"
            "#?course_id=22411&nb_holes=9&date=2025-03-14&affiliation_type_ids=77123,77124"
        )


class TestChronogolfAdapter:
    def setup_method(self):
        self.mock_client = AsyncMock(spec=ChronogolfClient)
        self.mock_client.get_teetimes = AsyncMock(return_value=TEETIMES_PAYLOAD)
        self.adapter = ChronogolfAdapter(self.mock_client)

    async def test_slots(self):
        result = await self.adapter.fetch_slots(MOCK_CHRONOGOLF_COURSE, make_criteria())
        open_slot, sold_out, counted = result.slots

        assert open_slot.provider is Provider.CHRONOGOLF
        assert open_slot.time == "06:40"
        assert open_slot.price == 48.0
        assert open_slot.free_spots is None
        assert open_slot.available is True
        assert "date=2025-03-14" in open_slot.booking_url

        assert sold_out.available is False
        assert sold_out.free_spots is None

        assert (counted.free_spots, counted.max_players) == (2, 4)

    async def test_request_arguments(self):
        await self.adapter.fetch_slots(MOCK_CHRONOGOLF_COURSE, make_criteria(holes=9, party_size=4))
        self.mock_client.get_teetimes.assert_awaited_once_with(
            "18159",
            "22411",
            date(2025, 3, 14),
            nb_holes=9,
            players=4,
            affiliation_type_ids=None,
            referer=MOCK_CHRONOGOLF_COURSE.url,
        )

    async def test_missing_ids_is_empty_with_reason(self):
        course = MOCK_CHRONOGOLF_COURSE.model_copy(update={"url": None})
        result = await self.adapter.fetch_slots(course, make_criteria())
        assert result.slots == []
        assert result.reason.startswith("configuration")

    async def test_empty_list(self):
        self.mock_client.get_teetimes.return_value = []
        result = await self.adapter.fetch_slots(MOCK_CHRONOGOLF_COURSE, make_criteria())
        assert result.ok
        assert result.slots == []


class TestChronogolfClient:
    async def test_request(self):
        seen: list[httpx.Request] = []

        def _handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=TEETIMES_PAYLOAD)

        client = ChronogolfClient(transport=httpx.MockTransport(_handler))
        try:
            payload = await client.get_teetimes(
                "18159", "22411", date(2025, 3, 14), nb_holes=18, players=2, affiliation_type_ids="77123"
            )
        finally:
            await client.close()

        assert payload == TEETIMES_PAYLOAD
        request = seen[0]
        assert request.url.path == "/clubs/18159/teetimes"
        assert request.url.params["course_id"] == "22411"
        assert request.url.params["nb_holes"] == "18"
        assert request.url.params["affiliation_type_ids"] == "77123"

    async def test_timeout(self):
        def _timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("slow", request=request)

        adapter = ChronogolfAdapter(ChronogolfClient(transport=httpx.MockTransport(_timeout)))
        try:
            result = await adapter.fetch_slots(MOCK_CHRONOGOLF_COURSE, make_criteria())
        finally:
            await adapter.close()
        assert result.reason == "upstream timeout"
