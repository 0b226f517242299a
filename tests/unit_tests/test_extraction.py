"""Tests for ordered JSON field extraction."""

import pytest

from app.services.errors import ParseError
from app.services.extraction import (
    FIRST_LIST_VALUE,
    PAYLOAD_IS_LIST,
    TeeTimeFields,
    as_count,
    difference,
    discover_items,
    first_match,
    items_at,
    key,
    keys,
    nested_items,
    parse_tee_times,
    path,
)

FIELDS = TeeTimeFields(
    items=[items_at("teeTimes"), PAYLOAD_IS_LIST, FIRST_LIST_VALUE],
    time=keys("teeTime", "time"),
    free_spots=[*keys("availableSpots", "spots"), difference("maxPlayers", "bookedPlayers")],
    max_players=keys("maxPlayers"),
    price=[key("price"), path("fee", "amount")],
    booking_url=keys("bookingUrl"),
    sold_out=keys("soldOut"),
)


class TestStrategies:
    def test_first_match_reports_winning_strategy(self):
        item = {"spots": 2, "availableSpots": None}
        assert first_match(item, keys("availableSpots", "spots")) == ("spots", 2)

    def test_path_swallows_missing_segments(self):
        assert path("fee", "amount")({"fee": None}) is None
        assert path("fees", 0, "amount")({"fees": []}) is None
        assert path("fees", 0, "amount")({"fees": [{"amount": 30}]}) == 30

    def test_difference(self):
        assert difference("max", "booked")({"max": 4, "booked": 1}) == 3
        assert difference("max", "booked")({"max": 4}) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3), (2.0, 2), ("4", 4), (-1, 0), (True, None), ("two", None), (None, None)],
    )
    def test_as_count(self, value, expected):
        assert as_count(value) == expected


class TestDiscoverItems:
    def test_named_key_before_root(self):
        payload = {"other": [1], "teeTimes": [{"time": "07:00"}]}
        assert discover_items(payload, FIELDS.items) == [{"time": "07:00"}]

    def test_root_list(self):
        assert discover_items([{"a": 1}], FIELDS.items) == [{"a": 1}]

    def test_first_list_value(self):
        assert discover_items({"meta": {}, "results": [1, 2]}, FIELDS.items) == [1, 2]

    def test_nested_groups_flatten(self):
        payload = [{"teetimes": [{"t": 1}]}, {"teetimes": [{"t": 2}, {"t": 3}]}]
        assert discover_items(payload, [nested_items("teetimes"), PAYLOAD_IS_LIST]) == [
            {"t": 1},
            {"t": 2},
            {"t": 3},
        ]

    def test_nested_requires_every_group(self):
        payload = [{"teetimes": []}, {"time": "07:00"}]
        assert discover_items(payload, [nested_items("teetimes"), PAYLOAD_IS_LIST]) == payload


class TestParseTeeTimes:
    def test_full_item(self):
        payload = {
            "teeTimes": [
                {
                    "teeTime": "7:05 pm",
                    "availableSpots": 3,
                    "maxPlayers": 4,
                    "fee": {"amount": 55},
                    "bookingUrl": "https://book.example/1",
                }
            ]
        }
        [tee] = parse_tee_times(payload, FIELDS, "test")
        assert tee.time == "19:05"
        assert tee.free_spots == 3
        assert tee.max_players == 4
        assert tee.price == 55.0
        assert tee.booking_url == "https://book.example/1"
        assert tee.available is True

    def test_unknown_spots_stay_none(self):
        [tee] = parse_tee_times([{"time": "08:00"}], FIELDS, "test")
        assert tee.free_spots is None
        assert tee.max_players is None
        assert tee.available is True

    def test_spots_derived_from_difference(self):
        [tee] = parse_tee_times([{"time": "08:00", "maxPlayers": 4, "bookedPlayers": 3}], FIELDS, "test")
        assert tee.free_spots == 1

    def test_free_clamped_to_max(self):
        [tee] = parse_tee_times([{"time": "08:00", "spots": 6, "maxPlayers": 4}], FIELDS, "test")
        assert tee.free_spots == 4

    def test_zero_spots_unavailable(self):
        [tee] = parse_tee_times([{"time": "08:00", "spots": 0}], FIELDS, "test")
        assert tee.available is False

    def test_sold_out_flag_without_counts(self):
        [tee] = parse_tee_times([{"time": "08:00", "soldOut": True}], FIELDS, "test")
        assert tee.free_spots is None
        assert tee.available is False

    def test_items_without_time_are_skipped(self):
        payload = [{"time": "08:00"}, {"spots": 2}, "garbage", {"time": "later"}]
        assert [t.time for t in parse_tee_times(payload, FIELDS, "test")] == ["08:00"]

    def test_non_http_booking_url_ignored(self):
        [tee] = parse_tee_times([{"time": "08:00", "bookingUrl": "/relative"}], FIELDS, "test")
        assert tee.booking_url is None

    def test_empty_list_is_empty(self):
        assert parse_tee_times({"teeTimes": []}, FIELDS, "test") == []

    def test_mapping_without_array_raises(self):
        with pytest.raises(ParseError):
            parse_tee_times({"error": "maintenance"}, FIELDS, "test")

    def test_scalar_payload_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_tee_times("<html>", FIELDS, "test")
        assert exc_info.value.provider == "test"
