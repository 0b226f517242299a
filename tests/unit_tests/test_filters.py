"""Tests for the post-merge slot filters."""

from app.services.filters import accepts, filter_by_capacity, filter_by_window
from tests.mocks.models import make_slot


class TestCapacityFilter:
    def test_party_larger_than_max_players_is_dropped(self):
        slot = make_slot(max_players=2)
        assert filter_by_capacity([slot], 3) == []

    def test_party_equal_to_free_spots_is_kept(self):
        slot = make_slot(max_players=4, booked_players=1, free_spots=3)
        assert filter_by_capacity([slot], 3) == [slot]

    def test_free_spots_take_precedence_over_max(self):
        slot = make_slot(max_players=4, booked_players=3, free_spots=1)
        assert accepts(slot, 2) is False

    def test_unknown_capacity_is_kept(self):
        slot = make_slot()
        assert accepts(slot, 8) is True

    def test_full_slot_is_dropped_for_party_of_one(self):
        slot = make_slot(max_players=4, booked_players=4, free_spots=0)
        assert filter_by_capacity([slot], 1) == []

    def test_order_preserved(self):
        slots = [make_slot(time=t, max_players=4) for t in ("09:00", "07:00", "08:00")]
        assert [s.time for s in filter_by_capacity(slots, 2)] == ["09:00", "07:00", "08:00"]


class TestWindowFilter:
    def test_no_bounds_keeps_everything(self):
        slots = [make_slot(time="05:00"), make_slot(time="18:00")]
        assert filter_by_window(slots, None, None) == slots

    def test_inclusive_bounds(self):
        slots = [make_slot(time=t) for t in ("06:59", "07:00", "08:30", "09:00", "09:01")]
        kept = filter_by_window(slots, "07:00", "09:00")
        assert [s.time for s in kept] == ["07:00", "08:30", "09:00"]
