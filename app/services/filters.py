"""
Post-merge slot filters.

Run once over the combined list from every course, never inside an
adapter.
"""

from __future__ import annotations

from collections.abc import Iterable

from app.models import Slot
from app.services.timeparse import in_window


def accepts(slot: Slot, party_size: int) -> bool:
    """
    Capacity predicate.

    Rejects a slot only when it has a *known* capacity figure below
    *party_size*. Slots with unknown capacity are kept.
    """
    capacity = slot.capacity
    if capacity is None:
        return True
    return capacity >= party_size


def filter_by_capacity(slots: Iterable[Slot], party_size: int) -> list[Slot]:
    return [s for s in slots if accepts(s, party_size)]


def filter_by_window(slots: Iterable[Slot], earliest: str | None, latest: str | None) -> list[Slot]:
    """Keep slots whose tee time lies within ``[earliest, latest]``."""
    if not earliest and not latest:
        return list(slots)
    return [s for s in slots if in_window(s.time, earliest, latest)]
