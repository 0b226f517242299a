"""
Ordered field extraction for loosely structured JSON payloads.

Booking APIs rename fields between versions and between clubs, so each
value we care about is described as an ordered list of named strategies.
The first strategy that yields a usable value wins; the order is the
fallback order and can be inspected (and tested) on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from app.services.errors import ParseError
from app.services.timeparse import normalize_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldStrategy:
    """One named way of pulling a value out of a payload item."""

    name: str
    extract: Callable[[Mapping[str, Any]], Any]

    def __call__(self, item: Mapping[str, Any]) -> Any:
        try:
            return self.extract(item)
        except (KeyError, IndexError, TypeError, AttributeError):
            return None


def first_match(
    item: Mapping[str, Any],
    strategies: Sequence[FieldStrategy],
    accept: Callable[[Any], bool] = lambda v: v is not None and v != "",
) -> tuple[str, Any] | None:
    """Run *strategies* in order; return ``(name, value)`` of the first accepted value."""
    for strategy in strategies:
        value = strategy(item)
        if accept(value):
            return strategy.name, value
    return None


def first_value(
    item: Mapping[str, Any],
    strategies: Sequence[FieldStrategy],
    accept: Callable[[Any], bool] = lambda v: v is not None and v != "",
) -> Any:
    found = first_match(item, strategies, accept)
    return found[1] if found else None


# ── Strategy builders ─────────────────────────────────────────────────────


def key(name: str) -> FieldStrategy:
    """Top-level key lookup."""
    return FieldStrategy(name, lambda item: item.get(name))


def path(*parts: str | int) -> FieldStrategy:
    """Nested lookup, e.g. ``path("fee", "amount")`` or ``path("green_fees", 0, "green_fee")``."""

    def _walk(item: Mapping[str, Any]) -> Any:
        value: Any = item
        for part in parts:
            value = value[part]
        return value

    return FieldStrategy(".".join(str(p) for p in parts), _walk)


def keys(*names: str) -> list[FieldStrategy]:
    return [key(name) for name in names]


# ── Value predicates / coercion ───────────────────────────────────────────


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_count(value: Any) -> int | None:
    """Coerce a spot count to a non-negative int, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def is_count(value: Any) -> bool:
    return as_count(value) is not None


# ── Item discovery ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ItemsStrategy:
    """One named way of locating the list of tee time items in a payload."""

    name: str
    locate: Callable[[Any], Any]

    def __call__(self, payload: Any) -> list[Any] | None:
        try:
            found = self.locate(payload)
        except (KeyError, IndexError, TypeError, AttributeError):
            return None
        return found if isinstance(found, list) else None


def items_at(name: str) -> ItemsStrategy:
    return ItemsStrategy(name, lambda payload: payload.get(name))


def _payload_is_list(payload: Any) -> Any:
    return payload if isinstance(payload, list) else None


def _first_list_value(payload: Any) -> Any:
    if not isinstance(payload, Mapping):
        return None
    return next((v for v in payload.values() if isinstance(v, list)), None)


PAYLOAD_IS_LIST = ItemsStrategy("<root>", _payload_is_list)
FIRST_LIST_VALUE = ItemsStrategy("<first list>", _first_list_value)


def nested_items(child_key: str, outer: ItemsStrategy = PAYLOAD_IS_LIST) -> ItemsStrategy:
    """Flatten ``outer[*][child_key]`` lists, e.g. ``[{"teetimes": [...]}, ...]``."""

    def _flatten(payload: Any) -> Any:
        groups = outer(payload)
        if not groups or not all(isinstance(g, Mapping) and child_key in g for g in groups):
            return None
        flat: list[Any] = []
        for group in groups:
            children = group.get(child_key)
            if isinstance(children, list):
                flat.extend(children)
        return flat

    return ItemsStrategy(f"{outer.name}[*].{child_key}", _flatten)


def discover_items(payload: Any, strategies: Iterable[ItemsStrategy]) -> list[Any]:
    """Return the first list any strategy finds (possibly empty), else ``[]``."""
    for strategy in strategies:
        items = strategy(payload)
        if items is not None:
            logger.debug("Tee time items located via %s (%d items)", strategy.name, len(items))
            return items
    return []


# ── Tee time normalization ────────────────────────────────────────────────


def difference(total_key: str, taken_key: str) -> FieldStrategy:
    """Free spots derived as ``item[total_key] - item[taken_key]``."""

    def _diff(item: Mapping[str, Any]) -> Any:
        total, taken = as_count(item[total_key]), as_count(item[taken_key])
        if total is None or taken is None:
            return None
        return max(total - taken, 0)

    return FieldStrategy(f"{total_key}-{taken_key}", _diff)


@dataclass(frozen=True)
class TeeTimeFields:
    """Where a provider's JSON keeps each tee time attribute, in fallback order."""

    items: Sequence[ItemsStrategy]
    time: Sequence[FieldStrategy]
    free_spots: Sequence[FieldStrategy]
    max_players: Sequence[FieldStrategy] = ()
    price: Sequence[FieldStrategy] = ()
    booking_url: Sequence[FieldStrategy] = ()
    sold_out: Sequence[FieldStrategy] = ()


@dataclass
class JsonTeeTime:
    time: str  # "HH:MM"
    free_spots: int | None = None
    max_players: int | None = None
    price: float | None = None
    booking_url: str | None = None
    available: bool = True


def parse_tee_times(payload: Any, fields: TeeTimeFields, provider: str) -> list[JsonTeeTime]:
    """
    Normalize a loosely structured availability payload.

    Items without a recognisable time are skipped.  Spot counts that no
    strategy finds stay None (capacity unknown), never 0.
    """
    if not isinstance(payload, (list, Mapping)):
        raise ParseError(f"unexpected payload type {type(payload).__name__}", provider)

    items = discover_items(payload, fields.items)
    if not items and isinstance(payload, Mapping) and not any(isinstance(v, list) for v in payload.values()):
        raise ParseError("no tee time array in payload", provider)

    tee_times: list[JsonTeeTime] = []
    skipped = 0
    for item in items:
        if not isinstance(item, Mapping):
            skipped += 1
            continue

        time_value = normalize_time(first_value(item, fields.time))
        if time_value is None:
            skipped += 1
            continue

        free = as_count(first_value(item, fields.free_spots, is_count))
        max_players = as_count(first_value(item, fields.max_players, is_count))
        if free is not None and max_players is not None and free > max_players:
            free = max_players

        price = first_value(item, fields.price, is_number)
        link = first_value(item, fields.booking_url, lambda v: isinstance(v, str) and v.startswith("http"))
        sold_out = first_value(item, fields.sold_out, lambda v: isinstance(v, bool))

        tee_times.append(
            JsonTeeTime(
                time=time_value,
                free_spots=free,
                max_players=max_players,
                price=float(price) if price is not None else None,
                booking_url=link,
                available=not sold_out if free is None else free > 0,
            )
        )

    if skipped:
        logger.debug("%s: skipped %d items without a usable tee time", provider, skipped)
    return tee_times
