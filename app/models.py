"""Pydantic models for the Tee Time Finder API."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HHMM_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"


class Provider(str, Enum):
    """Upstream booking platforms a course can publish availability through."""

    MICLUB = "miclub"
    QUICK18 = "quick18"
    TEEITUP = "teeitup"
    CHRONOGOLF = "chronogolf"


# ── Reference data ────────────────────────────────────────────────────────


class Course(BaseModel):
    """A golf course and the booking source its availability comes from."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="State-aware course identifier, e.g. 'WA::araluen'")
    name: str = Field(..., description="Display name")
    provider: Provider = Field(..., description="Booking platform")
    lat: float | None = Field(None, description="Latitude")
    lng: float | None = Field(None, description="Longitude")
    url: str | None = Field(None, description="Booking base URL (MiClub may use a YYYY-MM-DD template)")
    holes: int = Field(default=18, description="Default hole count")
    state: str | None = Field(None, description="State / region code")
    city: str | None = Field(None, description="City")

    teeitup_course_id: str | None = Field(None, description="Explicit TeeItUp course id")
    chronogolf_club_id: str | None = Field(None, description="Explicit Chronogolf club id")
    chronogolf_course_id: str | None = Field(None, description="Explicit Chronogolf course id")
    chronogolf_affiliation_type_ids: str | None = Field(
        None, description="Comma-separated Chronogolf affiliation type ids"
    )


class FeeGroup(BaseModel):
    """MiClub timesheet identifiers for one course."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    booking_resource_id: str = Field(..., alias="bookingResourceId")
    fee_group_id: str = Field(..., alias="feeGroupId")


# ── Search ────────────────────────────────────────────────────────────────


class SearchCriteria(BaseModel):
    """One search request. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: dt.date = Field(..., description="Calendar day to search")
    earliest: str | None = Field(None, pattern=_HHMM_PATTERN, description="Earliest tee time (HH:MM)")
    latest: str | None = Field(None, pattern=_HHMM_PATTERN, description="Latest tee time (HH:MM)")
    holes: Literal[9, 18] | None = Field(None, description="Requested hole count")
    party_size: int = Field(default=1, ge=1, alias="partySize", description="Number of players")

    @field_validator("earliest", "latest", "holes", mode="before")
    @classmethod
    def _blank_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value

    @property
    def compact_date(self) -> str:
        """The search date as YYYYMMDD."""
        return self.date.strftime("%Y%m%d")


# ── Slots ─────────────────────────────────────────────────────────────────


class Slot(BaseModel):
    """
    One normalized tee time.

    Capacity fields stay ``None`` when the provider does not expose them;
    a slot with unknown capacity never claims a spot count.
    """

    course_id: str = Field(..., description="Course identifier")
    course: str = Field(..., description="Course name")
    provider: Provider = Field(..., description="Booking platform")
    date: dt.date = Field(..., description="Tee date")
    time: str = Field(..., pattern=_HHMM_PATTERN, description="Tee time, 24-hour HH:MM")
    holes: int | None = Field(None, description="Hole count, if known")
    max_players: int | None = Field(None, ge=0, description="Total places in the tee time")
    booked_players: int | None = Field(None, ge=0, description="Places already taken")
    free_spots: int | None = Field(None, description="Places still free")
    min_players: int | None = Field(None, ge=0, description="Smallest bookable group")
    available: bool = Field(default=True, description="Whether the slot can be booked")
    price: float | str | None = Field(None, description="Green fee")
    booking_url: str | None = Field(None, description="Where the user completes the booking")

    @model_validator(mode="after")
    def _check_capacity(self) -> Slot:
        if self.free_spots is not None:
            if self.free_spots < 0:
                raise ValueError("free_spots must be >= 0")
            if self.max_players is not None and self.free_spots > self.max_players:
                raise ValueError("free_spots must not exceed max_players")
            self.available = self.free_spots > 0
        return self

    @property
    def capacity(self) -> int | None:
        """Best known capacity figure: free spots, else max players, else unknown."""
        if self.free_spots is not None:
            return self.free_spots
        return self.max_players

    @property
    def capacity_known(self) -> bool:
        return self.capacity is not None


class SearchResponse(BaseModel):
    """Response for a tee time search."""

    slots: list[Slot] = Field(..., description="Matching tee times across all courses")


class CourseListResponse(BaseModel):
    """Configured courses."""

    courses: list[Course] = Field(..., description="All configured courses")


class CacheStats(BaseModel):
    """Slot cache counters since startup."""

    backend: str = Field(..., description="Store backend: memory or sqlite")
    ttl_seconds: float = Field(..., description="Freshness window")
    hits: int = Field(0, description="Fresh lookups served from the cache")
    misses: int = Field(0, description="Lookups with no entry")
    stale: int = Field(0, description="Lookups that found an expired entry")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")
    courses: int = Field(..., description="Number of configured courses")
    cache: CacheStats = Field(..., description="Slot cache counters")
    timestamp: dt.datetime = Field(..., description="Current timestamp")
