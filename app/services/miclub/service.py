"""
MiClub adapter.

Builds the public timesheet URL for a course, scrapes it and translates
the parsed rows into Slots.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date

from app.models import Course, FeeGroup, Provider, SearchCriteria, Slot
from app.services.errors import ConfigurationError
from app.services.miclub.client import MiClubClient
from app.services.miclub.config import DATE_PLACEHOLDER
from app.services.provider import ProviderAdapter
from app.services.urls import with_query_params

logger = logging.getLogger(__name__)


def timesheet_url(course: Course, fee_group: FeeGroup | None, day: date, *, mobile: bool = False) -> str:
    """
    URL of the course's public timesheet for *day*.

    With a fee group the query is rebuilt from scratch (stale selectedDate
    or captcha params in the stored URL are dropped).  Otherwise a
    ``YYYY-MM-DD`` placeholder is substituted, or ``selectedDate`` is set.
    """
    if not course.url:
        raise ConfigurationError(f"no booking URL for {course.name}", Provider.MICLUB.value)

    if fee_group is not None:
        params = {
            "bookingResourceId": fee_group.booking_resource_id,
            "selectedDate": day.isoformat(),
            "feeGroupId": fee_group.fee_group_id,
        }
        if mobile:
            params["mobile"] = "true"
        return with_query_params(course.url, params, replace=True)

    if DATE_PLACEHOLDER in course.url:
        return course.url.replace(DATE_PLACEHOLDER, day.isoformat())

    return with_query_params(course.url, {"selectedDate": day.isoformat()})


class MiClubAdapter(ProviderAdapter):
    provider = Provider.MICLUB

    def __init__(self, client: MiClubClient, fee_groups: Mapping[str, FeeGroup] | None = None) -> None:
        self._client = client
        self._fee_groups = fee_groups or {}

    async def close(self) -> None:
        await self._client.close()

    async def _fetch(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        fee_group = self._fee_groups.get(course.name)
        fetch_url = timesheet_url(course, fee_group, criteria.date, mobile=fee_group is not None)
        booking_url = timesheet_url(course, fee_group, criteria.date)

        result = await self._client.fetch_timesheet(fetch_url)
        if result.strategy is None:
            logger.info("[miclub] %s: no tee rows recognised on timesheet", course.name)
            return []

        return [
            Slot(
                course_id=course.id,
                course=course.name,
                provider=self.provider,
                date=criteria.date,
                time=tee.time,
                holes=None,
                max_players=tee.total,
                booked_players=tee.booked,
                free_spots=tee.free,
                price=tee.price,
                booking_url=tee.booking_link or booking_url,
            )
            for tee in result.items
        ]
