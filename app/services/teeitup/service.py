"""
TeeItUp adapter.

Resolves the upstream course id, queries the availability API and
translates whatever item shape comes back into Slots.
"""

from __future__ import annotations

from datetime import date

from app.models import Course, Provider, SearchCriteria, Slot
from app.services.errors import ConfigurationError
from app.services.extraction import parse_tee_times
from app.services.provider import ProviderAdapter
from app.services.teeitup.client import TeeItUpClient
from app.services.teeitup.config import COURSE_PARAM, DEFAULT_HOLES, FIELDS
from app.services.urls import query_param, with_query_params


def resolve_course_id(course: Course) -> str | None:
    """Explicit ``teeitup_course_id`` first, else the ``course`` param of the URL."""
    if course.teeitup_course_id:
        return str(course.teeitup_course_id)
    if course.url:
        return query_param(course.url, COURSE_PARAM)
    return None


def booking_url(course: Course, day: date) -> str | None:
    """The course's booking site with ``date`` set so the user lands on the search day."""
    if not course.url:
        return None
    return with_query_params(course.url, {"date": day.isoformat()})


class TeeItUpAdapter(ProviderAdapter):
    provider = Provider.TEEITUP

    def __init__(self, client: TeeItUpClient) -> None:
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def _fetch(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        course_id = resolve_course_id(course)
        if not course_id:
            raise ConfigurationError(f"no TeeItUp course id for {course.name}", self.provider.value)

        holes = criteria.holes or course.holes or DEFAULT_HOLES
        payload = await self._client.get_availability(
            course_id,
            criteria.date,
            holes=holes,
            golfers=criteria.party_size,
            referer=course.url,
        )
        fallback_url = booking_url(course, criteria.date)

        return [
            Slot(
                course_id=course.id,
                course=course.name,
                provider=self.provider,
                date=criteria.date,
                time=tee.time,
                holes=holes,
                max_players=tee.max_players,
                free_spots=tee.free_spots,
                available=tee.available,
                price=tee.price,
                booking_url=tee.booking_url or fallback_url,
            )
            for tee in parse_tee_times(payload, FIELDS, self.provider.value)
        ]
