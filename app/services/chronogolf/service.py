"""
Chronogolf adapter.

Pulls the club / course / affiliation ids out of the course URL, queries
the tee time API and builds a user-facing widget link for the search day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from urllib.parse import urlsplit

from app.models import Course, Provider, SearchCriteria, Slot
from app.services.chronogolf.client import ChronogolfClient
from app.services.chronogolf.config import CLUB_PATH_RE, DEFAULT_HOLES, FIELDS
from app.services.errors import ConfigurationError
from app.services.extraction import parse_tee_times
from app.services.provider import ProviderAdapter
from app.services.urls import fragment_params, with_fragment_params


@dataclass(frozen=True)
class ChronogolfIds:
    club_id: str
    course_id: str
    affiliation_type_ids: str | None = None


def resolve_ids(course: Course) -> ChronogolfIds | None:
    """
    Club id from the ``/club/<id>`` path, course and affiliation ids from
    the fragment's query string.  Explicit course fields take precedence.
    """
    club_id = course.chronogolf_club_id
    course_id = course.chronogolf_course_id
    affiliation = course.chronogolf_affiliation_type_ids

    if course.url:
        if not club_id:
            match = CLUB_PATH_RE.search(urlsplit(course.url).path)
            club_id = match.group(1) if match else None
        fragment = fragment_params(course.url)
        course_id = course_id or fragment.get("course_id")
        affiliation = affiliation or fragment.get("affiliation_type_ids")

    if not club_id or not course_id:
        return None
    return ChronogolfIds(club_id=str(club_id), course_id=str(course_id), affiliation_type_ids=affiliation)


def booking_url(course: Course, ids: ChronogolfIds, day: date, nb_holes: int) -> str | None:
    """The widget URL with its fragment rewritten for the resolved ids and day."""
    if not course.url:
        return None
    params = {"course_id": ids.course_id, "nb_holes": str(nb_holes), "date": day.isoformat()}
    if ids.affiliation_type_ids:
        params["affiliation_type_ids"] = ids.affiliation_type_ids
    return with_fragment_params(course.url, params)


class ChronogolfAdapter(ProviderAdapter):
    provider = Provider.CHRONOGOLF

    def __init__(self, client: ChronogolfClient) -> None:
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def _fetch(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        ids = resolve_ids(course)
        if ids is None:
            raise ConfigurationError(f"missing Chronogolf club/course id for {course.name}", self.provider.value)

        nb_holes = criteria.holes or course.holes or DEFAULT_HOLES
        payload = await self._client.get_teetimes(
            ids.club_id,
            ids.course_id,
            criteria.date,
            nb_holes=nb_holes,
            players=criteria.party_size,
            affiliation_type_ids=ids.affiliation_type_ids,
            referer=course.url,
        )
        fallback_url = booking_url(course, ids, criteria.date, nb_holes)

        return [
            Slot(
                course_id=course.id,
                course=course.name,
                provider=self.provider,
                date=criteria.date,
                time=tee.time,
                holes=nb_holes,
                max_players=tee.max_players,
                free_spots=tee.free_spots,
                available=tee.available,
                price=tee.price,
                booking_url=tee.booking_url or fallback_url,
            )
            for tee in parse_tee_times(payload, FIELDS, self.provider.value)
        ]
