"""Quick18 adapter: one search-matrix page per course and date."""

from __future__ import annotations

from datetime import date

from app.models import Course, Provider, SearchCriteria, Slot
from app.services.errors import ConfigurationError
from app.services.provider import ProviderAdapter
from app.services.quick18.client import Quick18Client
from app.services.quick18.config import DATE_PARAM
from app.services.urls import strip_query, with_query_params


def matrix_url(course: Course, day: date) -> str:
    """Course URL without its query string, plus ``teedate=YYYYMMDD``."""
    if not course.url:
        raise ConfigurationError(f"no booking URL for {course.name}", Provider.QUICK18.value)
    return with_query_params(strip_query(course.url), {DATE_PARAM: day.strftime("%Y%m%d")})


class Quick18Adapter(ProviderAdapter):
    provider = Provider.QUICK18

    def __init__(self, client: Quick18Client) -> None:
        self._client = client

    async def close(self) -> None:
        await self._client.close()

    async def _fetch(self, course: Course, criteria: SearchCriteria) -> list[Slot]:
        url = matrix_url(course, criteria.date)
        result = await self._client.fetch_matrix(url)

        # "1 to 4 players": the upper bound is the free-spot count.
        return [
            Slot(
                course_id=course.id,
                course=course.name,
                provider=self.provider,
                date=criteria.date,
                time=tee.time,
                holes=criteria.holes,
                min_players=tee.min_players,
                max_players=tee.max_players,
                free_spots=tee.max_players,
                price=tee.price,
                booking_url=url,
            )
            for tee in result.items
        ]
