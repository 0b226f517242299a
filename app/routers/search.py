"""
Tee time search endpoint.

Runs one aggregated search across every configured course (or the
subset named in ``courseIds``) and returns the merged, filtered slots.
"""

from fastapi import APIRouter, Query, Request

from app.dependencies import Aggregator, Reference
from app.models import SearchCriteria, SearchResponse
from app.rate_limit import SEARCH, limiter

router = APIRouter(prefix="/api", tags=["search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    operation_id="searchTeeTimes",
    summary="Search tee times across all courses",
)
@limiter.limit(SEARCH)
async def search_tee_times(
    request: Request,
    body: SearchCriteria,
    aggregator: Aggregator,
    reference: Reference,
    course_ids: list[str] | None = Query(None, alias="courseIds"),
) -> SearchResponse:
    courses = reference.courses
    if course_ids:
        wanted = set(course_ids)
        courses = tuple(c for c in courses if c.id in wanted)

    slots = await aggregator.search(courses, body)
    return SearchResponse(slots=slots)
