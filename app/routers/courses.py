from fastapi import APIRouter, HTTPException, Query, Request, status

from app.dependencies import Reference
from app.models import Course, CourseListResponse, Provider
from app.rate_limit import DEFAULT, limiter

router = APIRouter(prefix="/api/courses", tags=["courses"])


@router.get(
    "",
    response_model=CourseListResponse,
    operation_id="listCourses",
    summary="List configured golf courses",
)
@limiter.limit(DEFAULT)
async def list_courses(
    request: Request,
    reference: Reference,
    provider: Provider | None = Query(None),
    state: str | None = Query(None),
) -> CourseListResponse:
    courses = [
        c
        for c in reference.courses
        if (provider is None or c.provider == provider)
        and (state is None or (c.state or "").upper() == state.upper())
    ]
    return CourseListResponse(courses=courses)


@router.get(
    "/{course_id}",
    response_model=Course,
    operation_id="getCourse",
    summary="Get a single course",
)
@limiter.limit(DEFAULT)
async def get_course(request: Request, course_id: str, reference: Reference) -> Course:
    course = reference.get_course(course_id)
    if course is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Course {course_id} not found",
        )
    return course
