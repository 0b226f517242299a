"""
Health check endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.config import ENVIRONMENT
from app.dependencies import Cache, Reference
from app.models import HealthResponse
from app.rate_limit import DEFAULT, limiter

router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
)
@limiter.limit(DEFAULT)
async def get_health(request: Request, reference: Reference, cache: Cache) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        environment=ENVIRONMENT,
        courses=len(reference.courses),
        cache=cache.snapshot(),
        timestamp=datetime.now(timezone.utc),
    )
