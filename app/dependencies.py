"""Request-scoped accessors for the services built in the app lifespan."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.services.aggregator import SearchAggregator
from app.services.cache import SlotCache
from app.services.reference import ReferenceData


def get_reference(request: Request) -> ReferenceData:
    return request.app.state.reference


def get_aggregator(request: Request) -> SearchAggregator:
    return request.app.state.aggregator


def get_cache(request: Request) -> SlotCache:
    return request.app.state.cache


Reference = Annotated[ReferenceData, Depends(get_reference)]
Aggregator = Annotated[SearchAggregator, Depends(get_aggregator)]
Cache = Annotated[SlotCache, Depends(get_cache)]
