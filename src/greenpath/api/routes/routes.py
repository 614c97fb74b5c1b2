"""Route recommendation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from ...config import settings
from ...persistence.history import RouteHistoryRepository
from ...schemas.routing import RouteHistoryResponse, RouteSearchRequest, RouteSearchResponse
from ..dependencies import get_history_repository, get_route_pipeline
from ...services.errors import RoutePlanningError
from ...services.routing.pipeline import RouteEnrichmentPipeline

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


def _recommend(
    pipeline: RouteEnrichmentPipeline,
    history: RouteHistoryRepository,
    source: str | None,
    destination: str | None,
) -> RouteSearchResponse:
    try:
        recommendation = pipeline.find_routes(source, destination)
    except RoutePlanningError:
        raise
    except Exception as exc:
        logger.exception(f"Error finding routes from {source!r} to {destination!r}: {exc}")
        raise RoutePlanningError() from exc

    if settings.history_enabled and recommendation.recommended is not None:
        history.record(recommendation)
    return RouteSearchResponse.from_domain(recommendation)


@router.get("", response_model=RouteSearchResponse, status_code=status.HTTP_200_OK)
def find_routes(
    source: str | None = Query(default=None),
    from_: str | None = Query(default=None, alias="from"),
    destination: str | None = Query(default=None),
    to: str | None = Query(default=None),
    pipeline: RouteEnrichmentPipeline = Depends(get_route_pipeline),
    history: RouteHistoryRepository = Depends(get_history_repository),
) -> RouteSearchResponse:
    return _recommend(pipeline, history, source or from_, destination or to)


@router.post("", response_model=RouteSearchResponse, status_code=status.HTTP_200_OK)
def find_routes_from_body(
    payload: RouteSearchRequest,
    pipeline: RouteEnrichmentPipeline = Depends(get_route_pipeline),
    history: RouteHistoryRepository = Depends(get_history_repository),
) -> RouteSearchResponse:
    return _recommend(pipeline, history, payload.source, payload.destination)


@router.get("/history", response_model=RouteHistoryResponse, status_code=status.HTTP_200_OK)
def route_history(
    limit: int = Query(default=50, ge=1, le=500),
    history: RouteHistoryRepository = Depends(get_history_repository),
) -> RouteHistoryResponse:
    try:
        return RouteHistoryResponse(data=history.list_recent(limit=limit))
    except Exception as exc:
        logger.exception(f"Error fetching route history: {exc}")
        raise RoutePlanningError("Failed to fetch route history") from exc
