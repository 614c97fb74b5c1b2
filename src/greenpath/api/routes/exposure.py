"""Exposure comparison endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from ...schemas.exposure import ExposureResponse
from ...schemas.routing import RouteSearchRequest
from ..dependencies import get_exposure_service
from ...services.errors import RoutePlanningError
from ...services.exposure.service import ExposureService

router = APIRouter(prefix="/exposure", tags=["exposure"])

logger = logging.getLogger(__name__)


def _compare(service: ExposureService, source: str | None, destination: str | None) -> ExposureResponse:
    try:
        return ExposureResponse.from_domain(service.compare(source, destination))
    except RoutePlanningError:
        raise
    except Exception as exc:
        logger.exception(f"Error analyzing exposure from {source!r} to {destination!r}: {exc}")
        raise RoutePlanningError("Error analyzing routes") from exc


@router.get("/compare", response_model=ExposureResponse, status_code=status.HTTP_200_OK)
def compare_exposure(
    source: str | None = Query(default=None),
    from_: str | None = Query(default=None, alias="from"),
    destination: str | None = Query(default=None),
    to: str | None = Query(default=None),
    service: ExposureService = Depends(get_exposure_service),
) -> ExposureResponse:
    return _compare(service, source or from_, destination or to)


@router.post("/compare", response_model=ExposureResponse, status_code=status.HTTP_200_OK)
def compare_exposure_from_body(
    payload: RouteSearchRequest,
    service: ExposureService = Depends(get_exposure_service),
) -> ExposureResponse:
    return _compare(service, payload.source, payload.destination)
