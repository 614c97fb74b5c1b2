"""Air-quality lookup endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from ...schemas.air_quality import AirQualityReading, AirQualityResponse
from ..dependencies import get_air_quality_provider, get_geocoder
from ...services.errors import LocationNotFoundError, MissingInputError, RoutePlanningError
from ...services.providers import AirQualityProvider, Geocoder
from ...services.routing.pipeline import normalize_place
from ...services.scoring.health import pollution_category

router = APIRouter(prefix="/aqi", tags=["air-quality"])

logger = logging.getLogger(__name__)


@router.get("", response_model=AirQualityResponse, status_code=status.HTTP_200_OK)
def current_air_quality(
    location: str | None = Query(default=None),
    geocoder: Geocoder = Depends(get_geocoder),
    air_quality: AirQualityProvider = Depends(get_air_quality_provider),
) -> AirQualityResponse:
    place = normalize_place(location)
    if not place:
        raise MissingInputError("Location is required")

    try:
        results = geocoder.search(place)
        if not results:
            raise LocationNotFoundError(place)
        sample = air_quality.sample(results[0])
    except RoutePlanningError:
        raise
    except Exception as exc:
        logger.exception(f"Error fetching air quality for {place!r}: {exc}")
        raise RoutePlanningError() from exc

    return AirQualityResponse(
        data=AirQualityReading(location=place, aqi=sample.aqi, category=pollution_category(sample.aqi)),
    )
