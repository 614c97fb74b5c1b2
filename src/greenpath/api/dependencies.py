"""Providers for the services injected into the endpoints.

Tests replace these through ``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends

from ..persistence.history import RouteHistoryRepository
from ..services.air_quality.waqi_client import WAQIClient
from ..services.exposure.service import ExposureService
from ..services.geocoding.nominatim_client import NominatimClient
from ..services.routing.osrm_client import OSRMClient
from ..services.routing.pipeline import RouteEnrichmentPipeline


def get_geocoder() -> NominatimClient:
    return NominatimClient()


def get_air_quality_provider() -> WAQIClient:
    return WAQIClient()


def get_router() -> OSRMClient:
    return OSRMClient()


def get_route_pipeline(
    geocoder: NominatimClient = Depends(get_geocoder),
    router: OSRMClient = Depends(get_router),
    air_quality: WAQIClient = Depends(get_air_quality_provider),
) -> RouteEnrichmentPipeline:
    return RouteEnrichmentPipeline(geocoder=geocoder, router=router, air_quality=air_quality)


def get_exposure_service(
    pipeline: RouteEnrichmentPipeline = Depends(get_route_pipeline),
    geocoder: NominatimClient = Depends(get_geocoder),
) -> ExposureService:
    return ExposureService(pipeline=pipeline, reverse_geocoder=geocoder)


def get_history_repository() -> RouteHistoryRepository:
    return RouteHistoryRepository()
