"""Cumulative pollution-exposure comparison across route alternatives."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ...models.domain import (
    EnrichedRoute,
    ExposureComparison,
    ExposureResult,
    HealthImpact,
)
from ..errors import ProviderUnavailableError
from ..providers import ReverseGeocoder
from ..routing.pipeline import RouteEnrichmentPipeline
from ..scoring.health import round_half_up

MAX_COMPARED_ROUTES = 2
EXPOSURE_FACTOR = 0.5
MIN_VIA_POINTS = 7
RECOMMENDED_BADGE = "AI Recommended"

SAFEST_MESSAGE = "This is the lowest exposure route available. Healthier option selected."
HIGHER_EXPOSURE_MESSAGE = "Higher pollution exposure detected compared to the recommended route."

logger = logging.getLogger(__name__)


def exposure_index(distance_km: float, aqi: float) -> float:
    return distance_km * aqi * EXPOSURE_FACTOR


def risk_category(exposure: float) -> str:
    if exposure < 200:
        return "Low"
    if exposure < 400:
        return "Medium"
    return "High"


def display_adjusted_aqi(base_aqi: int, exposure: float, max_exposure: float) -> int:
    """Scale the shown AQI by the route's share of the worst exposure (0.85x to 1.15x)."""
    if max_exposure <= 0:
        return base_aqi
    return round_half_up(base_aqi * (0.85 + (exposure / max_exposure) * 0.3))


def health_impact(exposure: float, is_safest: bool) -> HealthImpact:
    """Illustrative equivalents: one cigarette per 400 and one indoor hour per 250 exposure units."""
    cigarettes = max(1, round_half_up(exposure / 400)) if exposure > 0 else 0
    indoor_hours = max(1, round_half_up(exposure / 250)) if exposure > 0 else 0
    if is_safest:
        return HealthImpact(cigarettes, indoor_hours, tone="reassuring", message=SAFEST_MESSAGE)
    return HealthImpact(cigarettes, indoor_hours, tone="warning", message=HIGHER_EXPOSURE_MESSAGE)


def via_sample_points(coordinates: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
    """Interior points at one and two thirds of a path, or nothing for short paths."""
    count = len(coordinates)
    if count < MIN_VIA_POINTS:
        return []
    return [coordinates[count // 3], coordinates[(count * 2) // 3]]


def _place_name(reverse_geocoder: ReverseGeocoder, point: tuple[float, float]) -> str:
    latitude, longitude = point
    try:
        return reverse_geocoder.reverse(latitude, longitude) or ""
    except ProviderUnavailableError as exc:
        logger.debug("Skipping via name for %s: %s", point, exc)
        return ""
    except Exception:
        logger.warning("Reverse geocoding failed for %s", point, exc_info=True)
        return ""


def resolve_via_names(
    routes: Sequence[EnrichedRoute],
    reverse_geocoder: ReverseGeocoder | None,
) -> list[list[str]]:
    """Look up landmark names for each route; every point fails independently."""
    if reverse_geocoder is None or len(routes) < 2:
        return [[] for _ in routes]

    points = [via_sample_points(route.coordinates) for route in routes]
    flat = [point for route_points in points for point in route_points]
    if not flat:
        return [[] for _ in routes]

    with ThreadPoolExecutor(max_workers=len(flat)) as executor:
        names = list(executor.map(lambda point: _place_name(reverse_geocoder, point), flat))

    resolved: list[list[str]] = []
    offset = 0
    for route_points in points:
        chunk = names[offset : offset + len(route_points)]
        offset += len(route_points)
        resolved.append([name for name in chunk if name])
    return resolved


def compare_exposure(
    routes: Sequence[EnrichedRoute],
    reverse_geocoder: ReverseGeocoder | None = None,
) -> ExposureComparison:
    considered = list(routes[:MAX_COMPARED_ROUTES])
    if not considered:
        return ExposureComparison()

    exposures = [exposure_index(route.distance_km, route.aqi) for route in considered]
    max_exposure = max(exposures)
    safest_index = exposures.index(min(exposures))
    via_names = resolve_via_names(considered, reverse_geocoder)

    results = [
        ExposureResult(
            name=route.name,
            distance_km=route.distance_km,
            eta_minutes=route.eta_minutes,
            adjusted_aqi=display_adjusted_aqi(route.aqi, exposure, max_exposure),
            exposure_index=exposure,
            risk_category=risk_category(exposure),
            via_place_names=via_names[index],
            is_safest=index == safest_index,
            health_impact=health_impact(exposure, index == safest_index),
        )
        for index, (route, exposure) in enumerate(zip(considered, exposures))
    ]
    return ExposureComparison(routes=results, safest=considered[safest_index].name)


class ExposureService:
    """Runs the route pipeline and layers the exposure comparison on its output."""

    def __init__(self, pipeline: RouteEnrichmentPipeline, reverse_geocoder: ReverseGeocoder | None = None) -> None:
        self.pipeline = pipeline
        self.reverse_geocoder = reverse_geocoder

    def compare(self, source: str | None, destination: str | None, hour: int | None = None) -> ExposureComparison:
        recommendation = self.pipeline.find_routes(source, destination, hour=hour)
        if not recommendation.routes:
            logger.info(
                "No routes to compare between '%s' and '%s'",
                recommendation.source,
                recommendation.destination,
            )
            return ExposureComparison()
        return compare_exposure(recommendation.routes, self.reverse_geocoder)
