"""Route enrichment pipeline.

Geocodes both endpoints, fetches the router's alternatives and a single AQI
sample at the source, then scores, ranks and re-times every route.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime
from typing import Callable, Sequence

from ...models.domain import (
    AirQualitySample,
    Coordinate,
    EnrichedRoute,
    RawRoute,
    RouteRecommendation,
    TrafficEstimate,
)
from ..errors import LocationNotFoundError, MissingInputError
from ..providers import AirQualityProvider, Geocoder, RouteProvider
from ..scoring.health import calculate_health_score, pollution_category, round_half_up
from ..scoring.traffic import estimate_eta_minutes, estimate_traffic, traffic_category
from .display import apply_position_traffic_discount

MIN_TRAFFIC = 10
MAX_TRAFFIC = 100

_WORD_START = re.compile(r"\b\w", re.ASCII)

logger = logging.getLogger(__name__)


def normalize_place(value: str | None) -> str:
    """Trim and title-case a free-text place name ("  charbagh " -> "Charbagh")."""
    if not value:
        return ""
    return _WORD_START.sub(lambda match: match.group(0).upper(), value.strip().lower())


def enrich_route(route: RawRoute, index: int, aqi: int, traffic: TrafficEstimate) -> EnrichedRoute:
    """Annotate one raw route before ranking."""
    distance_km = route.distance_meters / 1000
    coordinates = [(lat, lon) for lon, lat in route.geometry]

    traffic_percent = round_half_up(traffic.base_level + distance_km * 2 + aqi / 6)
    traffic_percent = min(MAX_TRAFFIC, max(MIN_TRAFFIC, traffic_percent))

    return EnrichedRoute(
        name=f"Route {index + 1}",
        distance_km=distance_km,
        pollution_category=pollution_category(aqi),
        aqi=aqi,
        traffic_percent=traffic_percent,
        traffic_category=traffic_category(traffic_percent),
        health_score=calculate_health_score(aqi, traffic_percent),
        eta_minutes=estimate_eta_minutes(distance_km, traffic_percent),
        coordinates=coordinates,
        is_peak_hour=traffic.is_peak_hour,
    )


def rank_routes(routes: Sequence[EnrichedRoute]) -> list[EnrichedRoute]:
    """Sort cleanest first and re-time each route from its rank-adjusted traffic.

    All routes of one request share the source AQI, so the sort keeps input order.
    """
    ordered = sorted(routes, key=lambda route: route.aqi)
    total = len(ordered)

    ranked: list[EnrichedRoute] = []
    for position, route in enumerate(ordered):
        adjusted = apply_position_traffic_discount(route.traffic_percent, position, total)
        ranked.append(
            replace(
                route,
                traffic_percent=adjusted,
                traffic_category=traffic_category(adjusted),
                health_score=calculate_health_score(route.aqi, adjusted),
                eta_minutes=estimate_eta_minutes(route.distance_km, adjusted),
            )
        )
    return ranked


class RouteEnrichmentPipeline:
    """Builds a health-ranked recommendation between two place names."""

    def __init__(
        self,
        geocoder: Geocoder,
        router: RouteProvider,
        air_quality: AirQualityProvider,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.geocoder = geocoder
        self.router = router
        self.air_quality = air_quality
        self.clock = clock or datetime.now

    def _geocode(self, place: str) -> Coordinate:
        results = self.geocoder.search(place)
        if not results:
            raise LocationNotFoundError(place)
        return results[0]

    def find_routes(self, source: str | None, destination: str | None, hour: int | None = None) -> RouteRecommendation:
        source_name = normalize_place(source)
        destination_name = normalize_place(destination)
        if not source_name or not destination_name:
            raise MissingInputError()

        with ThreadPoolExecutor(max_workers=2) as executor:
            source_future = executor.submit(self._geocode, source_name)
            destination_future = executor.submit(self._geocode, destination_name)
            source_coord = source_future.result()
            destination_coord = destination_future.result()
            logger.info(
                "Geocoded '%s' -> %s and '%s' -> %s",
                source_name,
                source_coord,
                destination_name,
                destination_coord,
            )

            routes_future = executor.submit(self.router.alternatives, source_coord, destination_coord)
            aqi_future = executor.submit(self.air_quality.sample, source_coord)

            raw_routes = list(routes_future.result())
            if not raw_routes:
                logger.info("No routes found between '%s' and '%s'", source_name, destination_name)
                return RouteRecommendation(source=source_name, destination=destination_name)

            sample: AirQualitySample = aqi_future.result()

        current_hour = hour if hour is not None else self.clock().hour
        traffic = estimate_traffic(current_hour)

        enriched = [enrich_route(route, index, sample.aqi, traffic) for index, route in enumerate(raw_routes)]
        ranked = rank_routes(enriched)

        logger.info(
            "Ranked %d route(s) from '%s' to '%s' (aqi=%d, hour=%d, peak=%s)",
            len(ranked),
            source_name,
            destination_name,
            sample.aqi,
            current_hour,
            traffic.is_peak_hour,
        )
        return RouteRecommendation(
            source=source_name,
            destination=destination_name,
            routes=ranked,
            recommended=ranked[0],
        )
