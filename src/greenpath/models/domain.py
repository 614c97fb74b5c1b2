"""Domain models for routes, air-quality samples and exposure results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(slots=True)
class RawRoute:
    """Route alternative as returned by the router, geometry in (lon, lat) order."""

    distance_meters: float
    geometry: Sequence[Tuple[float, float]]


@dataclass(slots=True)
class AirQualitySample:
    aqi: int


@dataclass(slots=True)
class TrafficEstimate:
    base_level: int
    is_peak_hour: bool


@dataclass(slots=True)
class EnrichedRoute:
    """Route annotated with pollution, traffic, health score and ETA.

    ``coordinates`` are (lat, lon) pairs, the reverse of ``RawRoute.geometry``.
    """

    name: str
    distance_km: float
    pollution_category: str
    aqi: int
    traffic_percent: int
    traffic_category: str
    health_score: int
    eta_minutes: int
    coordinates: List[Tuple[float, float]]
    is_peak_hour: bool


@dataclass(slots=True)
class RouteRecommendation:
    source: str
    destination: str
    routes: List[EnrichedRoute] = field(default_factory=list)
    recommended: Optional[EnrichedRoute] = None


@dataclass(slots=True)
class HealthImpact:
    cigarettes: int
    indoor_hours: int
    tone: str
    message: str


@dataclass(slots=True)
class ExposureResult:
    name: str
    distance_km: float
    eta_minutes: int
    adjusted_aqi: int
    exposure_index: float
    risk_category: str
    via_place_names: List[str]
    is_safest: bool
    health_impact: HealthImpact


@dataclass(slots=True)
class ExposureComparison:
    routes: List[ExposureResult] = field(default_factory=list)
    safest: Optional[str] = None
