"""Route search request/response schemas."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field

from ..models.domain import EnrichedRoute, RouteRecommendation


class RouteSearchRequest(BaseModel):
    source: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("source", "from"),
        description="Starting place name.",
    )
    destination: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("destination", "to"),
        description="Destination place name.",
    )


class EnrichedRouteModel(BaseModel):
    name: str
    distance_km: float
    distance: str
    time: str
    pollution: str
    aqi: int
    traffic: int
    traffic_level: str
    health_score: int
    eta_minutes: int
    coordinates: List[Tuple[float, float]]
    is_peak_hour: bool

    @classmethod
    def from_domain(cls, route: EnrichedRoute) -> "EnrichedRouteModel":
        return cls(
            name=route.name,
            distance_km=route.distance_km,
            distance=f"{route.distance_km:.1f} km",
            time=f"{route.eta_minutes} mins",
            pollution=route.pollution_category,
            aqi=route.aqi,
            traffic=route.traffic_percent,
            traffic_level=route.traffic_category,
            health_score=route.health_score,
            eta_minutes=route.eta_minutes,
            coordinates=list(route.coordinates),
            is_peak_hour=route.is_peak_hour,
        )


class RouteSearchResponse(BaseModel):
    success: bool = True
    routes: List[EnrichedRouteModel]
    recommended: Optional[EnrichedRouteModel] = None

    @classmethod
    def from_domain(cls, recommendation: RouteRecommendation) -> "RouteSearchResponse":
        routes = [EnrichedRouteModel.from_domain(route) for route in recommendation.routes]
        return cls(routes=routes, recommended=routes[0] if routes else None)


class RouteHistoryResponse(BaseModel):
    success: bool = True
    data: List[dict]


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
