"""Exposure comparison schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ..models.domain import ExposureComparison, ExposureResult
from ..services.exposure.service import RECOMMENDED_BADGE


class HealthImpactModel(BaseModel):
    cigarettes: int
    indoor_hours: int
    tone: str
    message: str


class ExposureRouteModel(BaseModel):
    name: str
    distance_km: float
    duration: str
    aqi: int
    exposure: float
    risk: str
    via: List[str]
    is_safest: bool
    badge: Optional[str] = None
    health_impact: HealthImpactModel

    @classmethod
    def from_domain(cls, result: ExposureResult) -> "ExposureRouteModel":
        impact = result.health_impact
        return cls(
            name=result.name,
            distance_km=result.distance_km,
            duration=f"{result.eta_minutes} mins",
            aqi=result.adjusted_aqi,
            exposure=result.exposure_index,
            risk=result.risk_category,
            via=list(result.via_place_names),
            is_safest=result.is_safest,
            badge=RECOMMENDED_BADGE if result.is_safest else None,
            health_impact=HealthImpactModel(
                cigarettes=impact.cigarettes,
                indoor_hours=impact.indoor_hours,
                tone=impact.tone,
                message=impact.message,
            ),
        )


class ExposureResponse(BaseModel):
    success: bool = True
    routes: List[ExposureRouteModel]
    safest: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_domain(cls, comparison: ExposureComparison) -> "ExposureResponse":
        if not comparison.routes:
            return cls(routes=[], message="No routes found")
        return cls(
            routes=[ExposureRouteModel.from_domain(result) for result in comparison.routes],
            safest=comparison.safest,
        )
