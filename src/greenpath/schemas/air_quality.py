"""Air-quality lookup schemas."""

from __future__ import annotations

from pydantic import BaseModel


class AirQualityReading(BaseModel):
    location: str
    aqi: int
    category: str


class AirQualityResponse(BaseModel):
    success: bool = True
    data: AirQualityReading
