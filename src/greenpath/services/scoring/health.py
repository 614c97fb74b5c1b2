"""Composite route health score."""

from __future__ import annotations

import math

MAX_AQI_PENALTY = 60.0
MAX_TRAFFIC_PENALTY = 20.0
HAZARD_PENALTY = 10.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as browsers do."""

    return int(math.floor(value + 0.5))


def calculate_health_score(
    aqi: float,
    traffic: float,
    has_construction: bool = False,
    has_industrial: bool = False,
) -> int:
    """Score a route from 0 (worst) to 100 (healthiest).

    AQI contributes up to 60 points of penalty over the 0-500 scale, traffic up to
    20 over 0-100, and each hazard flag a flat 10.
    """

    aqi_penalty = min(MAX_AQI_PENALTY, aqi / 500 * MAX_AQI_PENALTY)
    traffic_penalty = min(MAX_TRAFFIC_PENALTY, traffic / 100 * MAX_TRAFFIC_PENALTY)
    construction_penalty = HAZARD_PENALTY if has_construction else 0.0
    industrial_penalty = HAZARD_PENALTY if has_industrial else 0.0

    score = 100 - (aqi_penalty + traffic_penalty + construction_penalty + industrial_penalty)
    return max(0, min(100, round_half_up(score)))


def pollution_category(aqi: float) -> str:
    if aqi < 50:
        return "Low"
    if aqi < 100:
        return "Moderate"
    if aqi < 200:
        return "High"
    return "Critical"
