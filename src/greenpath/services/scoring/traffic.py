"""Time-of-day traffic heuristic and the speed table derived from it."""

from __future__ import annotations

from ...models.domain import TrafficEstimate
from .health import round_half_up

MORNING_PEAK = (8, 11)
EVENING_PEAK = (17, 21)
NIGHT_START = 22
NIGHT_END = 6


def estimate_traffic(hour: int) -> TrafficEstimate:
    """Return the baseline congestion for a wall-clock hour (0-23)."""

    if not 0 <= hour <= 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}.")

    if MORNING_PEAK[0] <= hour <= MORNING_PEAK[1]:
        return TrafficEstimate(base_level=75, is_peak_hour=True)
    if EVENING_PEAK[0] <= hour <= EVENING_PEAK[1]:
        return TrafficEstimate(base_level=85, is_peak_hour=True)
    if hour >= NIGHT_START or hour <= NIGHT_END:
        return TrafficEstimate(base_level=20, is_peak_hour=False)
    return TrafficEstimate(base_level=45, is_peak_hour=False)


def speed_from_traffic(traffic_percent: float) -> int:
    """Average speed in km/h for a congestion percentage."""

    if traffic_percent < 35:
        return 40
    if traffic_percent < 65:
        return 28
    return 18


def traffic_category(traffic_percent: float) -> str:
    if traffic_percent < 35:
        return "Low"
    if traffic_percent < 65:
        return "Moderate"
    return "High"


def estimate_eta_minutes(distance_km: float, traffic_percent: float) -> int:
    hours = distance_km / speed_from_traffic(traffic_percent)
    return round_half_up(hours * 60)
