import pytest

from src.greenpath.services.scoring.health import calculate_health_score, pollution_category, round_half_up
from src.greenpath.services.scoring.traffic import (
    estimate_eta_minutes,
    estimate_traffic,
    speed_from_traffic,
    traffic_category,
)


def test_health_score_extremes():
    assert calculate_health_score(0, 0) == 100
    assert calculate_health_score(500, 100, True, True) == 0


def test_health_score_caps_penalties_above_scale():
    # AQI and traffic beyond their scales still cost at most 60 and 20 points.
    assert calculate_health_score(900, 250) == 20


def test_health_score_stays_in_range_and_is_monotonic():
    for traffic in range(0, 101, 10):
        previous = 101
        for aqi in range(0, 501, 25):
            score = calculate_health_score(aqi, traffic)
            assert 0 <= score <= 100
            assert score <= previous
            previous = score

    for aqi in range(0, 501, 50):
        previous = 101
        for traffic in range(0, 101, 5):
            score = calculate_health_score(aqi, traffic)
            assert score <= previous
            previous = score


def test_health_score_hazard_flags():
    assert calculate_health_score(0, 0, has_construction=True) == 90
    assert calculate_health_score(0, 0, has_industrial=True) == 90
    assert calculate_health_score(0, 0, True, True) == 80


def test_round_half_up_matches_browser_rounding():
    assert round_half_up(72.5) == 73
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2


@pytest.mark.parametrize(
    ("hour", "base", "peak"),
    [
        (9, 75, True),
        (8, 75, True),
        (11, 75, True),
        (17, 85, True),
        (21, 85, True),
        (22, 20, False),
        (23, 20, False),
        (0, 20, False),
        (6, 20, False),
        (7, 45, False),
        (14, 45, False),
        (12, 45, False),
        (16, 45, False),
    ],
)
def test_traffic_buckets(hour, base, peak):
    estimate = estimate_traffic(hour)
    assert estimate.base_level == base
    assert estimate.is_peak_hour is peak


def test_traffic_rejects_invalid_hour():
    with pytest.raises(ValueError):
        estimate_traffic(24)


def test_speed_table():
    assert speed_from_traffic(30) == 40
    assert speed_from_traffic(50) == 28
    assert speed_from_traffic(80) == 18
    assert speed_from_traffic(35) == 28
    assert speed_from_traffic(65) == 18


def test_categories():
    assert traffic_category(10) == "Low"
    assert traffic_category(64) == "Moderate"
    assert traffic_category(65) == "High"
    assert pollution_category(49) == "Low"
    assert pollution_category(80) == "Moderate"
    assert pollution_category(150) == "High"
    assert pollution_category(200) == "Critical"


def test_eta_uses_speed_table():
    assert estimate_eta_minutes(5.0, 88) == 17
    assert estimate_eta_minutes(10.0, 20) == 15
