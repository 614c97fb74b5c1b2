"""Presentation adjustments applied after ranking.

These reshape displayed values by rank. They are not measurements.
"""

from __future__ import annotations

MIN_DISPLAY_TRAFFIC = 10
POSITION_DISCOUNT = 10


def apply_position_traffic_discount(traffic_percent: int, position: int, total_routes: int) -> int:
    """Lower the shown congestion of earlier-ranked routes.

    The first of ``total_routes`` loses ``10 * total_routes`` points, the last one 10.
    """

    return max(MIN_DISPLAY_TRAFFIC, traffic_percent - POSITION_DISCOUNT * (total_routes - position))
