"""Route history persistence in Supabase."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import RouteRecommendation

logger = logging.getLogger(__name__)


def history_record(recommendation: RouteRecommendation, now: datetime | None = None) -> dict[str, Any] | None:
    """Build the history row for a recommendation, or None when nothing was recommended."""
    route = recommendation.recommended
    if route is None:
        return None
    created_at = now or datetime.now(timezone.utc)
    return {
        "source": recommendation.source,
        "destination": recommendation.destination,
        "distance": f"{route.distance_km:.1f} km",
        "time": f"{route.eta_minutes} mins",
        "pollution": route.pollution_category,
        "health_score": route.health_score,
        "created_at": created_at.isoformat(),
    }


class RouteHistoryRepository:
    """Reads and writes the ``routes`` history table.

    Writes are best effort: a missing or failing database never breaks a route
    request.
    """

    def __init__(
        self,
        client_factory: Callable[[], Any] = get_supabase_client,
        table: str | None = None,
    ) -> None:
        self.client_factory = client_factory
        self.table = table or settings.history_table

    def record(self, recommendation: RouteRecommendation) -> bool:
        row = history_record(recommendation)
        if row is None:
            return False

        supabase = self.client_factory()
        if not supabase:
            logger.info("Supabase not configured - route history not saved")
            return False

        try:
            supabase.table(self.table).insert(row).execute()
            return True
        except Exception as e:
            logger.warning(f"Failed to save route history for {row['source']} -> {row['destination']}: {e}")
            return False

    def list_recent(self, limit: int = 50) -> list[dict[str, Any]]:
        """Return the most recent history rows, newest first."""
        supabase = self.client_factory()
        if not supabase:
            return []

        response = (
            supabase.table(self.table)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return list(response.data or [])
