"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_osrm_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.osrm_client import check_health as osrm_health_check
    return osrm_health_check


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
def health_osrm() -> dict:
    """Check OSRM service health."""
    try:
        osrm_health_check = _get_osrm_health_check()
        return {"service": "osrm", "healthy": osrm_health_check()}
    except Exception as e:
        return {"service": "osrm", "healthy": False, "error": str(e)}


@router.get("/health/air-quality", status_code=status.HTTP_200_OK)
def health_air_quality() -> dict:
    """Report whether the air-quality token is configured, without calling the provider."""
    from ...config import settings

    return {"service": "waqi", "configured": bool(settings.waqi_token)}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and route history storage status."""
    from ...config import settings
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set GREENPATH_SUPABASE_URL and GREENPATH_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table(settings.history_table).select("id", count="exact").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "history_table": settings.history_table,
            "message": "Database connected.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
