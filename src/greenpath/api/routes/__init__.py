"""Route group exports."""

from . import air_quality, exposure, health, routes

__all__ = ["routes", "exposure", "air_quality", "health"]
