"""Error taxonomy for the route planning pipeline.

Each class carries the HTTP status and the short message shown to callers.
Provider payloads and tracebacks never go into ``message``.
"""

from __future__ import annotations


class RoutePlanningError(Exception):
    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingInputError(RoutePlanningError):
    status_code = 400
    default_message = "Source and destination are required"


class LocationNotFoundError(RoutePlanningError):
    status_code = 404
    default_message = "Location not found"

    def __init__(self, place: str | None = None) -> None:
        self.place = place
        super().__init__(f"Location not found: {place}" if place else None)


class ProviderUnavailableError(RoutePlanningError):
    status_code = 500
    default_message = "External service unavailable"

    def __init__(self, provider: str, message: str | None = None) -> None:
        self.provider = provider
        super().__init__(message or f"{provider} service unavailable")


class AirQualityTokenMissingError(ProviderUnavailableError):
    def __init__(self) -> None:
        super().__init__("air-quality", "Air-quality token missing")
