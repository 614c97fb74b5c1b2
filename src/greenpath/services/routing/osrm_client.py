"""HTTP client for the OSRM route service."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...models.domain import Coordinate, RawRoute
from ..errors import ProviderUnavailableError

# OSRM answers these codes when the two points cannot be joined; that is an
# empty result, not an outage.
NO_ROUTE_CODES = frozenset({"NoRoute", "NoSegment"})
MALFORMED_MESSAGE = "Routing service returned a malformed response"

logger = logging.getLogger(__name__)


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self.transport,
        )

    def alternatives(self, source: Coordinate, destination: Coordinate) -> list[RawRoute]:
        """Return the alternative routes between two coordinates.

        Geometry comes back as GeoJSON, so every point is (lon, lat).
        """
        coordinate_str = (
            f"{source.longitude},{source.latitude};{destination.longitude},{destination.latitude}"
        )
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"
        params = {
            "overview": "full",
            "geometries": "geojson",
            "alternatives": "true",
        }

        client = self._get_client()
        try:
            response = client.get(url, params=params)
            data = _safe_json(response)
            if data is not None and data.get("code") in NO_ROUTE_CODES:
                logger.info("OSRM found no route between %s and %s", source, destination)
                return []
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning(f"OSRM route request timed out: {exc}")
            raise ProviderUnavailableError("Routing", "Routing service timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"OSRM route request failed: {exc}")
            raise ProviderUnavailableError("Routing") from exc
        finally:
            client.close()

        if data is None or "code" not in data:
            logger.warning("OSRM answered without a route payload")
            raise ProviderUnavailableError("Routing", MALFORMED_MESSAGE)
        if data["code"] != "Ok":
            logger.warning(f"OSRM route request failed: {data.get('message', data['code'])}")
            raise ProviderUnavailableError("Routing")

        try:
            return [
                RawRoute(
                    distance_meters=float(route["distance"]),
                    geometry=[(float(lon), float(lat)) for lon, lat in route["geometry"]["coordinates"]],
                )
                for route in data.get("routes") or []
            ]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Malformed OSRM route payload: {exc}")
            raise ProviderUnavailableError("Routing", MALFORMED_MESSAGE) from exc


def _safe_json(response: httpx.Response) -> dict | None:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def check_health(base_url: str | None = None, transport: httpx.BaseTransport | None = None) -> bool:
    """Check OSRM service health with a short route request across central Lucknow."""
    base = (base_url or settings.osrm_base_url or "").rstrip("/")
    if not base:
        return False
    try:
        test_coords = "80.9462,26.8467;80.9231,26.8318"
        url = f"{base}/route/v1/{settings.osrm_profile}/{test_coords}"
        with httpx.Client(timeout=5.0, transport=transport) as client:
            response = client.get(url, params={"overview": "false"})
        response.raise_for_status()
        return response.json().get("code") == "Ok"
    except (httpx.HTTPError, ValueError):
        return False
