"""HTTP client for Nominatim forward and reverse geocoding."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...models.domain import Coordinate
from ..errors import ProviderUnavailableError

# Reverse lookups prefer the most local label that is present.
PLACE_FRAGMENT_KEYS = ("suburb", "neighbourhood", "road")

logger = logging.getLogger(__name__)


class NominatimClient:
    def __init__(
        self,
        base_url: str | None = None,
        region_suffix: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.region_suffix = region_suffix if region_suffix is not None else settings.geocode_region_suffix
        self.user_agent = user_agent or settings.geocode_user_agent
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
        )

    def search(self, place: str) -> list[Coordinate]:
        """Resolve a place name to coordinates, best match first."""
        query = f"{place}, {self.region_suffix}" if self.region_suffix else place
        params = {"q": query, "format": "json", "limit": 1}

        client = self._get_client()
        try:
            response = client.get(f"{self.base_url}/search", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.warning(f"Geocoding request for '{place}' failed: {exc}")
            raise ProviderUnavailableError("Geocoding") from exc
        except ValueError as exc:
            raise ProviderUnavailableError("Geocoding", "Geocoding service returned a malformed response") from exc
        finally:
            client.close()

        # Nominatim reports failures as a JSON object; results are always a list.
        if not isinstance(data, list):
            logger.warning(f"Geocoding request for '{place}' returned a non-list payload")
            raise ProviderUnavailableError("Geocoding", "Geocoding service returned a malformed response")

        results: list[Coordinate] = []
        for item in data:
            try:
                results.append(Coordinate(latitude=float(item["lat"]), longitude=float(item["lon"])))
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping malformed geocoding result: %s", item)
        return results

    def reverse(self, latitude: float, longitude: float) -> str:
        """Return a short human-readable place name for a point, or an empty string."""
        params = {"format": "json", "lat": latitude, "lon": longitude}

        client = self._get_client()
        try:
            response = client.get(f"{self.base_url}/reverse", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.warning(f"Reverse geocoding ({latitude}, {longitude}) failed: {exc}")
            raise ProviderUnavailableError("Geocoding") from exc
        except ValueError as exc:
            raise ProviderUnavailableError("Geocoding", "Geocoding service returned a malformed response") from exc
        finally:
            client.close()

        address = data.get("address") if isinstance(data, dict) else None
        if not isinstance(address, dict):
            return ""
        for key in PLACE_FRAGMENT_KEYS:
            if address.get(key):
                return str(address[key])
        return ""
