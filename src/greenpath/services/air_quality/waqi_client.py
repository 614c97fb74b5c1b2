"""HTTP client for the World Air Quality Index (WAQI) feed."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...models.domain import AirQualitySample, Coordinate
from ..errors import AirQualityTokenMissingError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class WAQIClient:
    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        default_aqi: int | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token if token is not None else settings.waqi_token
        self.base_url = (base_url or settings.waqi_base_url).rstrip("/")
        self.default_aqi = default_aqi if default_aqi is not None else settings.default_aqi
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self.transport,
        )

    def sample(self, coordinate: Coordinate) -> AirQualitySample:
        """Fetch the current AQI at a coordinate.

        Raises ``AirQualityTokenMissingError`` before any network call when no token
        is configured. A feed whose status is not "ok" is a provider failure; an
        "ok" feed without a numeric reading yields the configured default AQI.
        """
        if not self.token:
            raise AirQualityTokenMissingError()

        url = f"{self.base_url}/feed/geo:{coordinate.latitude};{coordinate.longitude}/"
        client = self._get_client()
        try:
            response = client.get(url, params={"token": self.token})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning(f"Air-quality request failed: {exc}")
            raise ProviderUnavailableError("Air-quality") from exc
        except ValueError as exc:
            raise ProviderUnavailableError("Air-quality", "Air-quality service returned a malformed response") from exc
        finally:
            client.close()

        # A rejected token or unknown station comes back as HTTP 200 with status "error".
        if not isinstance(payload, dict) or payload.get("status") != "ok":
            detail = payload.get("data") if isinstance(payload, dict) else None
            logger.warning(f"Air-quality feed answered with an error: {detail}")
            raise ProviderUnavailableError("Air-quality", "Air-quality service rejected the request")

        aqi = _extract_aqi(payload)
        if aqi is None:
            logger.warning(
                "No usable AQI reading at (%s, %s), falling back to %s",
                coordinate.latitude,
                coordinate.longitude,
                self.default_aqi,
            )
            aqi = self.default_aqi
        return AirQualitySample(aqi=aqi)


def _extract_aqi(payload: dict) -> int | None:
    data = payload.get("data")
    if not isinstance(data, dict):
        return None
    value = data.get("aqi")
    # WAQI reports "-" for stations without a current reading.
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return int(value)
