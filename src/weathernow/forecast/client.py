"""Open-Meteo forecast client: URL construction and a single validated GET."""

from __future__ import annotations

import logging
import math
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import DecodingError, InvalidResponseError, NetworkError
from .models import RawForecastResponse

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "pressure_msl",
    "wind_speed_10m",
    "wind_direction_10m",
    "visibility",
)
HOURLY_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation_probability",
    "weather_code",
    "pressure_msl",
    "wind_speed_10m",
    "wind_direction_10m",
    "visibility",
)
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "precipitation_probability_max",
    "sunrise",
    "sunset",
    "uv_index_max",
)


def build_forecast_url(base_url: str, latitude: float, longitude: float) -> str:
    """Build the forecast request URL for one coordinate.

    The query is deterministic: fixed parameter order, comma-joined field
    lists with literal commas, and ``timezone=auto``.
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise InvalidResponseError(f"Invalid URL: non-finite coordinate ({latitude}, {longitude})")
    if not (-90 <= latitude <= 90) or not (-180 <= longitude <= 180):
        raise InvalidResponseError(
            f"Invalid URL: coordinate out of range ({latitude}, {longitude})"
        )
    query = urlencode(
        [
            ("latitude", latitude),
            ("longitude", longitude),
            ("current", ",".join(CURRENT_FIELDS)),
            ("hourly", ",".join(HOURLY_FIELDS)),
            ("daily", ",".join(DAILY_FIELDS)),
            ("timezone", "auto"),
        ],
        safe=",",
    )
    return f"{base_url.rstrip('/')}/forecast?{query}"


class ForecastClient:
    """Fetches and decodes forecast payloads. One attempt per call, no retry."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self._base_url = str(settings.forecast_api_base_url)
        self._client = httpx.AsyncClient(
            timeout=settings.forecast_timeout_seconds,
            headers={
                "Accept": "application/json",
                "Cache-Control": "no-cache",
                "User-Agent": settings.forecast_user_agent,
            },
            transport=transport,
        )

    async def __aenter__(self) -> ForecastClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close underlying HTTP client."""
        await self._client.aclose()

    def build_url(self, latitude: float, longitude: float) -> str:
        return build_forecast_url(self._base_url, latitude, longitude)

    async def fetch_forecast(self, latitude: float, longitude: float) -> RawForecastResponse:
        """Fetch the forecast for one coordinate."""
        return await self.fetch(self.build_url(latitude, longitude))

    async def fetch(self, url: str) -> RawForecastResponse:
        """GET ``url`` and decode it as a forecast response.

        Raises:
            NetworkError: transport failure, timeout, or a status other than 200.
            DecodingError: body is not JSON or does not match the schema.
            InvalidResponseError: body is JSON but not an object.
        """
        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as exc:
            self.logger.warning("Forecast request timed out (%s)", type(exc).__name__)
            raise NetworkError("Request timed out") from exc
        except httpx.HTTPError as exc:
            self.logger.warning("Forecast request failed (%s)", type(exc).__name__)
            raise NetworkError(str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            self.logger.warning("Forecast request returned HTTP %d", response.status_code)
            raise NetworkError(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodingError("Response body is not valid JSON") from exc

        if not isinstance(payload, dict):
            raise InvalidResponseError(
                f"Unexpected payload type {type(payload).__name__}; expected object"
            )

        try:
            return RawForecastResponse.model_validate(payload)
        except ValidationError as exc:
            raise DecodingError(
                f"Response does not match forecast schema ({exc.error_count()} errors): "
                f"{_first_error(exc)}"
            ) from exc


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}"
