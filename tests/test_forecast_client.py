"""Forecast client tests: URL construction and failure classification."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from weathernow.exceptions import DecodingError, InvalidResponseError, NetworkError
from weathernow.forecast.client import ForecastClient, build_forecast_url
from weathernow.forecast.models import RawForecastResponse

BASE_URL = "https://api.open-meteo.com/v1"


def _load_payload() -> dict[str, Any]:
    source = Path(__file__).parent / "fixtures" / "open_meteo_forecast.json"
    return json.loads(source.read_text(encoding="utf-8"))


def _make_settings(**overrides: Any) -> Any:
    defaults = {
        "forecast_api_base_url": BASE_URL,
        "forecast_timeout_seconds": 30.0,
        "forecast_user_agent": "weathernow-tests/0.1",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _fetch(
    handler: Callable[[httpx.Request], httpx.Response],
    lat: float = 37.7749,
    lon: float = -122.4194,
) -> RawForecastResponse:
    async def _run() -> RawForecastResponse:
        client = ForecastClient(
            settings=_make_settings(),
            logger=logging.getLogger("test_forecast_client"),
            transport=httpx.MockTransport(handler),
        )
        async with client:
            return await client.fetch_forecast(lat, lon)

    return asyncio.run(_run())


def test_build_forecast_url_is_deterministic() -> None:
    url = build_forecast_url(BASE_URL + "/", 37.7749, -122.4194)
    assert url == (
        "https://api.open-meteo.com/v1/forecast?latitude=37.7749&longitude=-122.4194"
        "&current=temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,"
        "weather_code,pressure_msl,wind_speed_10m,wind_direction_10m,visibility"
        "&hourly=temperature_2m,relative_humidity_2m,apparent_temperature,"
        "precipitation_probability,weather_code,pressure_msl,wind_speed_10m,"
        "wind_direction_10m,visibility"
        "&daily=weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
        "apparent_temperature_min,precipitation_probability_max,sunrise,sunset,uv_index_max"
        "&timezone=auto"
    )
    assert url == build_forecast_url(BASE_URL, 37.7749, -122.4194)


@pytest.mark.parametrize(
    ("lat", "lon"),
    [(float("nan"), 0.0), (0.0, float("inf")), (91.0, 0.0), (0.0, -181.0)],
)
def test_build_forecast_url_rejects_bad_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(InvalidResponseError, match="Invalid URL"):
        build_forecast_url(BASE_URL, lat, lon)


def test_successful_fetch_decodes_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_load_payload())

    result = _fetch(handler)

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert request.url.params["timezone"] == "auto"
    assert request.headers["Cache-Control"] == "no-cache"
    assert request.headers["User-Agent"] == "weathernow-tests/0.1"
    assert result.timezone == "America/Los_Angeles"
    assert len(result.hourly.temperature_2m) == 48
    assert result.current.weather_code == 2


def test_http_500_maps_to_network_error_without_retry() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(500, text="upstream failure")

    with pytest.raises(NetworkError) as exc_info:
        _fetch(handler)

    assert str(exc_info.value) == "HTTP 500"
    assert exc_info.value.display_message == "Network error: HTTP 500"
    assert len(calls) == 1


def test_non_200_success_status_is_rejected() -> None:
    with pytest.raises(NetworkError, match="HTTP 204"):
        _fetch(lambda request: httpx.Response(204))


def test_transport_failure_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError, match="connection refused"):
        _fetch(handler)


def test_timeout_maps_to_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(NetworkError, match="Request timed out"):
        _fetch(handler)


def test_non_json_body_maps_to_decoding_error() -> None:
    with pytest.raises(DecodingError, match="not valid JSON"):
        _fetch(lambda request: httpx.Response(200, text="<html>oops</html>"))


def test_non_object_json_maps_to_invalid_response() -> None:
    with pytest.raises(InvalidResponseError, match="expected object"):
        _fetch(lambda request: httpx.Response(200, json=[1, 2, 3]))


def test_schema_mismatch_maps_to_decoding_error() -> None:
    payload = _load_payload()
    del payload["current"]

    with pytest.raises(DecodingError, match="current"):
        _fetch(lambda request: httpx.Response(200, json=payload))


def test_wrong_array_element_type_maps_to_decoding_error() -> None:
    payload = _load_payload()
    payload["hourly"]["temperature_2m"][0] = "warm"

    with pytest.raises(DecodingError, match="hourly.temperature_2m.0"):
        _fetch(lambda request: httpx.Response(200, json=payload))
