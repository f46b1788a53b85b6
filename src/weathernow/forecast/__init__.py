"""Open-Meteo forecast fetching and normalization."""

from .client import ForecastClient, build_forecast_url
from .models import (
    CurrentConditions,
    DailyForecast,
    FeelsLike,
    HourlyForecast,
    NormalizedForecast,
    RawForecastResponse,
    Temperature,
    WeatherDescription,
)
from .normalizer import normalize

__all__ = [
    "CurrentConditions",
    "DailyForecast",
    "FeelsLike",
    "ForecastClient",
    "HourlyForecast",
    "NormalizedForecast",
    "RawForecastResponse",
    "Temperature",
    "WeatherDescription",
    "build_forecast_url",
    "normalize",
]
