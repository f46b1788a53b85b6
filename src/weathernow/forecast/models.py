"""Wire models for the Open-Meteo forecast payload and normalized view records."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CurrentBlock(_WireModel):
    """Scalar ``current`` object of the forecast response."""

    time: str
    temperature_2m: float
    relative_humidity_2m: int
    apparent_temperature: float
    precipitation: float
    weather_code: int
    pressure_msl: float
    wind_speed_10m: float
    wind_direction_10m: int
    visibility: float


class HourlySeries(_WireModel):
    """Parallel arrays of the ``hourly`` object. ``None`` marks a missing value."""

    time: list[str | None]
    temperature_2m: list[float | None]
    relative_humidity_2m: list[int | None]
    apparent_temperature: list[float | None]
    precipitation_probability: list[int | None]
    weather_code: list[int | None]
    pressure_msl: list[float | None]
    wind_speed_10m: list[float | None]
    wind_direction_10m: list[int | None]
    visibility: list[float | None]


class DailySeries(_WireModel):
    """Parallel arrays of the ``daily`` object. ``None`` marks a missing value."""

    time: list[str | None]
    weather_code: list[int | None]
    temperature_2m_max: list[float | None]
    temperature_2m_min: list[float | None]
    apparent_temperature_max: list[float | None]
    apparent_temperature_min: list[float | None]
    precipitation_probability_max: list[int | None]
    sunrise: list[str | None]
    sunset: list[str | None]
    uv_index_max: list[float | None]


class RawForecastResponse(_WireModel):
    """Decoded forecast response as returned by the API."""

    current: CurrentBlock
    hourly: HourlySeries
    daily: DailySeries
    latitude: float
    longitude: float
    timezone: str
    timezone_abbreviation: str
    elevation: float
    utc_offset_seconds: int | None = None


class _ViewModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class WeatherDescription(_ViewModel):
    """Condition descriptor attached to every forecast point."""

    code: int
    main: str
    description: str
    icon_key: str


class Temperature(_ViewModel):
    day: float
    min: float
    max: float
    night: float
    eve: float
    morn: float


class FeelsLike(_ViewModel):
    day: float
    night: float
    eve: float
    morn: float


class CurrentConditions(_ViewModel):
    """Conditions at acquisition time."""

    dt: datetime
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    uvi: float
    clouds: int
    visibility: int
    wind_speed: float
    wind_deg: int
    weather: tuple[WeatherDescription, ...]
    sunrise: datetime
    sunset: datetime


class HourlyForecast(_ViewModel):
    """One hour of the next-24-hours forecast."""

    dt: datetime
    temp: float
    feels_like: float
    pressure: int
    humidity: int
    uvi: float
    clouds: int
    visibility: int
    wind_speed: float
    wind_deg: int
    weather: tuple[WeatherDescription, ...]
    pop: float


class DailyForecast(_ViewModel):
    """One day of the seven-day forecast."""

    dt: datetime
    sunrise: datetime
    sunset: datetime
    temp: Temperature
    feels_like: FeelsLike
    pressure: int
    humidity: int
    wind_speed: float
    wind_deg: int
    weather: tuple[WeatherDescription, ...]
    clouds: int
    pop: float
    uvi: float


class NormalizedForecast(_ViewModel):
    """Output of one normalization pass."""

    current: CurrentConditions
    hourly: tuple[HourlyForecast, ...]
    daily: tuple[DailyForecast, ...]
