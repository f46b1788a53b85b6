"""Turn a raw forecast payload into per-timepoint view records.

The API returns each series as a set of parallel arrays. Records are built
index by index; an index that is absent (array too short, or ``null``) from
any array a record needs is skipped, and the remaining indices are kept at
their own positions.

Hourly and daily timestamps are derived from the acquisition clock rather
than the API's local time strings. Daily sunrise/sunset are fixed 06:00 and
18:00 wall-clock times, and the daily fields the API does not supply are
filled with placeholder constants.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..catalog import describe
from ..formatting import round_half_away
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

HOURLY_LIMIT = 24
DAILY_LIMIT = 7

SUNRISE_HOUR = 6
SUNSET_HOUR = 18

# Daily fields the API series does not provide.
DAILY_PRESSURE_HPA = 1013
DAILY_HUMIDITY_PCT = 65
DAILY_WIND_SPEED = 10.0
DAILY_WIND_DEG = 180
DAILY_CLOUDS_PCT = 20


def normalize(raw: RawForecastResponse, *, now: datetime | None = None) -> NormalizedForecast:
    """Normalize ``raw`` into current, hourly (<= 24) and daily (<= 7) records.

    Args:
        raw: Decoded forecast response.
        now: Acquisition time. Defaults to the host clock in the local zone;
            naive values are taken as local time.
    """
    now = _aware(now or datetime.now())
    api_tz = _response_timezone(raw, fallback=now.tzinfo)
    return NormalizedForecast(
        current=_current(raw, now, api_tz),
        hourly=tuple(_hourly(raw, now)),
        daily=tuple(_daily(raw, now, _calendar_zone(now, api_tz))),
    )


def parse_api_timestamp(value: Any, tz: tzinfo | None) -> datetime | None:
    """Parse an API ISO-8601 string; naive values are placed in ``tz``.

    Returns ``None`` when the value is missing or not parseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None and tz is not None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.astimezone()


def _response_timezone(raw: RawForecastResponse, fallback: tzinfo | None) -> tzinfo | None:
    try:
        return ZoneInfo(raw.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        if raw.utc_offset_seconds is not None:
            return timezone(timedelta(seconds=raw.utc_offset_seconds))
        return fallback


def _calendar_zone(now: datetime, api_tz: tzinfo | None) -> tzinfo | None:
    """Pick the zone whose DST rules place later calendar days.

    ``None`` means the host's local rules. A clock that only carries a fixed
    offset is matched to the response zone, then to the host zone; failing
    both, its fixed offset is used as is.
    """
    if isinstance(now.tzinfo, ZoneInfo):
        return now.tzinfo
    if isinstance(api_tz, ZoneInfo) and now.astimezone(api_tz).utcoffset() == now.utcoffset():
        return api_tz
    if now.astimezone().utcoffset() == now.utcoffset():
        return None
    return now.tzinfo


def _wall_clock(naive: datetime, zone: tzinfo | None) -> datetime:
    if zone is None:
        return naive.astimezone()
    return naive.replace(tzinfo=zone)


def _at_hour(value: datetime, hour: int) -> datetime:
    return value.replace(hour=hour, minute=0, second=0, microsecond=0)


def _present(index: int, *arrays: Sequence[Any]) -> bool:
    return all(index < len(array) and array[index] is not None for array in arrays)


def _descriptor(code: int) -> WeatherDescription:
    entry = describe(code)
    return WeatherDescription(
        code=code,
        main=entry.description,
        description=entry.description,
        icon_key=entry.icon_key,
    )


def _current(raw: RawForecastResponse, now: datetime, api_tz: tzinfo | None) -> CurrentConditions:
    current = raw.current
    daily = raw.daily
    dt = parse_api_timestamp(current.time, api_tz) or now

    sunrise = sunset = dt
    if daily.sunrise:
        sunrise = parse_api_timestamp(daily.sunrise[0], api_tz) or dt
    if daily.sunset:
        sunset = parse_api_timestamp(daily.sunset[0], api_tz) or dt

    return CurrentConditions(
        dt=dt,
        temp=current.temperature_2m,
        feels_like=current.apparent_temperature,
        pressure=round_half_away(current.pressure_msl),
        humidity=current.relative_humidity_2m,
        uvi=0.0,
        clouds=0,
        visibility=round_half_away(current.visibility),
        wind_speed=current.wind_speed_10m,
        wind_deg=current.wind_direction_10m,
        weather=(_descriptor(current.weather_code),),
        sunrise=sunrise,
        sunset=sunset,
    )


def _hourly(raw: RawForecastResponse, now: datetime) -> list[HourlyForecast]:
    hourly = raw.hourly
    required = (
        hourly.temperature_2m,
        hourly.apparent_temperature,
        hourly.pressure_msl,
        hourly.relative_humidity_2m,
        hourly.visibility,
        hourly.wind_speed_10m,
        hourly.wind_direction_10m,
        hourly.weather_code,
        hourly.precipitation_probability,
    )
    # Step in UTC so each entry is exactly one hour after the previous one.
    start = now.replace(minute=0, second=0, microsecond=0).astimezone(UTC)

    records: list[HourlyForecast] = []
    for i in range(min(len(hourly.time), HOURLY_LIMIT)):
        if not _present(i, *required):
            continue
        records.append(
            HourlyForecast(
                dt=(start + timedelta(hours=i)).astimezone(now.tzinfo),
                temp=hourly.temperature_2m[i],
                feels_like=hourly.apparent_temperature[i],
                pressure=round_half_away(hourly.pressure_msl[i]),
                humidity=hourly.relative_humidity_2m[i],
                uvi=0.0,
                clouds=0,
                visibility=round_half_away(hourly.visibility[i]),
                wind_speed=hourly.wind_speed_10m[i],
                wind_deg=hourly.wind_direction_10m[i],
                weather=(_descriptor(hourly.weather_code[i]),),
                pop=hourly.precipitation_probability[i] / 100.0,
            )
        )
    return records


def _daily(
    raw: RawForecastResponse, now: datetime, zone: tzinfo | None
) -> list[DailyForecast]:
    daily = raw.daily
    required = (
        daily.weather_code,
        daily.temperature_2m_max,
        daily.temperature_2m_min,
        daily.apparent_temperature_max,
        daily.apparent_temperature_min,
        daily.precipitation_probability_max,
        daily.sunrise,
        daily.sunset,
        daily.uv_index_max,
    )

    local_now = now if zone is None else now.astimezone(zone)
    today = local_now.replace(tzinfo=None)

    records: list[DailyForecast] = []
    for i in range(min(len(daily.time), DAILY_LIMIT)):
        if not _present(i, *required):
            continue
        day = today + timedelta(days=i)
        t_max = daily.temperature_2m_max[i]
        t_min = daily.temperature_2m_min[i]
        a_max = daily.apparent_temperature_max[i]
        a_min = daily.apparent_temperature_min[i]
        records.append(
            DailyForecast(
                dt=_wall_clock(day, zone),
                sunrise=_wall_clock(_at_hour(day, SUNRISE_HOUR), zone),
                sunset=_wall_clock(_at_hour(day, SUNSET_HOUR), zone),
                temp=Temperature(
                    day=t_max, min=t_min, max=t_max, night=t_min, eve=t_max, morn=t_min
                ),
                feels_like=FeelsLike(day=a_max, night=a_min, eve=a_max, morn=a_min),
                pressure=DAILY_PRESSURE_HPA,
                humidity=DAILY_HUMIDITY_PCT,
                wind_speed=DAILY_WIND_SPEED,
                wind_deg=DAILY_WIND_DEG,
                weather=(_descriptor(daily.weather_code[i]),),
                clouds=DAILY_CLOUDS_PCT,
                pop=daily.precipitation_probability_max[i] / 100.0,
                uvi=daily.uv_index_max[i],
            )
        )
    return records
