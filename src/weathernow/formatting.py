"""Display formatting for temperatures, timestamps and wind directions."""

from __future__ import annotations

import math
from datetime import datetime, tzinfo

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

Timestamp = datetime | float


def round_half_away(value: float) -> int:
    """Round to the nearest int, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _to_datetime(ts: Timestamp, tz: tzinfo | None) -> datetime:
    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            ts = ts.astimezone()
        return ts.astimezone(tz)
    return datetime.fromtimestamp(ts, tz=tz).astimezone(tz)


def format_temperature(value: float) -> str:
    return f"{round_half_away(value)}°C"


def format_date(ts: Timestamp, tz: tzinfo | None = None) -> str:
    """Format as ``Sat, Aug 16`` in ``tz`` (host zone when omitted)."""
    dt = _to_datetime(ts, tz)
    return f"{dt:%a, %b} {dt.day}"


def format_time(ts: Timestamp, tz: tzinfo | None = None) -> str:
    """Format as a 12-hour clock time, e.g. ``6:05 AM``."""
    dt = _to_datetime(ts, tz)
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt:%M} {'AM' if dt.hour < 12 else 'PM'}"


def format_hourly_time(ts: Timestamp, tz: tzinfo | None = None) -> str:
    """Format as a 24-hour clock time, e.g. ``14:00``."""
    return f"{_to_datetime(ts, tz):%H:%M}"


def wind_direction(degrees: float) -> str:
    """Return the 16-point compass label for a wind direction in degrees."""
    return COMPASS_POINTS[round_half_away(degrees / 22.5) % 16]
