"""Static catalog of Open-Meteo weather codes.

Each code maps to an icon key, a color key and a human description. The
table is built once at import and exposed read-only. Codes that are not in
the table resolve to the clear-sky entry, so lookups never fail.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class WeatherCondition:
    """One catalog entry."""

    code: int
    icon_key: str
    color_key: str
    description: str


CLEAR_SKY_CODE = 0

_ENTRIES: tuple[tuple[int, str, str, str], ...] = (
    (0, "clear", "yellow", "Clear sky"),
    (1, "clear", "yellow", "Mainly clear"),
    (2, "partly-cloudy", "orange", "Partly cloudy"),
    (3, "cloudy", "gray", "Overcast"),
    (45, "fog", "gray", "Fog"),
    (48, "fog", "gray", "Rime fog"),
    (51, "rain", "blue", "Light drizzle"),
    (53, "rain", "blue", "Moderate drizzle"),
    (55, "rain", "blue", "Dense drizzle"),
    (61, "rain", "blue", "Slight rain"),
    (63, "rain", "blue", "Moderate rain"),
    (65, "rain", "blue", "Heavy rain"),
    (71, "snow", "cyan", "Slight freezing rain"),
    (75, "snow", "cyan", "Heavy freezing rain"),
    (73, "snow", "cyan", "Slight snow"),
    (76, "snow", "cyan", "Moderate snow"),
    (77, "snow", "cyan", "Heavy snow"),
    (78, "snow", "cyan", "Snow grains"),
    (80, "rain", "blue", "Slight rain showers"),
    (81, "rain", "blue", "Moderate rain showers"),
    (82, "rain", "blue", "Violent rain showers"),
    (85, "snow", "cyan", "Slight snow showers"),
    (86, "snow", "cyan", "Heavy snow showers"),
    (95, "thunderstorm", "purple", "Slight thunderstorm"),
    (96, "thunderstorm", "purple", "Moderate thunderstorm"),
    (99, "thunderstorm", "purple", "Heavy thunderstorm"),
)

WEATHER_CODES: MappingProxyType[int, WeatherCondition] = MappingProxyType(
    {code: WeatherCondition(code, icon, color, text) for code, icon, color, text in _ENTRIES}
)


def describe(code: int) -> WeatherCondition:
    """Return the catalog entry for ``code``, or clear sky when unknown."""
    return WEATHER_CODES.get(code, WEATHER_CODES[CLEAR_SKY_CODE])

