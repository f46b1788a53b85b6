"""Weather-code catalog tests."""

from __future__ import annotations

import pytest

from weathernow.catalog import WEATHER_CODES, describe


def test_unknown_code_resolves_to_clear_sky() -> None:
    assert describe(9999) == describe(0)
    assert describe(-1).description == "Clear sky"


@pytest.mark.parametrize(
    ("code", "icon_key", "color_key"),
    [
        (0, "clear", "yellow"),
        (1, "clear", "yellow"),
        (2, "partly-cloudy", "orange"),
        (3, "cloudy", "gray"),
        (45, "fog", "gray"),
        (48, "fog", "gray"),
        (51, "rain", "blue"),
        (65, "rain", "blue"),
        (82, "rain", "blue"),
        (71, "snow", "cyan"),
        (75, "snow", "cyan"),
        (77, "snow", "cyan"),
        (86, "snow", "cyan"),
        (95, "thunderstorm", "purple"),
        (99, "thunderstorm", "purple"),
    ],
)
def test_groupings(code: int, icon_key: str, color_key: str) -> None:
    entry = describe(code)
    assert entry.code == code
    assert entry.icon_key == icon_key
    assert entry.color_key == color_key


def test_descriptions() -> None:
    assert describe(48).description == "Rime fog"
    assert describe(71).description == "Slight freezing rain"
    assert describe(96).description == "Moderate thunderstorm"


def test_table_is_read_only() -> None:
    assert len(WEATHER_CODES) == 26
    with pytest.raises(TypeError):
        WEATHER_CODES[100] = WEATHER_CODES[0]  # type: ignore[index]
