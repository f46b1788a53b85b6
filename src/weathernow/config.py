"""Typed settings loader for the WeatherNow client."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")

    forecast_api_base_url: AnyUrl = Field(
        default=AnyUrl("https://api.open-meteo.com/v1"),
        alias="FORECAST_API_BASE_URL",
    )
    forecast_timeout_seconds: float = Field(default=30.0, alias="FORECAST_TIMEOUT_SECONDS")
    forecast_user_agent: str = Field(
        default="weathernow/0.1 (+https://open-meteo.com/)",
        alias="FORECAST_USER_AGENT",
    )

    default_latitude: float = Field(default=37.7749, alias="DEFAULT_LATITUDE")
    default_longitude: float = Field(default=-122.4194, alias="DEFAULT_LONGITUDE")

    location_latitude: float | None = Field(default=None, alias="LOCATION_LATITUDE")
    location_longitude: float | None = Field(default=None, alias="LOCATION_LONGITUDE")
    location_name: str | None = Field(default=None, alias="LOCATION_NAME")
    location_country: str | None = Field(default=None, alias="LOCATION_COUNTRY")
    location_region: str | None = Field(default=None, alias="LOCATION_REGION")

    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")
    hourly_max_print: int = Field(default=12, alias="HOURLY_MAX_PRINT")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    @field_validator(
        "location_latitude",
        "location_longitude",
        "location_name",
        "location_country",
        "location_region",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset optional location fields."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_ranges(self) -> Settings:
        """Validate numeric bounds and paired location fields."""
        if self.forecast_timeout_seconds <= 0:
            raise ValueError("FORECAST_TIMEOUT_SECONDS must be > 0.")
        if not self.forecast_user_agent.strip():
            raise ValueError("FORECAST_USER_AGENT must not be empty.")
        if self.hourly_max_print <= 0:
            raise ValueError("HOURLY_MAX_PRINT must be > 0.")

        _check_coordinate("DEFAULT_LATITUDE", self.default_latitude, 90)
        _check_coordinate("DEFAULT_LONGITUDE", self.default_longitude, 180)

        has_lat = self.location_latitude is not None
        has_lon = self.location_longitude is not None
        if has_lat != has_lon:
            raise ValueError("LOCATION_LATITUDE and LOCATION_LONGITUDE must be set together.")
        if self.location_latitude is not None:
            _check_coordinate("LOCATION_LATITUDE", self.location_latitude, 90)
        if self.location_longitude is not None:
            _check_coordinate("LOCATION_LONGITUDE", self.location_longitude, 180)
        return self

    @property
    def has_configured_location(self) -> bool:
        return self.location_latitude is not None and self.location_longitude is not None

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no precise location)."""
        return {
            "app_env": self.app_env,
            "forecast_api_base_url": str(self.forecast_api_base_url),
            "forecast_timeout_seconds": self.forecast_timeout_seconds,
            "default_location": [self.default_latitude, self.default_longitude],
            "configured_location": self.has_configured_location,
            "hourly_max_print": self.hourly_max_print,
        }


def _check_coordinate(name: str, value: float, bound: float) -> None:
    if not math.isfinite(value) or not (-bound <= value <= bound):
        raise ValueError(f"{name} must be between {-bound} and {bound}.")


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    settings.journal_dir.mkdir(parents=True, exist_ok=True)
    return settings
