"""Shared typed models for locations and published client state."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .forecast.models import CurrentConditions, DailyForecast, HourlyForecast

Phase = Literal["idle", "loading", "ready", "failed"]


class Coordinate(BaseModel):
    """Geographic position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)


class ResolvedLocation(BaseModel):
    """Reverse-geocoded place for a coordinate. Replaced wholesale, never patched."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Locality or 'Unknown'")
    country: str = Field(default="", description="Country name, empty when unknown")
    region: str | None = Field(default=None, description="Administrative area if present")
    coordinate: Coordinate


class OrchestratorState(BaseModel):
    """Snapshot of everything the presentation layer reads."""

    model_config = ConfigDict(frozen=True)

    phase: Phase = "idle"
    is_loading: bool = False
    error_message: str | None = None
    location: ResolvedLocation | None = None
    current: CurrentConditions | None = None
    hourly: tuple[HourlyForecast, ...] = ()
    daily: tuple[DailyForecast, ...] = ()
