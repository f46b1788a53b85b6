"""Fetch-cycle state machine and published client state."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from .exceptions import WeatherError
from .forecast.models import RawForecastResponse
from .forecast.normalizer import normalize
from .location.resolver import LocationResolver
from .models import Coordinate, OrchestratorState

StateListener = Callable[[OrchestratorState], None]

DEFAULT_COORDINATE = Coordinate(latitude=37.7749, longitude=-122.4194)


class ForecastSource(Protocol):
    async def fetch_forecast(self, latitude: float, longitude: float) -> RawForecastResponse: ...


class WeatherOrchestrator:
    """Sequences location lookup, forecast fetch and normalization.

    The orchestrator is the only writer of :class:`OrchestratorState`. Every
    change replaces the state with a new snapshot and notifies listeners in
    subscription order. Failures set ``error_message`` and leave previously
    published forecast data in place. Errors outside the :class:`WeatherError`
    family are logged with their traceback and published the same way.

    Commands issued while a cycle is already running are rejected: they log a
    warning, leave state untouched and return ``False``.
    """

    def __init__(
        self,
        resolver: LocationResolver,
        client: ForecastSource,
        *,
        logger: logging.Logger,
        default_coordinate: Coordinate = DEFAULT_COORDINATE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.resolver = resolver
        self.client = client
        self.logger = logger
        self.default_coordinate = default_coordinate
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._state = OrchestratorState()
        self._listeners: list[StateListener] = []
        self._in_flight = False

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def request_location(self) -> bool:
        """Run a fetch cycle for the device's current location."""
        if not self._claim("request_location"):
            return False
        try:
            self._begin()
            try:
                coordinate = await self.resolver.current_coordinate()
                location = await self.resolver.reverse_geocode(coordinate)
            except WeatherError as exc:
                self._fail(exc)
                return True
            except Exception as exc:
                self._fail_unexpected(exc)
                return True
            await self._fetch_and_publish(coordinate)
            # Published after the forecast request for this coordinate has run.
            self._update(location=location)
        finally:
            self._in_flight = False
        return True

    async def load_with_default_location(self) -> bool:
        """Run a fetch cycle for the fixed fallback coordinate."""
        if not self._claim("load_with_default_location"):
            return False
        try:
            await self._fetch_and_publish(self.default_coordinate)
        finally:
            self._in_flight = False
        return True

    def _claim(self, command: str) -> bool:
        if self._in_flight:
            self.logger.warning("Ignoring %s: a fetch cycle is already in flight", command)
            return False
        self._in_flight = True
        return True

    async def _fetch_and_publish(self, coordinate: Coordinate) -> None:
        self._begin()
        self.logger.info(
            "Fetching forecast for (%.4f, %.4f)", coordinate.latitude, coordinate.longitude
        )
        try:
            raw = await self.client.fetch_forecast(coordinate.latitude, coordinate.longitude)
            forecast = normalize(raw, now=self._clock())
        except WeatherError as exc:
            self._fail(exc)
            return
        except Exception as exc:
            self._fail_unexpected(exc)
            return

        self._update(
            phase="ready",
            is_loading=False,
            current=forecast.current,
            hourly=forecast.hourly,
            daily=forecast.daily,
        )
        self.logger.info(
            "Forecast published: hourly=%d daily=%d", len(forecast.hourly), len(forecast.daily)
        )

    def _begin(self) -> None:
        self._update(phase="loading", is_loading=True, error_message=None)

    def _fail(self, exc: WeatherError) -> None:
        self.logger.error("Fetch cycle failed: %s", exc.display_message)
        self._update(phase="failed", is_loading=False, error_message=exc.display_message)

    def _fail_unexpected(self, exc: Exception) -> None:
        self.logger.exception("Unexpected error in fetch cycle")
        self._fail(WeatherError(str(exc) or type(exc).__name__))

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)
