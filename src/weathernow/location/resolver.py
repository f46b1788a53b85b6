"""Coordinate acquisition and reverse geocoding on top of a platform capability."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..exceptions import LocationError
from ..models import Coordinate, ResolvedLocation
from .base import LocationPlatform, PermissionStatus

T = TypeVar("T")


class LocationResolver:
    """Wraps a :class:`LocationPlatform` into two awaitable lookups.

    Only one coordinate request may be outstanding at a time; a second call
    made while the first is still waiting fails instead of queueing.
    """

    def __init__(self, platform: LocationPlatform, logger: logging.Logger) -> None:
        self.platform = platform
        self.logger = logger
        self._pending = False

    @property
    def is_pending(self) -> bool:
        return self._pending

    async def current_coordinate(self) -> Coordinate:
        """Resolve the device position, prompting for permission if needed."""
        if self._pending:
            raise LocationError("Location request already in progress")

        self._pending = True
        try:
            status = self.platform.authorization_status
            if status is PermissionStatus.UNDETERMINED:
                self.logger.info("Location permission undetermined; prompting")
                status = await self._call(self.platform.request_authorization)
            if not status.is_granted:
                # UNDETERMINED after a prompt means the prompt was dismissed.
                raise LocationError("Location access denied")
            coordinate = await self._call(self.platform.request_fix)
        finally:
            self._pending = False

        self.logger.debug("Location fix acquired")
        return coordinate

    async def reverse_geocode(self, coordinate: Coordinate) -> ResolvedLocation:
        """Resolve the first placemark for ``coordinate``."""
        try:
            placemarks = await self.platform.reverse_geocode(coordinate)
        except LocationError:
            raise
        except Exception as exc:
            raise LocationError(f"Failed to reverse geocode: {exc}") from exc

        if not placemarks:
            raise LocationError("No location found")

        placemark = placemarks[0]
        return ResolvedLocation(
            name=placemark.locality or "Unknown",
            country=placemark.country or "",
            region=placemark.administrative_area,
            coordinate=coordinate,
        )

    @staticmethod
    async def _call(operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        except LocationError:
            raise
        except Exception as exc:
            raise LocationError(str(exc) or type(exc).__name__) from exc
