"""Headless location platform backed by configured settings."""

from __future__ import annotations

from ..config import Settings
from ..exceptions import LocationError
from ..models import Coordinate
from .base import LocationPlatform, PermissionStatus, Placemark


class ConfiguredLocationPlatform(LocationPlatform):
    """Serves the ``LOCATION_*`` settings as the device position.

    Permission counts as granted when a coordinate is configured and denied
    otherwise; there is no prompt to show.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def authorization_status(self) -> PermissionStatus:
        if self.settings.has_configured_location:
            return PermissionStatus.GRANTED_FOREGROUND
        return PermissionStatus.DENIED

    async def request_authorization(self) -> PermissionStatus:
        return self.authorization_status

    async def request_fix(self) -> Coordinate:
        lat = self.settings.location_latitude
        lon = self.settings.location_longitude
        if lat is None or lon is None:
            raise LocationError("No location configured")
        return Coordinate(latitude=lat, longitude=lon)

    async def reverse_geocode(self, coordinate: Coordinate) -> list[Placemark]:
        if not self.settings.location_name:
            return []
        return [
            Placemark(
                locality=self.settings.location_name,
                country=self.settings.location_country,
                administrative_area=self.settings.location_region,
            )
        ]
