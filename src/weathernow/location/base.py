"""Platform location capability consumed by the resolver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel

from ..models import Coordinate


class PermissionStatus(StrEnum):
    UNDETERMINED = "undetermined"
    GRANTED_FOREGROUND = "granted_foreground"
    GRANTED_ALWAYS = "granted_always"
    DENIED = "denied"
    RESTRICTED = "restricted"

    @property
    def is_granted(self) -> bool:
        return self in {PermissionStatus.GRANTED_FOREGROUND, PermissionStatus.GRANTED_ALWAYS}


class Placemark(BaseModel):
    """One reverse-geocoding result."""

    locality: str | None = None
    country: str | None = None
    administrative_area: str | None = None


class LocationPlatform(ABC):
    """Base contract for platform location and geocoding services."""

    @property
    @abstractmethod
    def authorization_status(self) -> PermissionStatus:
        """Current permission state."""

    @abstractmethod
    async def request_authorization(self) -> PermissionStatus:
        """Prompt for permission and return the user's decision."""

    @abstractmethod
    async def request_fix(self) -> Coordinate:
        """Return one fresh position fix."""

    @abstractmethod
    async def reverse_geocode(self, coordinate: Coordinate) -> list[Placemark]:
        """Return placemarks for ``coordinate``, best match first."""
