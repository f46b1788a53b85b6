"""Location acquisition and reverse geocoding."""

from .base import LocationPlatform, PermissionStatus, Placemark
from .configured import ConfiguredLocationPlatform
from .resolver import LocationResolver

__all__ = [
    "ConfiguredLocationPlatform",
    "LocationPlatform",
    "LocationResolver",
    "PermissionStatus",
    "Placemark",
]
