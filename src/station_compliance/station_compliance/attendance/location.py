from __future__ import annotations

from typing import Any, Protocol

from ..core.exceptions import LocationUnavailable, ValidationError
from ..geofences.model import GeoPoint


class LocationProvider(Protocol):
    def get_current_position(self) -> GeoPoint:
        """Raise ``LocationUnavailable`` on denial, timeout or bad data; never return a stale fix."""

        raise NotImplementedError


class FixedLocationProvider:
    """Coordinates the device already resolved and sent along with the punch."""

    def __init__(self, latitude: Any, longitude: Any):
        self._latitude = latitude
        self._longitude = longitude

    def get_current_position(self) -> GeoPoint:
        if self._latitude is None or self._longitude is None:
            raise LocationUnavailable("Location not available. Please enable location access and try again.")
        try:
            return GeoPoint.parse(self._latitude, self._longitude)
        except ValidationError as e:
            raise LocationUnavailable(f"Invalid location: {e.message}") from e
