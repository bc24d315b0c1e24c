from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from . import geometry
from .model import GeoPoint, Geofence


@dataclass(frozen=True)
class GeofenceValidation:
    """Outcome of checking one point against the active zones.

    ``nearest_zone`` / ``distance_to_nearest_m`` are only meaningful when the
    point is outside every zone; inside, the distance is 0.0.
    """

    is_inside: bool
    matched_zone: Optional[Geofence]
    distance_to_nearest_m: Optional[float]
    nearest_zone: Optional[Geofence] = None

    @property
    def matched_geofence_id(self) -> Optional[int]:
        return self.matched_zone.geofence_id if self.matched_zone else None


def nearest_of(zones: Sequence[Geofence], point: GeoPoint) -> tuple[Optional[Geofence], Optional[float]]:
    """Zone whose center is closest to ``point``; ties keep definition order."""
    best: Optional[Geofence] = None
    best_distance: Optional[float] = None
    for zone in zones:
        distance = geometry.haversine_m(point, zone.center)
        if best_distance is None or distance < best_distance:
            best, best_distance = zone, distance
    return best, best_distance


class GeofenceValidator:
    """Pure containment check: first zone (in the given order) that contains the point wins."""

    def validate(self, point: GeoPoint, zones: Sequence[Geofence]) -> GeofenceValidation:
        if not zones:
            return GeofenceValidation(is_inside=False, matched_zone=None, distance_to_nearest_m=None)

        for zone in zones:
            if zone.contains(point):
                return GeofenceValidation(
                    is_inside=True,
                    matched_zone=zone,
                    distance_to_nearest_m=0.0,
                    nearest_zone=zone,
                )

        nearest, distance = nearest_of(zones, point)
        return GeofenceValidation(
            is_inside=False,
            matched_zone=None,
            distance_to_nearest_m=distance,
            nearest_zone=nearest,
        )
