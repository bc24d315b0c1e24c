"""Spherical distance and planar containment helpers.

Kept free of model imports so shapes can delegate here without a cycle;
points only need ``latitude`` / ``longitude`` attributes.
"""

from __future__ import annotations

import math
from typing import Sequence

from ..core.constants import EARTH_RADIUS_M


def haversine_m(a, b) -> float:
    """Great-circle distance in meters between two points."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1) * math.cos(lat2) *
         math.sin(delta_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c


def point_in_ring(point, ring: Sequence) -> bool:
    """Even-odd ray casting with x = longitude, y = latitude.

    Points lying exactly on an edge are not guaranteed to count as inside.
    """
    x = point.longitude
    y = point.latitude
    inside = False

    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].longitude, ring[i].latitude
        xj, yj = ring[j].longitude, ring[j].latitude
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i

    return inside
