from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from ..common.validators import require_float, require_in_range, require_positive
from ..core.constants import BOUNDARY_TOLERANCE_M
from ..core.exceptions import ValidationError
from . import geometry


@dataclass(frozen=True)
class GeoPoint:
    """WGS-84 coordinate pair."""

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude: Any, longitude: Any) -> "GeoPoint":
        """Build a point from untrusted input (request bodies, JSON columns)."""
        lat = require_in_range(require_float(latitude, "latitude"), "latitude", -90.0, 90.0)
        lon = require_in_range(require_float(longitude, "longitude"), "longitude", -180.0, 180.0)
        return cls(latitude=lat, longitude=lon)


@dataclass(frozen=True)
class Circle:
    center: GeoPoint
    radius_m: float

    def __post_init__(self) -> None:
        require_positive(float(self.radius_m), "radius_m")

    def distance_from_center(self, point: GeoPoint) -> float:
        return geometry.haversine_m(point, self.center)

    def contains(self, point: GeoPoint) -> bool:
        # Boundary inclusive.
        return self.distance_from_center(point) <= self.radius_m + BOUNDARY_TOLERANCE_M


@dataclass(frozen=True)
class Polygon:
    """Vertex ring; the closing vertex may be repeated or left implicit."""

    vertices: tuple[GeoPoint, ...]

    def __post_init__(self) -> None:
        if len(set(self.vertices)) < 3:
            raise ValidationError("polygon needs at least 3 distinct vertices")

    @property
    def ring(self) -> tuple[GeoPoint, ...]:
        if len(self.vertices) > 3 and self.vertices[0] == self.vertices[-1]:
            return self.vertices[:-1]
        return self.vertices

    @property
    def centroid(self) -> GeoPoint:
        ring = self.ring
        return GeoPoint(
            latitude=sum(v.latitude for v in ring) / len(ring),
            longitude=sum(v.longitude for v in ring) / len(ring),
        )

    def contains(self, point: GeoPoint) -> bool:
        return geometry.point_in_ring(point, self.ring)


@dataclass(frozen=True)
class CircleAndPolygon:
    """Both shapes defined; either one containing the point is enough."""

    circle: Circle
    polygon: Polygon

    def contains(self, point: GeoPoint) -> bool:
        return self.circle.contains(point) or self.polygon.contains(point)


Boundary = Union[Circle, Polygon, CircleAndPolygon]


def boundary_center(boundary: Boundary) -> GeoPoint:
    """Reference point used for "distance to zone" reporting."""
    if isinstance(boundary, Circle):
        return boundary.center
    if isinstance(boundary, CircleAndPolygon):
        return boundary.circle.center
    return boundary.centroid


@dataclass(frozen=True)
class Geofence:
    """Authorized station boundary. Deactivated rather than deleted."""

    geofence_id: int
    station_id: str
    station_name: str
    boundary: Boundary
    is_active: bool = True
    created_by: Optional[int] = None

    @property
    def center(self) -> GeoPoint:
        return boundary_center(self.boundary)

    def contains(self, point: GeoPoint) -> bool:
        return self.boundary.contains(point)


def boundary_to_dict(boundary: Boundary) -> dict:
    """JSON shape: ``{"circle": {"center": [lat, lon], "radius_m": r}, "polygon": [[lat, lon], ...]}``."""
    circle: Optional[Circle] = None
    polygon: Optional[Polygon] = None
    if isinstance(boundary, Circle):
        circle = boundary
    elif isinstance(boundary, Polygon):
        polygon = boundary
    else:
        circle, polygon = boundary.circle, boundary.polygon

    data: dict = {}
    if circle is not None:
        data["circle"] = {
            "center": [circle.center.latitude, circle.center.longitude],
            "radius_m": circle.radius_m,
        }
    if polygon is not None:
        data["polygon"] = [[v.latitude, v.longitude] for v in polygon.vertices]
    return data


def _parse_pair(value: Any, field_name: str) -> GeoPoint:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValidationError(f"{field_name} must be a [latitude, longitude] pair")
    return GeoPoint.parse(value[0], value[1])


def boundary_from_dict(data: Any) -> Boundary:
    if not isinstance(data, dict):
        raise ValidationError("boundary must be an object")

    circle: Optional[Circle] = None
    polygon: Optional[Polygon] = None

    raw_circle = data.get("circle")
    if raw_circle is not None:
        if not isinstance(raw_circle, dict):
            raise ValidationError("circle must be an object")
        circle = Circle(
            center=_parse_pair(raw_circle.get("center"), "circle.center"),
            radius_m=require_float(raw_circle.get("radius_m"), "circle.radius_m"),
        )

    raw_polygon: Optional[Sequence[Any]] = data.get("polygon")
    if raw_polygon is not None:
        if not isinstance(raw_polygon, (list, tuple)):
            raise ValidationError("polygon must be a list of [latitude, longitude] pairs")
        polygon = Polygon(vertices=tuple(_parse_pair(v, "polygon vertex") for v in raw_polygon))

    if circle and polygon:
        return CircleAndPolygon(circle=circle, polygon=polygon)
    if circle:
        return circle
    if polygon:
        return polygon
    raise ValidationError("boundary needs a circle, a polygon or both")
