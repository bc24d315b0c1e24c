from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..geofences.model import GeoPoint


@dataclass(frozen=True)
class BoundaryViolation:
    """Officer seen outside every active geofence during an open shift.

    Written once; only the acknowledgement fields are ever set afterwards.
    """

    violation_id: int
    user_id: int
    geofence_id: Optional[int]
    violation_time: datetime
    location: GeoPoint
    distance_from_boundary_m: Optional[float]
    shift_id: Optional[int]
    acknowledged: bool = False
    acknowledged_by: Optional[int] = None
    acknowledged_at: Optional[datetime] = None
