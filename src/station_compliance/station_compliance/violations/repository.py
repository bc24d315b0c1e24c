from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..geofences.model import GeoPoint
from .model import BoundaryViolation


class ViolationRepository(Protocol):
    def insert(
        self,
        *,
        user_id: int,
        geofence_id: Optional[int],
        violation_time: datetime,
        location: GeoPoint,
        distance_from_boundary_m: Optional[float],
        shift_id: Optional[int],
    ) -> BoundaryViolation:
        raise NotImplementedError

    def get_by_id(self, violation_id: int) -> Optional[BoundaryViolation]:
        raise NotImplementedError

    def acknowledge(self, *, violation_id: int, admin_id: int, acknowledged_at: datetime) -> bool:
        """Set the acknowledgement once; False when unknown or already acknowledged."""

        raise NotImplementedError

    def list_for_user(self, user_id: int, limit: int) -> Sequence[BoundaryViolation]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[BoundaryViolation]:
        raise NotImplementedError
