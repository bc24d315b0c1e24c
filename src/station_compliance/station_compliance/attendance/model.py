from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ComplianceStatus, PunchKind
from ..geofences.model import GeoPoint


@dataclass(frozen=True)
class PunchEvent:
    """Append-only punch fact with its derived geofence and compliance fields.

    ``punch_id`` is None until the store assigns one.
    """

    punch_id: Optional[int]
    user_id: int
    kind: PunchKind
    punched_at: datetime
    location: Optional[GeoPoint] = None
    is_within_geofence: bool = False
    geofence_id: Optional[int] = None
    distance_to_nearest_m: Optional[float] = None
    shift_id: Optional[int] = None
    compliance_status: Optional[ComplianceStatus] = None
    minutes_late: int = 0
    minutes_early: int = 0
    overtime_minutes: int = 0
    grace_period_used: bool = False
    note: Optional[str] = None


@dataclass(frozen=True)
class PunchState:
    """Toggle state derived from the latest same-day punch."""

    is_punched_in: bool
    last_punch_time: Optional[datetime] = None
    last_punch_kind: Optional[PunchKind] = None

    @property
    def next_kind(self) -> PunchKind:
        return PunchKind.OUT if self.is_punched_in else PunchKind.IN
