from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..common.datetime_utils import whole_minutes


@dataclass(frozen=True)
class Shift:
    """Scheduled work window for a group of officers at one station.

    Immutable once punches reference it; ``shift_start < shift_end``.
    """

    shift_id: int
    station_id: str
    shift_name: str
    shift_start: datetime
    shift_end: datetime
    assigned_user_ids: frozenset[int] = field(default_factory=frozenset)

    def contains(self, at: datetime) -> bool:
        return self.shift_start <= at <= self.shift_end

    def is_assigned(self, user_id: int) -> bool:
        return int(user_id) in self.assigned_user_ids

    @property
    def duration_hours(self) -> int:
        return int((self.shift_end - self.shift_start).total_seconds() // 3600)

    def minutes_until_start(self, now: datetime) -> int:
        return max(0, whole_minutes(now, self.shift_start))
