from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import day_bounds, now_local
from ..core.enums import PunchKind
from ..shifts.service import ShiftService
from .model import PunchState
from .repository import AttendanceRepository


class PunchStateTracker:
    """Derive the punched-in toggle from the append-only punch log.

    The window is the server-local calendar day, extended back to the start
    of an assigned shift that runs over midnight when ``shifts`` is given.
    Nothing is cached: every call re-reads the store, so a committed punch is
    visible at once.
    """

    def __init__(self, attendance: AttendanceRepository, shifts: Optional[ShiftService] = None):
        self._attendance = attendance
        self._shifts = shifts

    def current_state(self, user_id: int, *, now: Optional[datetime] = None) -> PunchState:
        now = now or now_local()
        if self._shifts is not None:
            start, end = self._shifts.work_day_bounds(user_id, now)
        else:
            start, end = day_bounds(now.date())

        latest = self._attendance.latest_for_user(user_id, start, end)
        if latest is None:
            return PunchState(is_punched_in=False)

        return PunchState(
            is_punched_in=latest.kind == PunchKind.IN,
            last_punch_time=latest.punched_at,
            last_punch_kind=latest.kind,
        )

    def next_kind(self, user_id: int, *, now: Optional[datetime] = None) -> PunchKind:
        return self.current_state(user_id, now=now).next_kind
