from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import day_bounds, now_local
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def create_shift(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        station_id: str,
        shift_name: str,
        shift_start: datetime,
        shift_end: datetime,
        user_ids: Iterable[int] = (),
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can create shifts")

        station_id = require_non_empty(station_id, "station_id")
        shift_name = require_non_empty(shift_name, "shift_name")
        if shift_start >= shift_end:
            raise ValidationError("Shift start must be before shift end")

        shift_id = self._shifts.create(
            station_id=station_id,
            shift_name=shift_name,
            shift_start=shift_start,
            shift_end=shift_end,
            created_by=int(admin_user_id),
        )
        user_ids = [int(u) for u in user_ids]
        if user_ids:
            self._shifts.assign_users(shift_id=shift_id, user_ids=user_ids)

        logger.info("shift %s created (%s -> %s, %d officers)", shift_id, shift_start, shift_end, len(user_ids))
        return shift_id

    def assign_users(self, *, current_role: Role, shift_id: int, user_ids: Iterable[int]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can assign shifts")
        if not self._shifts.get_by_id(int(shift_id)):
            raise ValidationError("Shift not found")
        self._shifts.assign_users(shift_id=int(shift_id), user_ids=user_ids)

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._shifts.get_by_id(int(shift_id))

    def get_current_shift(self, user_id: int, at: Optional[datetime] = None) -> Optional[Shift]:
        return self._shifts.get_current_for_user(user_id, at or now_local())

    def get_upcoming_shift(self, user_id: int, now: Optional[datetime] = None) -> Optional[Shift]:
        return self._shifts.get_upcoming_for_user(user_id, now or now_local())

    def shift_for_punch_in(self, user_id: int, at: datetime) -> Optional[Shift]:
        """Current shift, else the latest one that started today and already ended.

        The fallback lets a punch-in after the window closes be classified as
        absent instead of looking like an unassigned officer.
        """
        current = self._shifts.get_current_for_user(user_id, at)
        if current:
            return current

        day_start, _ = day_bounds(at.date())
        ended_today = self._shifts.list_for_user(user_id, start=day_start, end=at)
        return ended_today[-1] if ended_today else None

    def work_day_bounds(self, user_id: int, at: datetime) -> tuple[datetime, datetime]:
        """Calendar day of ``at``, pulled back to the start of a shift running over midnight.

        An officer on a 22:00 to 06:00 shift punches in on one calendar day and
        out on the next; both punches must fall into the same window.
        """
        day_start, day_end = day_bounds(at.date())
        overnight = self._shifts.get_current_for_user(user_id, day_start)
        if overnight and overnight.shift_start < day_start:
            return overnight.shift_start, day_end
        return day_start, day_end
