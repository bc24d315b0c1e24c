from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_current_for_user(self, user_id: int, at: datetime) -> Optional[Shift]:
        """Assigned shift whose window contains ``at``.

        Overlapping windows resolve to the earliest start, then the lowest id.
        """

        raise NotImplementedError

    def get_upcoming_for_user(self, user_id: int, now: datetime) -> Optional[Shift]:
        """Earliest assigned shift starting strictly after ``now``."""

        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[Shift]:
        """Assigned shifts with ``shift_start >= start`` and ``shift_end <= end``, ordered by start."""

        raise NotImplementedError

    def create(
        self,
        *,
        station_id: str,
        shift_name: str,
        shift_start: datetime,
        shift_end: datetime,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def assign_users(self, *, shift_id: int, user_ids: Iterable[int]) -> None:
        """Replace the assignment set of a shift."""

        raise NotImplementedError
