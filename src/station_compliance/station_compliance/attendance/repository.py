from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind
from .model import PunchEvent


class AttendanceRepository(Protocol):
    def insert(self, event: PunchEvent) -> PunchEvent:
        """Append a punch; returns it with ``punch_id`` set once the write is durable."""

        raise NotImplementedError

    def query(self, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches in ``[start, end)``, oldest first."""

        raise NotImplementedError

    def latest_for_user(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[PunchKind] = None,
    ) -> Optional[PunchEvent]:
        """Most recent punch in ``[start, end)``; ties on timestamp go to the higher id."""

        raise NotImplementedError
