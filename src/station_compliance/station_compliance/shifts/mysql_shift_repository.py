from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Shift
from .repository import ShiftRepository

_SELECT = """
    SELECT s.shift_id, s.station_id, s.shift_name, s.shift_start, s.shift_end,
           GROUP_CONCAT(a.user_id) AS assigned_user_ids
    FROM shifts s
    LEFT JOIN shift_assignments a ON a.shift_id = s.shift_id
"""

_FOR_USER = """
    s.shift_id IN (SELECT shift_id FROM shift_assignments WHERE user_id=%s)
"""


def _row_to_shift(r: Dict[str, Any]) -> Shift:
    raw_ids = r.get("assigned_user_ids")
    if isinstance(raw_ids, (bytes, bytearray)):
        raw_ids = raw_ids.decode("utf-8")
    user_ids = frozenset(int(x) for x in str(raw_ids).split(",") if x) if raw_ids else frozenset()
    return Shift(
        shift_id=int(r["shift_id"]),
        station_id=r["station_id"],
        shift_name=r["shift_name"],
        shift_start=r["shift_start"],
        shift_end=r["shift_end"],
        assigned_user_ids=user_ids,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, where: str, params: tuple, order_by: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {where} GROUP BY s.shift_id ORDER BY {order_by} LIMIT 1",
                params,
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self._select_one("s.shift_id=%s", (shift_id,), "s.shift_id")

    def get_current_for_user(self, user_id: int, at: datetime) -> Optional[Shift]:
        return self._select_one(
            f"{_FOR_USER} AND s.shift_start <= %s AND s.shift_end >= %s",
            (user_id, at, at),
            "s.shift_start ASC, s.shift_id ASC",
        )

    def get_upcoming_for_user(self, user_id: int, now: datetime) -> Optional[Shift]:
        return self._select_one(
            f"{_FOR_USER} AND s.shift_start > %s",
            (user_id, now),
            "s.shift_start ASC, s.shift_id ASC",
        )

    def list_for_user(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[Shift]:
        where: List[str] = [_FOR_USER]
        params: List[Any] = [user_id]
        if start is not None:
            where.append("s.shift_start >= %s")
            params.append(start)
        if end is not None:
            where.append("s.shift_end <= %s")
            params.append(end)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {' AND '.join(where)} GROUP BY s.shift_id ORDER BY s.shift_start ASC, s.shift_id ASC",
                tuple(params),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        station_id: str,
        shift_name: str,
        shift_start: datetime,
        shift_end: datetime,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(station_id, shift_name, shift_start, shift_end, created_by)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (station_id, shift_name, shift_start, shift_end, created_by),
            )
            return int(cur.lastrowid)

    def assign_users(self, *, shift_id: int, user_ids: Iterable[int]) -> None:
        ids = sorted({int(u) for u in user_ids})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shift_assignments WHERE shift_id=%s", (shift_id,))
            if ids:
                cur.executemany(
                    "INSERT INTO shift_assignments(shift_id, user_id) VALUES(%s,%s)",
                    [(shift_id, u) for u in ids],
                )
