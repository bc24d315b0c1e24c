from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float, optional_int
from ..geofences.model import GeoPoint
from .model import BoundaryViolation
from .repository import ViolationRepository

_COLUMNS = """
    violation_id, user_id, geofence_id, violation_time, latitude, longitude,
    distance_from_boundary_m, shift_id, acknowledged, acknowledged_by, acknowledged_at
"""


def _row_to_violation(r: Dict[str, Any]) -> BoundaryViolation:
    return BoundaryViolation(
        violation_id=int(r["violation_id"]),
        user_id=int(r["user_id"]),
        geofence_id=optional_int(r.get("geofence_id")),
        violation_time=r["violation_time"],
        location=GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"])),
        distance_from_boundary_m=optional_float(r.get("distance_from_boundary_m")),
        shift_id=optional_int(r.get("shift_id")),
        acknowledged=bool(r.get("acknowledged")),
        acknowledged_by=optional_int(r.get("acknowledged_by")),
        acknowledged_at=r.get("acknowledged_at"),
    )


class MySQLViolationRepository(ViolationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO boundary_violations(
                    user_id, geofence_id, violation_time, latitude, longitude,
                    distance_from_boundary_m, shift_id, acknowledged
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,0)
                """,
                (
                    user_id,
                    geofence_id,
                    violation_time,
                    location.latitude,
                    location.longitude,
                    distance_from_boundary_m,
                    shift_id,
                ),
            )
            violation_id = int(cur.lastrowid)

        return BoundaryViolation(
            violation_id=violation_id,
            user_id=user_id,
            geofence_id=geofence_id,
            violation_time=violation_time,
            location=location,
            distance_from_boundary_m=distance_from_boundary_m,
            shift_id=shift_id,
        )

    def get_by_id(self, violation_id: int) -> Optional[BoundaryViolation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM boundary_violations WHERE violation_id=%s", (violation_id,))
            r = fetchone(cur)
            return _row_to_violation(r) if r else None

    def acknowledge(self, *, violation_id: int, admin_id: int, acknowledged_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE boundary_violations
                SET acknowledged=1, acknowledged_by=%s, acknowledged_at=%s
                WHERE violation_id=%s AND acknowledged=0
                """,
                (admin_id, acknowledged_at, violation_id),
            )
            return cur.rowcount > 0

    def list_for_user(self, user_id: int, limit: int) -> Sequence[BoundaryViolation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM boundary_violations
                WHERE user_id=%s
                ORDER BY violation_time DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_row_to_violation(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[BoundaryViolation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM boundary_violations ORDER BY violation_time DESC LIMIT %s",
                (int(limit),),
            )
            return [_row_to_violation(r) for r in fetchall(cur)]
