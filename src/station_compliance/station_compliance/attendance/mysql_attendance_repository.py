from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import ComplianceStatus, PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float, optional_int
from ..geofences.model import GeoPoint
from .model import PunchEvent
from .repository import AttendanceRepository

_COLUMNS = """
    punch_id, user_id, punch_kind, punched_at, latitude, longitude,
    is_within_geofence, geofence_id, distance_to_nearest_m, shift_id,
    compliance_status, minutes_late, minutes_early, overtime_minutes,
    grace_period_used, note
"""


def _row_to_event(r: Dict[str, Any]) -> PunchEvent:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))

    return PunchEvent(
        punch_id=int(r["punch_id"]),
        user_id=int(r["user_id"]),
        kind=PunchKind(r["punch_kind"]),
        punched_at=r["punched_at"],
        location=location,
        is_within_geofence=bool(r.get("is_within_geofence")),
        geofence_id=optional_int(r.get("geofence_id")),
        distance_to_nearest_m=optional_float(r.get("distance_to_nearest_m")),
        shift_id=optional_int(r.get("shift_id")),
        compliance_status=ComplianceStatus(r["compliance_status"]) if r.get("compliance_status") else None,
        minutes_late=int(r.get("minutes_late") or 0),
        minutes_early=int(r.get("minutes_early") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        grace_period_used=bool(r.get("grace_period_used")),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, event: PunchEvent) -> PunchEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punch_events(
                    user_id, punch_kind, punched_at, latitude, longitude,
                    is_within_geofence, geofence_id, distance_to_nearest_m, shift_id,
                    compliance_status, minutes_late, minutes_early, overtime_minutes,
                    grace_period_used, note
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event.user_id,
                    event.kind.value,
                    event.punched_at,
                    event.location.latitude if event.location else None,
                    event.location.longitude if event.location else None,
                    int(event.is_within_geofence),
                    event.geofence_id,
                    event.distance_to_nearest_m,
                    event.shift_id,
                    event.compliance_status.value if event.compliance_status else None,
                    event.minutes_late,
                    event.minutes_early,
                    event.overtime_minutes,
                    int(event.grace_period_used),
                    event.note,
                ),
            )
            punch_id = int(cur.lastrowid)

        return dataclasses.replace(event, punch_id=punch_id)

    def query(self, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punch_events
                WHERE user_id=%s AND punched_at >= %s AND punched_at < %s
                ORDER BY punched_at ASC, punch_id ASC
                """,
                (user_id, start, end),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def latest_for_user(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
        kind: Optional[PunchKind] = None,
    ) -> Optional[PunchEvent]:
        where = "user_id=%s AND punched_at >= %s AND punched_at < %s"
        params: List[Any] = [user_id, start, end]
        if kind is not None:
            where += " AND punch_kind=%s"
            params.append(kind.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punch_events
                WHERE {where}
                ORDER BY punched_at DESC, punch_id DESC
                LIMIT 1
                """,
                tuple(params),
            )
            r = fetchone(cur)
            return _row_to_event(r) if r else None
