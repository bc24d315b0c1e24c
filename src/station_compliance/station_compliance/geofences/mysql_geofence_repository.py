from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json, optional_int
from .model import Boundary, Geofence, boundary_from_dict, boundary_to_dict
from .repository import GeofenceRepository

_COLUMNS = "geofence_id, station_id, station_name, boundary, is_active, created_by"


def _row_to_geofence(r: Dict[str, Any]) -> Geofence:
    return Geofence(
        geofence_id=int(r["geofence_id"]),
        station_id=r["station_id"],
        station_name=r["station_name"],
        boundary=boundary_from_dict(load_json(r["boundary"])),
        is_active=bool(r["is_active"]),
        created_by=optional_int(r.get("created_by")),
    )


class MySQLGeofenceRepository(GeofenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, station_id: Optional[str] = None) -> Sequence[Geofence]:
        sql = f"SELECT {_COLUMNS} FROM geofences WHERE is_active=1"
        params: tuple = ()
        if station_id:
            sql += " AND station_id=%s"
            params = (station_id,)
        sql += " ORDER BY created_at, geofence_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_geofence(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM geofences ORDER BY created_at DESC, geofence_id DESC")
            return [_row_to_geofence(r) for r in fetchall(cur)]

    def get_by_id(self, geofence_id: int) -> Optional[Geofence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM geofences WHERE geofence_id=%s", (geofence_id,))
            r = fetchone(cur)
            return _row_to_geofence(r) if r else None

    def create(
        self,
        *,
        station_id: str,
        station_name: str,
        boundary: Boundary,
        created_by: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO geofences(station_id, station_name, boundary, is_active, created_by)
                VALUES(%s,%s,%s,1,%s)
                """,
                (station_id, station_name, json.dumps(boundary_to_dict(boundary)), created_by),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        geofence_id: int,
        station_id: str,
        station_name: str,
        boundary: Boundary,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE geofences
                SET station_id=%s, station_name=%s, boundary=%s
                WHERE geofence_id=%s
                """,
                (station_id, station_name, json.dumps(boundary_to_dict(boundary)), geofence_id),
            )
            return cur.rowcount > 0

    def deactivate(self, *, geofence_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE geofences SET is_active=0 WHERE geofence_id=%s AND is_active=1",
                (geofence_id,),
            )
            return cur.rowcount > 0
