from __future__ import annotations

import dataclasses
import math
from datetime import datetime
from typing import Iterable, Optional

import pytest

from station_compliance.attendance.model import PunchEvent
from station_compliance.core.constants import EARTH_RADIUS_M
from station_compliance.core.enums import PunchKind
from station_compliance.core.exceptions import StoreUnavailable
from station_compliance.geofences.model import Circle, GeoPoint, Geofence
from station_compliance.shifts.model import Shift
from station_compliance.violations.model import BoundaryViolation

STATION = GeoPoint(latitude=12.9716, longitude=77.5946)


def offset_north(point: GeoPoint, meters: float) -> GeoPoint:
    """Point ``meters`` due north along the meridian."""
    return GeoPoint(latitude=point.latitude + math.degrees(meters / EARTH_RADIUS_M), longitude=point.longitude)


class InMemoryGeofences:
    def __init__(self, zones: Iterable[Geofence] = ()):
        self._zones: list[Geofence] = list(zones)

    def list_active(self, station_id: Optional[str] = None):
        return [z for z in self._zones if z.is_active and (station_id is None or z.station_id == station_id)]

    def list_all(self):
        return list(self._zones)

    def get_by_id(self, geofence_id: int) -> Optional[Geofence]:
        return next((z for z in self._zones if z.geofence_id == geofence_id), None)

    def create(self, *, station_id, station_name, boundary, created_by=None) -> int:
        geofence_id = max((z.geofence_id for z in self._zones), default=0) + 1
        self._zones.append(Geofence(geofence_id, station_id, station_name, boundary, True, created_by))
        return geofence_id

    def update(self, *, geofence_id, station_id, station_name, boundary) -> bool:
        for i, z in enumerate(self._zones):
            if z.geofence_id == geofence_id:
                self._zones[i] = dataclasses.replace(
                    z, station_id=station_id, station_name=station_name, boundary=boundary
                )
                return True
        return False

    def deactivate(self, *, geofence_id) -> bool:
        for i, z in enumerate(self._zones):
            if z.geofence_id == geofence_id and z.is_active:
                self._zones[i] = dataclasses.replace(z, is_active=False)
                return True
        return False


class InMemoryShifts:
    def __init__(self, shifts: Iterable[Shift] = ()):
        self.shifts: dict[int, Shift] = {s.shift_id: s for s in shifts}

    def _for_user(self, user_id: int) -> list[Shift]:
        return sorted(
            (s for s in self.shifts.values() if s.is_assigned(user_id)),
            key=lambda s: (s.shift_start, s.shift_id),
        )

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def get_current_for_user(self, user_id: int, at: datetime) -> Optional[Shift]:
        return next((s for s in self._for_user(user_id) if s.contains(at)), None)

    def get_upcoming_for_user(self, user_id: int, now: datetime) -> Optional[Shift]:
        return next((s for s in self._for_user(user_id) if s.shift_start > now), None)

    def list_for_user(self, user_id: int, start=None, end=None):
        return [
            s
            for s in self._for_user(user_id)
            if (start is None or s.shift_start >= start) and (end is None or s.shift_end <= end)
        ]

    def create(self, *, station_id, shift_name, shift_start, shift_end, created_by=None) -> int:
        shift_id = max(self.shifts, default=0) + 1
        self.shifts[shift_id] = Shift(shift_id, station_id, shift_name, shift_start, shift_end)
        return shift_id

    def assign_users(self, *, shift_id, user_ids) -> None:
        self.shifts[shift_id] = dataclasses.replace(
            self.shifts[shift_id], assigned_user_ids=frozenset(int(u) for u in user_ids)
        )


class InMemoryAttendance:
    def __init__(self):
        self.events: list[PunchEvent] = []

    def insert(self, event: PunchEvent) -> PunchEvent:
        saved = dataclasses.replace(event, punch_id=len(self.events) + 1)
        self.events.append(saved)
        return saved

    def query(self, user_id, start, end):
        rows = [e for e in self.events if e.user_id == user_id and start <= e.punched_at < end]
        return sorted(rows, key=lambda e: (e.punched_at, e.punch_id))

    def latest_for_user(self, user_id, start, end, kind: Optional[PunchKind] = None):
        rows = [e for e in self.query(user_id, start, end) if kind is None or e.kind == kind]
        return rows[-1] if rows else None


class InMemoryViolations:
    def __init__(self):
        self.rows: list[BoundaryViolation] = []

    def insert(self, *, user_id, geofence_id, violation_time, location, distance_from_boundary_m, shift_id):
        row = BoundaryViolation(
            violation_id=len(self.rows) + 1,
            user_id=user_id,
            geofence_id=geofence_id,
            violation_time=violation_time,
            location=location,
            distance_from_boundary_m=distance_from_boundary_m,
            shift_id=shift_id,
        )
        self.rows.append(row)
        return row

    def get_by_id(self, violation_id):
        return next((r for r in self.rows if r.violation_id == violation_id), None)

    def acknowledge(self, *, violation_id, admin_id, acknowledged_at) -> bool:
        for i, r in enumerate(self.rows):
            if r.violation_id == violation_id and not r.acknowledged:
                self.rows[i] = dataclasses.replace(
                    r, acknowledged=True, acknowledged_by=admin_id, acknowledged_at=acknowledged_at
                )
                return True
        return False

    def list_for_user(self, user_id, limit):
        rows = [r for r in self.rows if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.violation_time, reverse=True)[:limit]

    def list_recent(self, limit):
        return sorted(self.rows, key=lambda r: r.violation_time, reverse=True)[:limit]


class UnavailableViolations(InMemoryViolations):
    def insert(self, **kwargs):
        raise StoreUnavailable("Attendance store is unavailable. Please try again.")


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def station_zone() -> Geofence:
    return Geofence(
        geofence_id=1,
        station_id="ST-01",
        station_name="Central Station",
        boundary=Circle(center=STATION, radius_m=500.0),
    )


@pytest.fixture
def day_shift() -> Shift:
    return Shift(
        shift_id=10,
        station_id="ST-01",
        shift_name="Day",
        shift_start=datetime(2026, 3, 2, 9, 0),
        shift_end=datetime(2026, 3, 2, 17, 0),
        assigned_user_ids=frozenset({7}),
    )


@pytest.fixture
def night_shift() -> Shift:
    return Shift(
        shift_id=20,
        station_id="ST-01",
        shift_name="Night",
        shift_start=datetime(2026, 3, 2, 22, 0),
        shift_end=datetime(2026, 3, 3, 6, 0),
        assigned_user_ids=frozenset({9}),
    )


@pytest.fixture
def geofences(station_zone) -> InMemoryGeofences:
    return InMemoryGeofences([station_zone])


@pytest.fixture
def shifts(day_shift) -> InMemoryShifts:
    return InMemoryShifts([day_shift])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def violations() -> InMemoryViolations:
    return InMemoryViolations()


@pytest.fixture
def unavailable_violations() -> UnavailableViolations:
    return UnavailableViolations()


@pytest.fixture
def station_point() -> GeoPoint:
    return STATION


@pytest.fixture
def north():
    return offset_north


class BrokenViolations(InMemoryViolations):
    def insert(self, **kwargs):
        raise RuntimeError("violation table is locked")


@pytest.fixture
def broken_violations() -> BrokenViolations:
    return BrokenViolations()
