from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from station_compliance.core.enums import Role
from station_compliance.core.exceptions import AuthorizationError, ValidationError
from station_compliance.geofences.validator import GeofenceValidator
from station_compliance.violations.recorder import BoundaryViolationRecorder


@pytest.fixture
def recorder(violations, geofences, shifts) -> BoundaryViolationRecorder:
    return BoundaryViolationRecorder(violations, geofences, shifts)


def test_ping_outside_during_shift_is_recorded(recorder, violations, station_point, north):
    point = north(station_point, 1200)

    violation = recorder.check_location(7, point, now=datetime(2026, 3, 2, 11, 0))

    assert violation.violation_id == 1
    assert violation.geofence_id == 1
    assert violation.shift_id == 10
    assert violation.distance_from_boundary_m == pytest.approx(1200, abs=0.5)
    assert violation.acknowledged is False
    assert violations.rows == [violation]


def test_ping_inside_is_not_recorded(recorder, violations, station_point):
    assert recorder.check_location(7, station_point, now=datetime(2026, 3, 2, 11, 0)) is None
    assert violations.rows == []


def test_ping_without_open_shift_is_ignored(recorder, violations, station_point, north):
    far = north(station_point, 5000)

    assert recorder.check_location(7, far, now=datetime(2026, 3, 2, 20, 0)) is None
    assert recorder.check_location(99, far, now=datetime(2026, 3, 2, 11, 0)) is None
    assert violations.rows == []


def test_record_violation_references_nearest_zone(recorder, geofences, day_shift, station_point, north):
    point = north(station_point, 900)
    validation = GeofenceValidator().validate(point, geofences.list_active())

    violation = recorder.record_violation(7, point, validation, day_shift, at=datetime(2026, 3, 2, 10, 0))

    assert violation.geofence_id == validation.nearest_zone.geofence_id
    assert violation.location == point


def test_admin_acknowledges_once(recorder, violations, station_point, north, fixed_now):
    recorder.check_location(7, north(station_point, 1200), now=fixed_now)

    recorder.acknowledge(1, 1, current_role=Role.ADMIN, now=fixed_now + timedelta(hours=1))

    row = violations.get_by_id(1)
    assert row.acknowledged is True
    assert row.acknowledged_by == 1
    assert row.acknowledged_at == fixed_now + timedelta(hours=1)
    with pytest.raises(ValidationError):
        recorder.acknowledge(1, 1, current_role=Role.ADMIN)


def test_acknowledge_requires_admin_and_known_violation(recorder):
    with pytest.raises(AuthorizationError):
        recorder.acknowledge(1, 7, current_role=Role.STAFF)
    with pytest.raises(ValidationError):
        recorder.acknowledge(42, 1, current_role=Role.ADMIN)


def test_listing_is_newest_first_and_limited(recorder, station_point, north, fixed_now):
    far = north(station_point, 2000)
    for minutes in (0, 30, 60):
        recorder.check_location(7, far, now=fixed_now + timedelta(minutes=minutes))

    mine = recorder.list_for_user(7, limit=2)
    assert [v.violation_time for v in mine] == [fixed_now + timedelta(minutes=60), fixed_now + timedelta(minutes=30)]

    assert len(recorder.list_recent(current_role=Role.ADMIN)) == 3
    with pytest.raises(AuthorizationError):
        recorder.list_recent(current_role=Role.STAFF)


@pytest.mark.parametrize("limit", [0, -5, 201])
def test_listing_limit_must_be_within_bounds(recorder, limit):
    with pytest.raises(ValidationError):
        recorder.list_for_user(7, limit=limit)
    with pytest.raises(ValidationError):
        recorder.list_recent(current_role=Role.ADMIN, limit=limit)
