from __future__ import annotations

import logging
from datetime import datetime

import pytest

from station_compliance.attendance.location import FixedLocationProvider
from station_compliance.attendance.service import PunchOrchestrator
from station_compliance.attendance.state import PunchStateTracker
from station_compliance.core.enums import ComplianceStatus, PunchKind, SequencePolicy
from station_compliance.core.exceptions import InvalidPunchOrder, LocationUnavailable, NoActiveShift, ShiftEnded
from station_compliance.shifts.service import ShiftService
from station_compliance.violations.recorder import BoundaryViolationRecorder

OFFICER = 7


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute)


def make_orchestrator(geofences, shifts, attendance, violations, **kwargs) -> PunchOrchestrator:
    recorder = BoundaryViolationRecorder(violations, geofences, shifts)
    return PunchOrchestrator(attendance, geofences, ShiftService(shifts), recorder, **kwargs)


@pytest.fixture
def orchestrator(geofences, shifts, attendance, violations):
    return make_orchestrator(geofences, shifts, attendance, violations)


@pytest.fixture
def on_site(station_point):
    return FixedLocationProvider(station_point.latitude, station_point.longitude)


@pytest.fixture
def off_site(station_point, north):
    away = north(station_point, 800)
    return FixedLocationProvider(away.latitude, away.longitude)


def test_scenario_grace_punch_in_then_on_time_punch_out(orchestrator, attendance, violations, on_site):
    punched_in = orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9, 15))

    assert punched_in.event.punch_id == 1
    assert punched_in.event.is_within_geofence is True
    assert punched_in.event.geofence_id == 1
    assert punched_in.event.shift_id == 10
    assert punched_in.event.compliance_status == ComplianceStatus.ON_TIME
    assert punched_in.event.grace_period_used is True
    assert punched_in.event.minutes_late == 15
    assert punched_in.violation is None

    punched_out = orchestrator.record_punch(OFFICER, "out", location=on_site, now=at(17))

    assert punched_out.compliance.status == ComplianceStatus.ON_TIME
    assert [e.kind for e in attendance.events] == [PunchKind.IN, PunchKind.OUT]
    assert violations.rows == []


def test_scenario_late_punch_in(orchestrator, on_site):
    outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9, 35))

    assert outcome.event.compliance_status == ComplianceStatus.LATE
    assert outcome.event.minutes_late == 35
    assert outcome.event.note == "Punched in 35 minutes late"


def test_scenario_punch_in_after_shift_end_writes_nothing(orchestrator, attendance, on_site):
    with pytest.raises(ShiftEnded) as exc_info:
        orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(17, 5))

    assert exc_info.value.result.status == ComplianceStatus.ABSENT
    assert exc_info.value.message == "Shift has ended. Cannot punch in."
    assert attendance.events == []


def test_punch_in_without_shift_is_rejected(orchestrator, attendance, on_site):
    with pytest.raises(NoActiveShift):
        orchestrator.record_punch(99, PunchKind.IN, location=on_site, now=at(9))

    assert attendance.events == []


@pytest.mark.parametrize("lat, lon", [(None, 77.5946), (12.9716, None), ("abc", 77.5946), (120.0, 77.5946)])
def test_missing_or_bad_location_writes_nothing(orchestrator, attendance, lat, lon):
    with pytest.raises(LocationUnavailable):
        orchestrator.record_punch(OFFICER, PunchKind.IN, location=FixedLocationProvider(lat, lon), now=at(9))

    assert attendance.events == []


def test_no_location_provider_at_all(orchestrator):
    with pytest.raises(LocationUnavailable):
        orchestrator.record_punch(OFFICER, PunchKind.IN, now=at(9))


def test_punch_out_without_punch_in(orchestrator, attendance, on_site):
    with pytest.raises(InvalidPunchOrder):
        orchestrator.record_punch(OFFICER, PunchKind.OUT, location=on_site, now=at(12))

    assert attendance.events == []


def test_punch_out_stamped_before_punch_in(orchestrator, attendance, on_site):
    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9, 30))

    with pytest.raises(InvalidPunchOrder) as exc_info:
        orchestrator.record_punch(OFFICER, PunchKind.OUT, location=on_site, now=at(9, 10))

    assert exc_info.value.result.is_valid is False
    assert len(attendance.events) == 1


def test_outside_geofence_during_shift_records_violation(orchestrator, violations, off_site):
    outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, location=off_site, now=at(9, 5))

    assert outcome.event.is_within_geofence is False
    assert outcome.event.geofence_id is None
    assert outcome.event.distance_to_nearest_m == pytest.approx(800, abs=0.5)
    assert outcome.violation is not None
    assert outcome.violation.geofence_id == 1
    assert outcome.violation.shift_id == 10
    assert outcome.violation.distance_from_boundary_m == pytest.approx(800, abs=0.5)
    assert len(violations.rows) == 1


def test_overtime_punch_out_uses_shift_of_punch_in(orchestrator, violations, on_site, off_site):
    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(8, 55))

    outcome = orchestrator.record_punch(OFFICER, PunchKind.OUT, location=off_site, now=at(18, 30))

    assert outcome.event.shift_id == 10
    assert outcome.compliance.status == ComplianceStatus.OVERTIME
    assert outcome.event.overtime_minutes == 90
    # Shift already closed: being off site is not a violation.
    assert outcome.violation is None
    assert violations.rows == []


def test_violation_store_failure_does_not_undo_punch(
    geofences, shifts, attendance, unavailable_violations, off_site, caplog
):
    orchestrator = make_orchestrator(geofences, shifts, attendance, unavailable_violations)

    with caplog.at_level(logging.ERROR):
        outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, location=off_site, now=at(9, 5))

    assert outcome.violation is None
    assert len(attendance.events) == 1
    assert "failed to store boundary violation" in caplog.text


def test_double_punch_in_is_accepted_with_warning_by_default(orchestrator, attendance, on_site, caplog):
    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9))

    with caplog.at_level(logging.WARNING):
        orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9, 10))

    assert [e.kind for e in attendance.events] == [PunchKind.IN, PunchKind.IN]
    assert "twice in a row" in caplog.text


def test_double_punch_in_can_be_rejected(geofences, shifts, attendance, violations, on_site):
    orchestrator = make_orchestrator(
        geofences, shifts, attendance, violations, sequence_policy=SequencePolicy.REJECT
    )
    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9))

    with pytest.raises(InvalidPunchOrder):
        orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9, 10))

    assert len(attendance.events) == 1


def test_station_scope_without_zones_reports_no_distance(geofences, shifts, attendance, violations, on_site):
    orchestrator = make_orchestrator(geofences, shifts, attendance, violations, station_id="ST-99")

    outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9))

    assert outcome.geofence.is_inside is False
    assert outcome.event.distance_to_nearest_m is None
    assert outcome.violation.geofence_id is None


def test_constructor_location_provider_is_used(geofences, shifts, attendance, violations, on_site):
    orchestrator = make_orchestrator(geofences, shifts, attendance, violations, location_provider=on_site)

    outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, now=at(9))

    assert outcome.event.is_within_geofence is True


def test_state_follows_persisted_punches(orchestrator, attendance, on_site):
    tracker = PunchStateTracker(attendance)
    assert tracker.next_kind(OFFICER, now=at(8)) == PunchKind.IN

    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9))
    assert tracker.current_state(OFFICER, now=at(9, 1)).is_punched_in is True

    orchestrator.record_punch(OFFICER, PunchKind.OUT, location=on_site, now=at(17))
    assert tracker.current_state(OFFICER, now=at(17, 1)).is_punched_in is False


def test_history_is_oldest_first(orchestrator, on_site):
    orchestrator.record_punch(OFFICER, PunchKind.IN, location=on_site, now=at(9))
    orchestrator.record_punch(OFFICER, PunchKind.OUT, location=on_site, now=at(17))

    history = orchestrator.history(OFFICER, at(0).date())

    assert [e.punched_at for e in history] == [at(9), at(17)]


NIGHT_OFFICER = 9


def test_overnight_shift_punch_out_after_midnight(orchestrator, shifts, night_shift, attendance, on_site):
    shifts.shifts[night_shift.shift_id] = night_shift

    punched_in = orchestrator.record_punch(
        NIGHT_OFFICER, PunchKind.IN, location=on_site, now=datetime(2026, 3, 2, 22, 5)
    )
    assert punched_in.event.shift_id == 20
    assert punched_in.compliance.grace_period_used is True

    tracker = PunchStateTracker(attendance, ShiftService(shifts))
    assert tracker.next_kind(NIGHT_OFFICER, now=datetime(2026, 3, 3, 2, 0)) == PunchKind.OUT

    punched_out = orchestrator.record_punch(
        NIGHT_OFFICER, PunchKind.OUT, location=on_site, now=datetime(2026, 3, 3, 6, 0)
    )

    assert punched_out.event.shift_id == 20
    assert punched_out.compliance.status == ComplianceStatus.ON_TIME
    assert tracker.current_state(NIGHT_OFFICER, now=datetime(2026, 3, 3, 7, 0)).is_punched_in is False


def test_overnight_overtime_is_measured_against_night_shift(orchestrator, shifts, night_shift, on_site):
    shifts.shifts[night_shift.shift_id] = night_shift
    orchestrator.record_punch(NIGHT_OFFICER, PunchKind.IN, location=on_site, now=datetime(2026, 3, 2, 22, 0))

    outcome = orchestrator.record_punch(
        NIGHT_OFFICER, PunchKind.OUT, location=on_site, now=datetime(2026, 3, 3, 6, 30)
    )

    assert outcome.compliance.status == ComplianceStatus.OVERTIME
    assert outcome.event.overtime_minutes == 30


def test_unexpected_violation_store_error_does_not_undo_punch(
    geofences, shifts, attendance, broken_violations, off_site, caplog
):
    orchestrator = make_orchestrator(geofences, shifts, attendance, broken_violations)

    with caplog.at_level(logging.ERROR):
        outcome = orchestrator.record_punch(OFFICER, PunchKind.IN, location=off_site, now=at(9, 5))

    assert outcome.violation is None
    assert len(attendance.events) == 1
    assert "failed to store boundary violation" in caplog.text
