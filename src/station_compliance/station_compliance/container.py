from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import PunchOrchestrator
from .attendance.state import PunchStateTracker
from .compliance.engine import ShiftComplianceEngine
from .core.constants import EARLY_DEPARTURE_TOLERANCE_MINUTES, GRACE_PERIOD_MINUTES
from .core.enums import SequencePolicy
from .database.connection import DBConfig, DatabaseConnection
from .geofences.mysql_geofence_repository import MySQLGeofenceRepository
from .geofences.repository import GeofenceRepository
from .geofences.service import GeofenceService
from .geofences.validator import GeofenceValidator
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .violations.mysql_violation_repository import MySQLViolationRepository
from .violations.recorder import BoundaryViolationRecorder
from .violations.repository import ViolationRepository


@dataclass(frozen=True)
class Container:
    geofences_repo: GeofenceRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    violations_repo: ViolationRepository

    geofence_service: GeofenceService
    shift_service: ShiftService
    compliance_engine: ShiftComplianceEngine
    violation_recorder: BoundaryViolationRecorder
    state_tracker: PunchStateTracker
    punch_orchestrator: PunchOrchestrator


def wire_container(
    *,
    geofences_repo: GeofenceRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    violations_repo: ViolationRepository,
    grace_minutes: int = GRACE_PERIOD_MINUTES,
    early_departure_tolerance_minutes: int = EARLY_DEPARTURE_TOLERANCE_MINUTES,
    sequence_policy: SequencePolicy | str = SequencePolicy.WARN,
    station_id: str | None = None,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""
    validator = GeofenceValidator()
    engine = ShiftComplianceEngine(
        grace_minutes=grace_minutes,
        early_departure_tolerance_minutes=early_departure_tolerance_minutes,
    )

    geofence_service = GeofenceService(geofences_repo)
    shift_service = ShiftService(shifts_repo)
    violation_recorder = BoundaryViolationRecorder(violations_repo, geofences_repo, shifts_repo, validator=validator)
    state_tracker = PunchStateTracker(attendance_repo, shift_service)
    punch_orchestrator = PunchOrchestrator(
        attendance_repo,
        geofences_repo,
        shift_service,
        violation_recorder,
        validator=validator,
        engine=engine,
        sequence_policy=SequencePolicy(sequence_policy),
        station_id=station_id,
    )

    return Container(
        geofences_repo=geofences_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        violations_repo=violations_repo,
        geofence_service=geofence_service,
        shift_service=shift_service,
        compliance_engine=engine,
        violation_recorder=violation_recorder,
        state_tracker=state_tracker,
        punch_orchestrator=punch_orchestrator,
    )


def build_container(*, db_config: dict, **settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        geofences_repo=MySQLGeofenceRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        violations_repo=MySQLViolationRepository(conn),
        **settings,
    )
