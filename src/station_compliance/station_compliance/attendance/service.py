from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import day_bounds, now_local
from ..compliance.engine import ShiftComplianceEngine
from ..compliance.model import ComplianceResult
from ..core.enums import PunchKind, SequencePolicy
from ..core.exceptions import InvalidPunchOrder, LocationUnavailable, NoActiveShift, ShiftEnded
from ..geofences.repository import GeofenceRepository
from ..geofences.validator import GeofenceValidation, GeofenceValidator
from ..shifts.model import Shift
from ..shifts.service import ShiftService
from ..violations.model import BoundaryViolation
from ..violations.recorder import BoundaryViolationRecorder
from .location import LocationProvider
from .model import PunchEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchOutcome:
    event: PunchEvent
    geofence: GeofenceValidation
    compliance: ComplianceResult | None
    violation: BoundaryViolation | None = None


class PunchOrchestrator:
    """Single entry point for punch in / punch out.

    Reads first, validates everything, then performs exactly one insert. Any
    failure before the insert leaves nothing behind, so the caller can retry
    the whole punch.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        geofences: GeofenceRepository,
        shifts: ShiftService,
        recorder: BoundaryViolationRecorder,
        *,
        location_provider: LocationProvider | None = None,
        validator: GeofenceValidator | None = None,
        engine: ShiftComplianceEngine | None = None,
        sequence_policy: SequencePolicy = SequencePolicy.WARN,
        station_id: str | None = None,
    ):
        self._attendance = attendance
        self._geofences = geofences
        self._shifts = shifts
        self._recorder = recorder
        self._location_provider = location_provider
        self._validator = validator or GeofenceValidator()
        self._engine = engine or ShiftComplianceEngine()
        self._sequence_policy = SequencePolicy(sequence_policy)
        self._station_id = station_id

    def record_punch(
        self,
        user_id: int,
        kind: PunchKind | str,
        *,
        location: LocationProvider | None = None,
        now: datetime | None = None,
    ) -> PunchOutcome:
        kind = PunchKind(kind)
        now = now or now_local()

        provider = location or self._location_provider
        if provider is None:
            raise LocationUnavailable("Location not available. Please enable location access and try again.")
        point = provider.get_current_position()

        window_start, window_end = self._shifts.work_day_bounds(user_id, now)
        latest = self._attendance.latest_for_user(user_id, window_start, window_end)

        last_in = None
        if kind == PunchKind.OUT:
            last_in = (
                latest
                if latest and latest.kind == PunchKind.IN
                else self._attendance.latest_for_user(user_id, window_start, window_end, kind=PunchKind.IN)
            )
            if last_in is None:
                logger.info("punch out rejected for user %s: no punch in today", user_id)
                raise InvalidPunchOrder("You have not punched in today")

        shift = self._resolve_shift(user_id, kind, now, last_in)

        validation = self._validator.validate(point, self._geofences.list_active(self._station_id))

        compliance = None
        if shift is not None:
            if kind == PunchKind.IN:
                compliance = self._engine.evaluate_punch_in(shift, now)
                if not compliance.is_valid:
                    logger.info("punch in rejected for user %s: %s", user_id, compliance.message)
                    raise ShiftEnded(compliance.message, compliance)
            else:
                compliance = self._engine.evaluate_punch_out(shift, now, last_in.punched_at)
                if not compliance.is_valid:
                    logger.info("punch out rejected for user %s: %s", user_id, compliance.message)
                    raise InvalidPunchOrder(compliance.message, compliance)
        elif kind == PunchKind.IN:
            logger.info("punch in rejected for user %s: no active shift", user_id)
            raise NoActiveShift("No active shift assigned. Cannot punch in.")

        self._check_sequence(user_id, kind, latest)

        event = self._attendance.insert(
            PunchEvent(
                punch_id=None,
                user_id=user_id,
                kind=kind,
                punched_at=now,
                location=point,
                is_within_geofence=validation.is_inside,
                geofence_id=validation.matched_geofence_id,
                distance_to_nearest_m=validation.distance_to_nearest_m,
                shift_id=shift.shift_id if shift else None,
                compliance_status=compliance.status if compliance else None,
                minutes_late=compliance.minutes_late if compliance else 0,
                minutes_early=compliance.minutes_early if compliance else 0,
                overtime_minutes=compliance.overtime_minutes if compliance else 0,
                grace_period_used=compliance.grace_period_used if compliance else False,
                note=compliance.message if compliance else None,
            )
        )
        logger.info(
            "punch %s recorded: user %s %s at %s (inside=%s, status=%s)",
            event.punch_id,
            user_id,
            kind.value,
            now.isoformat(timespec="seconds"),
            validation.is_inside,
            event.compliance_status.value if event.compliance_status else "-",
        )

        violation = None
        if not validation.is_inside and shift is not None and shift.contains(now):
            try:
                violation = self._recorder.record_violation(user_id, point, validation, shift, at=now)
            except Exception:
                # punch is already committed
                logger.exception("failed to store boundary violation for punch %s", event.punch_id)

        return PunchOutcome(event=event, geofence=validation, compliance=compliance, violation=violation)

    def history(self, user_id: int, day: date) -> list[PunchEvent]:
        start, end = day_bounds(day)
        return list(self._attendance.query(user_id, start, end))

    def _resolve_shift(
        self,
        user_id: int,
        kind: PunchKind,
        now: datetime,
        last_in: PunchEvent | None,
    ) -> Shift | None:
        if kind == PunchKind.IN:
            return self._shifts.shift_for_punch_in(user_id, now)

        if last_in is not None and last_in.shift_id is not None:
            shift = self._shifts.get_by_id(last_in.shift_id)
            if shift:
                return shift
        return self._shifts.get_current_shift(user_id, now)

    def _check_sequence(self, user_id: int, kind: PunchKind, latest: PunchEvent | None) -> None:
        if latest is None or latest.kind != kind:
            return

        if self._sequence_policy == SequencePolicy.REJECT:
            logger.info("punch %s rejected for user %s: already punched %s", kind.value, user_id, kind.value)
            raise InvalidPunchOrder(f"You are already punched {kind.value}")

        logger.warning(
            "user %s punched %s twice in a row (previous at %s)",
            user_id,
            kind.value,
            latest.punched_at.isoformat(timespec="seconds"),
        )
