from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_limit
from ..core.constants import DEFAULT_RECENT_VIOLATIONS_LIMIT, DEFAULT_USER_VIOLATIONS_LIMIT, MAX_LISTING_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..geofences.model import GeoPoint
from ..geofences.repository import GeofenceRepository
from ..geofences.validator import GeofenceValidation, GeofenceValidator
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .model import BoundaryViolation
from .repository import ViolationRepository

logger = logging.getLogger(__name__)


class BoundaryViolationRecorder:
    """Persists "outside every zone during an open shift" facts."""

    def __init__(
        self,
        violations: ViolationRepository,
        geofences: GeofenceRepository,
        shifts: ShiftRepository,
        *,
        validator: Optional[GeofenceValidator] = None,
    ):
        self._violations = violations
        self._geofences = geofences
        self._shifts = shifts
        self._validator = validator or GeofenceValidator()

    def record_violation(
        self,
        user_id: int,
        point: GeoPoint,
        validation: GeofenceValidation,
        shift: Optional[Shift],
        *,
        at: Optional[datetime] = None,
    ) -> BoundaryViolation:
        nearest_id = validation.nearest_zone.geofence_id if validation.nearest_zone else None
        violation = self._violations.insert(
            user_id=int(user_id),
            geofence_id=nearest_id,
            violation_time=at or now_local(),
            location=point,
            distance_from_boundary_m=validation.distance_to_nearest_m,
            shift_id=shift.shift_id if shift else None,
        )
        logger.warning(
            "boundary violation %s: user %s at (%.6f, %.6f), %s m from geofence %s",
            violation.violation_id,
            user_id,
            point.latitude,
            point.longitude,
            "?" if validation.distance_to_nearest_m is None else f"{validation.distance_to_nearest_m:.0f}",
            nearest_id,
        )
        return violation

    def check_location(
        self,
        user_id: int,
        point: GeoPoint,
        *,
        now: Optional[datetime] = None,
    ) -> Optional[BoundaryViolation]:
        """Background polling entry; records only while the officer has an open shift."""
        now = now or now_local()

        shift = self._shifts.get_current_for_user(user_id, now)
        if not shift:
            return None

        validation = self._validator.validate(point, self._geofences.list_active())
        if validation.is_inside:
            return None

        return self.record_violation(user_id, point, validation, shift, at=now)

    def acknowledge(
        self,
        violation_id: int,
        admin_id: int,
        *,
        current_role: Role,
        now: Optional[datetime] = None,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can acknowledge violations")

        existing = self._violations.get_by_id(int(violation_id))
        if not existing:
            raise ValidationError("Violation not found")
        if existing.acknowledged:
            raise ValidationError("Violation already acknowledged")

        if not self._violations.acknowledge(
            violation_id=int(violation_id),
            admin_id=int(admin_id),
            acknowledged_at=now or now_local(),
        ):
            raise ValidationError("Violation already acknowledged")

    def list_for_user(self, user_id: int, limit: int = DEFAULT_USER_VIOLATIONS_LIMIT) -> Sequence[BoundaryViolation]:
        return self._violations.list_for_user(int(user_id), require_limit(limit, MAX_LISTING_LIMIT))

    def list_recent(
        self,
        *,
        current_role: Role,
        limit: int = DEFAULT_RECENT_VIOLATIONS_LIMIT,
    ) -> Sequence[BoundaryViolation]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can review violations")
        return self._violations.list_recent(require_limit(limit, MAX_LISTING_LIMIT))
