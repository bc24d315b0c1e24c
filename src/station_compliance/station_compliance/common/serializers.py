"""JSON shapes returned by the controllers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..attendance.model import PunchEvent
from ..compliance.model import ComplianceResult, GracePeriodInfo
from ..geofences.model import GeoPoint, Geofence, boundary_to_dict
from ..geofences.validator import GeofenceValidation
from ..shifts.model import Shift
from ..violations.model import BoundaryViolation


def _ts(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="seconds") if value else None


def _round(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 1)


def point_to_dict(point: Optional[GeoPoint]) -> Optional[dict]:
    if point is None:
        return None
    return {"latitude": point.latitude, "longitude": point.longitude}


def geofence_to_dict(zone: Geofence) -> dict:
    return {
        "geofence_id": zone.geofence_id,
        "station_id": zone.station_id,
        "station_name": zone.station_name,
        "boundary": boundary_to_dict(zone.boundary),
        "is_active": zone.is_active,
    }


def validation_to_dict(validation: GeofenceValidation) -> dict:
    nearest = validation.nearest_zone
    return {
        "is_inside": validation.is_inside,
        "geofence_id": validation.matched_geofence_id,
        "station_name": validation.matched_zone.station_name if validation.matched_zone else None,
        "distance_to_nearest_m": _round(validation.distance_to_nearest_m),
        "nearest_station_name": nearest.station_name if nearest else None,
    }


def compliance_to_dict(result: Optional[ComplianceResult]) -> Optional[dict]:
    if result is None:
        return None
    return {
        "is_valid": result.is_valid,
        "status": result.status.value,
        "message": result.message,
        "minutes_late": result.minutes_late,
        "minutes_early": result.minutes_early,
        "overtime_minutes": result.overtime_minutes,
        "grace_period_used": result.grace_period_used,
    }


def shift_to_dict(shift: Optional[Shift]) -> Optional[dict]:
    if shift is None:
        return None
    return {
        "shift_id": shift.shift_id,
        "station_id": shift.station_id,
        "shift_name": shift.shift_name,
        "shift_start": _ts(shift.shift_start),
        "shift_end": _ts(shift.shift_end),
        "duration_hours": shift.duration_hours,
    }


def grace_to_dict(info: Optional[GracePeriodInfo]) -> Optional[dict]:
    if info is None:
        return None
    return {
        "is_within_grace_period": info.is_within_grace_period,
        "minutes_remaining": info.minutes_remaining,
        "grace_period_end": _ts(info.grace_period_end),
    }


def violation_to_dict(violation: Optional[BoundaryViolation]) -> Optional[dict]:
    if violation is None:
        return None
    return {
        "violation_id": violation.violation_id,
        "user_id": violation.user_id,
        "geofence_id": violation.geofence_id,
        "violation_time": _ts(violation.violation_time),
        "location": point_to_dict(violation.location),
        "distance_from_boundary_m": _round(violation.distance_from_boundary_m),
        "shift_id": violation.shift_id,
        "acknowledged": violation.acknowledged,
        "acknowledged_by": violation.acknowledged_by,
        "acknowledged_at": _ts(violation.acknowledged_at),
    }


def punch_event_to_dict(event: PunchEvent) -> dict:
    return {
        "punch_id": event.punch_id,
        "kind": event.kind.value,
        "punched_at": _ts(event.punched_at),
        "location": point_to_dict(event.location),
        "is_within_geofence": event.is_within_geofence,
        "geofence_id": event.geofence_id,
        "distance_to_nearest_m": _round(event.distance_to_nearest_m),
        "shift_id": event.shift_id,
        "compliance_status": event.compliance_status.value if event.compliance_status else None,
        "minutes_late": event.minutes_late,
        "minutes_early": event.minutes_early,
        "overtime_minutes": event.overtime_minutes,
        "grace_period_used": event.grace_period_used,
        "note": event.note,
    }
