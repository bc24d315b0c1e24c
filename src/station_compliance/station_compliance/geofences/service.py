from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Geofence, boundary_from_dict
from .repository import GeofenceRepository

logger = logging.getLogger(__name__)


class GeofenceService:
    """Administrator workflows for station boundaries."""

    def __init__(self, geofences: GeofenceRepository):
        self._geofences = geofences

    def list_active(self, station_id: Optional[str] = None) -> Sequence[Geofence]:
        return self._geofences.list_active(station_id)

    def list_all(self, *, current_role: Role) -> Sequence[Geofence]:
        self._require_admin(current_role)
        return self._geofences.list_all()

    def create(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        station_id: str,
        station_name: str,
        boundary: Any,
    ) -> int:
        self._require_admin(current_role)

        station_id = require_non_empty(station_id, "station_id")
        station_name = require_non_empty(station_name, "station_name")
        parsed = boundary_from_dict(boundary)

        geofence_id = self._geofences.create(
            station_id=station_id,
            station_name=station_name,
            boundary=parsed,
            created_by=int(admin_user_id),
        )
        logger.info("geofence %s created for station %s by admin %s", geofence_id, station_id, admin_user_id)
        return geofence_id

    def update(
        self,
        *,
        current_role: Role,
        geofence_id: int,
        station_id: Optional[str] = None,
        station_name: Optional[str] = None,
        boundary: Any = None,
    ) -> Geofence:
        self._require_admin(current_role)

        existing = self._geofences.get_by_id(int(geofence_id))
        if not existing:
            raise ValidationError("Geofence not found")

        updated = Geofence(
            geofence_id=existing.geofence_id,
            station_id=require_non_empty(station_id, "station_id") if station_id is not None else existing.station_id,
            station_name=(
                require_non_empty(station_name, "station_name") if station_name is not None else existing.station_name
            ),
            boundary=boundary_from_dict(boundary) if boundary is not None else existing.boundary,
            is_active=existing.is_active,
            created_by=existing.created_by,
        )
        if not self._geofences.update(
            geofence_id=updated.geofence_id,
            station_id=updated.station_id,
            station_name=updated.station_name,
            boundary=updated.boundary,
        ):
            raise ValidationError("Geofence update failed")
        return updated

    def deactivate(self, *, current_role: Role, geofence_id: int) -> None:
        self._require_admin(current_role)

        if not self._geofences.deactivate(geofence_id=int(geofence_id)):
            raise ValidationError("Geofence not found or already inactive")
        logger.info("geofence %s deactivated", geofence_id)

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can manage geofences")
