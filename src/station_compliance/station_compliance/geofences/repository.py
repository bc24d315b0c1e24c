from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Boundary, Geofence


class GeofenceRepository(Protocol):
    def list_active(self, station_id: Optional[str] = None) -> Sequence[Geofence]:
        """Active geofences in definition order (oldest first)."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Geofence]:
        raise NotImplementedError

    def get_by_id(self, geofence_id: int) -> Optional[Geofence]:
        raise NotImplementedError

    def create(
        self,
        *,
        station_id: str,
        station_name: str,
        boundary: Boundary,
        created_by: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        geofence_id: int,
        station_id: str,
        station_name: str,
        boundary: Boundary,
    ) -> bool:
        raise NotImplementedError

    def deactivate(self, *, geofence_id: int) -> bool:
        """Soft delete: historical punches keep referencing the row."""

        raise NotImplementedError
