from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_role, current_user_id, error_response, unexpected_error_response
from ..common.serializers import geofence_to_dict
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/geofences", methods=["GET"], endpoint="api_admin_geofences")
    @admin_required
    def api_admin_geofences():
        try:
            if request.args.get("active") == "1":
                zones = container.geofence_service.list_active(request.args.get("station_id") or None)
            else:
                zones = container.geofence_service.list_all(current_role=current_role())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "geofences": [geofence_to_dict(z) for z in zones]})

    @app.route("/api/admin/geofences", methods=["POST"], endpoint="api_admin_create_geofence")
    @admin_required
    def api_admin_create_geofence():
        data = request.get_json(silent=True) or {}
        try:
            geofence_id = container.geofence_service.create(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                station_id=data.get("station_id", ""),
                station_name=data.get("station_name", ""),
                boundary=data.get("boundary"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("creating geofence")
        return jsonify({"success": True, "message": "Geofence created", "geofence_id": geofence_id}), 201

    @app.route("/api/admin/geofences/<int:geofence_id>", methods=["PUT"], endpoint="api_admin_update_geofence")
    @admin_required
    def api_admin_update_geofence(geofence_id: int):
        data = request.get_json(silent=True) or {}
        try:
            zone = container.geofence_service.update(
                current_role=current_role(),
                geofence_id=geofence_id,
                station_id=data.get("station_id"),
                station_name=data.get("station_name"),
                boundary=data.get("boundary"),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("updating geofence")
        return jsonify({"success": True, "message": "Geofence updated", "geofence": geofence_to_dict(zone)})

    @app.route(
        "/api/admin/geofences/<int:geofence_id>/deactivate",
        methods=["POST"],
        endpoint="api_admin_deactivate_geofence",
    )
    @admin_required
    def api_admin_deactivate_geofence(geofence_id: int):
        try:
            container.geofence_service.deactivate(current_role=current_role(), geofence_id=geofence_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Geofence deactivated"})
