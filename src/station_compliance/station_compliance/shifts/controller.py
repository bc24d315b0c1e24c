from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import admin_required, current_role, current_user_id, error_response, unexpected_error_response
from ..container import Container
from ..core.exceptions import DomainError, ValidationError


def _parse_user_ids(raw) -> list[int]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("user_ids must be a list")
    try:
        return [int(u) for u in raw]
    except (TypeError, ValueError):
        raise ValidationError("user_ids must contain integers") from None


def register(app: Flask, container: Container) -> None:
    def _parse_ts(value, field_name: str):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field_name} is required")
        try:
            return parse_iso_datetime(value)
        except ValueError as e:
            raise ValidationError(f"{field_name} must be an ISO-8601 timestamp") from e

    @app.route("/api/admin/shifts", methods=["POST"], endpoint="api_admin_create_shift")
    @admin_required
    def api_admin_create_shift():
        data = request.get_json(silent=True) or {}
        try:
            shift_id = container.shift_service.create_shift(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                station_id=data.get("station_id", ""),
                shift_name=data.get("shift_name", ""),
                shift_start=_parse_ts(data.get("shift_start"), "shift_start"),
                shift_end=_parse_ts(data.get("shift_end"), "shift_end"),
                user_ids=_parse_user_ids(data.get("user_ids")),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("creating shift")
        return jsonify({"success": True, "message": "Shift created", "shift_id": shift_id}), 201

    @app.route("/api/admin/shifts/<int:shift_id>/assign", methods=["POST"], endpoint="api_admin_assign_shift")
    @admin_required
    def api_admin_assign_shift(shift_id: int):
        data = request.get_json(silent=True) or {}
        try:
            container.shift_service.assign_users(
                current_role=current_role(),
                shift_id=shift_id,
                user_ids=_parse_user_ids(data.get("user_ids")),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Shift assignments updated"})
