from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_role, current_user_id, error_response
from ..common.serializers import violation_to_dict
from ..container import Container
from ..core.constants import DEFAULT_RECENT_VIOLATIONS_LIMIT
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/violations", methods=["GET"], endpoint="api_admin_violations")
    @admin_required
    def api_admin_violations():
        limit = request.args.get("limit", default=DEFAULT_RECENT_VIOLATIONS_LIMIT, type=int)
        try:
            rows = container.violation_recorder.list_recent(current_role=current_role(), limit=limit)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "violations": [violation_to_dict(v) for v in rows]})

    @app.route(
        "/api/admin/violations/<int:violation_id>/acknowledge",
        methods=["POST"],
        endpoint="api_admin_acknowledge_violation",
    )
    @admin_required
    def api_admin_acknowledge_violation(violation_id: int):
        try:
            container.violation_recorder.acknowledge(
                violation_id,
                current_user_id(),
                current_role=current_role(),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Violation acknowledged"})
