from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_minutes, now_local, parse_iso_date
from ..common.http import current_user_id, error_response, login_required, unexpected_error_response
from ..common.serializers import (
    compliance_to_dict,
    grace_to_dict,
    punch_event_to_dict,
    shift_to_dict,
    validation_to_dict,
    violation_to_dict,
)
from ..container import Container
from ..core.constants import DEFAULT_USER_VIOLATIONS_LIMIT
from ..core.enums import PunchKind
from ..core.exceptions import DomainError, InvalidPunchOrder, ShiftEnded, ValidationError
from .location import FixedLocationProvider


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @app.route("/api/punch", methods=["POST"], endpoint="api_punch")
    @login_required
    def api_punch():
        data = _payload()
        user_id = current_user_id()
        try:
            raw_kind = str(data.get("kind") or "").strip().lower()
            if raw_kind:
                if raw_kind not in {k.value for k in PunchKind}:
                    raise ValidationError("kind must be 'in' or 'out'")
                kind = PunchKind(raw_kind)
            else:
                kind = container.state_tracker.next_kind(user_id)

            outcome = container.punch_orchestrator.record_punch(
                user_id,
                kind,
                location=FixedLocationProvider(data.get("latitude"), data.get("longitude")),
            )
        except (ShiftEnded, InvalidPunchOrder) as e:
            return error_response(e, compliance=compliance_to_dict(e.result))
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("recording punch")

        message = outcome.compliance.message if outcome.compliance else f"Punched {kind.value}"
        return jsonify(
            {
                "success": True,
                "message": message,
                "punch": punch_event_to_dict(outcome.event),
                "geofence": validation_to_dict(outcome.geofence),
                "compliance": compliance_to_dict(outcome.compliance),
                "violation": violation_to_dict(outcome.violation),
            }
        ), 201

    @app.route("/api/punch/state", methods=["GET"], endpoint="api_punch_state")
    @login_required
    def api_punch_state():
        try:
            state = container.state_tracker.current_state(current_user_id())
        except DomainError as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "is_punched_in": state.is_punched_in,
                "last_punch_time": state.last_punch_time.isoformat(timespec="seconds") if state.last_punch_time else None,
                "last_punch_kind": state.last_punch_kind.value if state.last_punch_kind else None,
                "next_kind": state.next_kind.value,
            }
        )

    @app.route("/api/punch/history", methods=["GET"], endpoint="api_punch_history")
    @login_required
    def api_punch_history():
        try:
            raw_day = request.args.get("date")
            day = parse_iso_date(raw_day) if raw_day else now_local().date()
        except ValueError:
            return jsonify({"success": False, "message": "date must be YYYY-MM-DD"}), 400

        try:
            events = container.punch_orchestrator.history(current_user_id(), day)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "date": day.isoformat(), "punches": [punch_event_to_dict(e) for e in events]})

    @app.route("/api/shifts/current", methods=["GET"], endpoint="api_current_shift")
    @login_required
    def api_current_shift():
        user_id = current_user_id()
        now = now_local()
        try:
            current = container.shift_service.get_current_shift(user_id, now)
            upcoming = None if current else container.shift_service.get_upcoming_shift(user_id, now)
        except DomainError as e:
            return error_response(e)

        body = {
            "success": True,
            "current_shift": shift_to_dict(current),
            "upcoming_shift": shift_to_dict(upcoming),
            "grace_period": None,
            "starts_in": None,
        }
        if current:
            body["grace_period"] = grace_to_dict(container.compliance_engine.grace_period_info(current.shift_start, now))
        if upcoming:
            body["starts_in"] = format_minutes(upcoming.minutes_until_start(now))
        return jsonify(body)

    @app.route("/api/location/ping", methods=["POST"], endpoint="api_location_ping")
    @login_required
    def api_location_ping():
        data = _payload()
        try:
            point = FixedLocationProvider(data.get("latitude"), data.get("longitude")).get_current_position()
            violation = container.violation_recorder.check_location(current_user_id(), point)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("checking location")

        return jsonify({"success": True, "violation": violation_to_dict(violation)})

    @app.route("/api/violations/mine", methods=["GET"], endpoint="api_my_violations")
    @login_required
    def api_my_violations():
        limit = request.args.get("limit", default=DEFAULT_USER_VIOLATIONS_LIMIT, type=int)
        try:
            rows = container.violation_recorder.list_for_user(current_user_id(), limit)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "violations": [violation_to_dict(v) for v in rows]})
