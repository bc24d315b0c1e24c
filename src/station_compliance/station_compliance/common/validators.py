from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_float(value: Any, field_name: str) -> float:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None


def require_in_range(value: float, field_name: str, low: float, high: float) -> float:
    if not low <= value <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return value


def require_positive(value: float, field_name: str) -> float:
    if value <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return value


def require_limit(value: Any, maximum: int) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError("limit must be an integer")
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError("limit must be an integer") from None
    return int(require_in_range(limit, "limit", 1, maximum))
