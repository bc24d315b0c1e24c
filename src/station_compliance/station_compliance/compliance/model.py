from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ComplianceStatus


@dataclass(frozen=True)
class ComplianceResult:
    """How a punch relates to its shift.

    Invalid punches are returned as data (``is_valid=False``); the caller
    decides whether that rejects the punch.
    """

    is_valid: bool
    status: ComplianceStatus
    message: str
    minutes_late: int = 0
    minutes_early: int = 0
    overtime_minutes: int = 0
    grace_period_used: bool = False


@dataclass(frozen=True)
class GracePeriodInfo:
    is_within_grace_period: bool
    minutes_remaining: int
    grace_period_end: datetime
