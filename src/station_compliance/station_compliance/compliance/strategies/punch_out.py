from __future__ import annotations

from ...common.datetime_utils import whole_minutes
from ...core.enums import ComplianceStatus
from ..model import ComplianceResult
from .base import ComplianceStrategy, PunchContext


class OutOfOrderStrategy(ComplianceStrategy):
    """Punch-out stamped before its punch-in.

    Status is a placeholder; ``is_valid=False`` is what callers act on.
    """

    def decide(self, ctx: PunchContext) -> ComplianceResult:
        return ComplianceResult(
            is_valid=False,
            status=ComplianceStatus.ON_TIME,
            message="Cannot punch out before punch in time",
        )


class OnTimeDepartureStrategy(ComplianceStrategy):
    def decide(self, ctx: PunchContext) -> ComplianceResult:
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.ON_TIME,
            message="Punched out on time",
        )


class EarlyDepartureStrategy(ComplianceStrategy):
    """Left before the shift end by more than the tolerance: valid but flagged."""

    def decide(self, ctx: PunchContext) -> ComplianceResult:
        minutes_early = whole_minutes(ctx.punch_time, ctx.shift.shift_end)
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.EARLY_DEPARTURE,
            minutes_early=minutes_early,
            message=f"Early departure: {minutes_early} minutes before shift end",
        )


class OvertimeStrategy(ComplianceStrategy):
    def decide(self, ctx: PunchContext) -> ComplianceResult:
        overtime_minutes = whole_minutes(ctx.shift.shift_end, ctx.punch_time)
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.OVERTIME,
            overtime_minutes=overtime_minutes,
            message=f"Overtime: {overtime_minutes} minutes",
        )
