from __future__ import annotations

from ...common.datetime_utils import whole_minutes
from ...core.enums import ComplianceStatus
from ..grace import calculate_grace_period
from ..model import ComplianceResult
from .base import ComplianceStrategy, PunchContext


class EarlyArrivalStrategy(ComplianceStrategy):
    """Arriving ahead of the shift is never penalized."""

    def decide(self, ctx: PunchContext) -> ComplianceResult:
        minutes_early = whole_minutes(ctx.punch_time, ctx.shift.shift_start)
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.ON_TIME,
            minutes_early=minutes_early,
            message=f"Punched in {minutes_early} minutes early",
        )


class OnTimeArrivalStrategy(ComplianceStrategy):
    def decide(self, ctx: PunchContext) -> ComplianceResult:
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.ON_TIME,
            message="Punched in on time",
        )


class GracePeriodStrategy(ComplianceStrategy):
    """Late but inside the grace window: on time, minutes kept for information."""

    def decide(self, ctx: PunchContext) -> ComplianceResult:
        grace = calculate_grace_period(ctx.shift.shift_start, ctx.punch_time, ctx.grace_minutes)
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.ON_TIME,
            minutes_late=whole_minutes(ctx.shift.shift_start, ctx.punch_time),
            grace_period_used=True,
            message=f"Within grace period. {grace.minutes_remaining} minutes remaining",
        )


class LateArrivalStrategy(ComplianceStrategy):
    def decide(self, ctx: PunchContext) -> ComplianceResult:
        minutes_late = whole_minutes(ctx.shift.shift_start, ctx.punch_time)
        return ComplianceResult(
            is_valid=True,
            status=ComplianceStatus.LATE,
            minutes_late=minutes_late,
            message=f"Punched in {minutes_late} minutes late",
        )


class AbsentStrategy(ComplianceStrategy):
    """Shift already over: the punch-in itself is invalid."""

    def decide(self, ctx: PunchContext) -> ComplianceResult:
        return ComplianceResult(
            is_valid=False,
            status=ComplianceStatus.ABSENT,
            minutes_late=whole_minutes(ctx.shift.shift_start, ctx.punch_time),
            message="Shift has ended. Cannot punch in.",
        )
