from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from ..common.datetime_utils import whole_minutes
from .strategies.base import ComplianceStrategy, PunchContext
from .strategies.punch_in import (
    AbsentStrategy,
    EarlyArrivalStrategy,
    GracePeriodStrategy,
    LateArrivalStrategy,
    OnTimeArrivalStrategy,
)
from .strategies.punch_out import (
    EarlyDepartureStrategy,
    OnTimeDepartureStrategy,
    OutOfOrderStrategy,
    OvertimeStrategy,
)


@dataclass
class ComplianceStrategyFactory:
    """Factory Pattern: choose the strategy for a punch; rules are checked in order."""

    def for_punch_in(self, ctx: PunchContext) -> ComplianceStrategy:
        start = ctx.shift.shift_start
        if ctx.punch_time < start:
            return EarlyArrivalStrategy()
        if ctx.punch_time == start:
            return OnTimeArrivalStrategy()
        if ctx.punch_time <= start + timedelta(minutes=ctx.grace_minutes):
            return GracePeriodStrategy()
        if ctx.punch_time <= ctx.shift.shift_end:
            return LateArrivalStrategy()
        return AbsentStrategy()

    def for_punch_out(self, ctx: PunchContext) -> ComplianceStrategy:
        if ctx.punch_in_time is not None and ctx.punch_time < ctx.punch_in_time:
            return OutOfOrderStrategy()

        end = ctx.shift.shift_end
        if ctx.punch_time < end:
            if whole_minutes(ctx.punch_time, end) > ctx.early_departure_tolerance_minutes:
                return EarlyDepartureStrategy()
            return OnTimeDepartureStrategy()
        if ctx.punch_time == end:
            return OnTimeDepartureStrategy()
        return OvertimeStrategy()
