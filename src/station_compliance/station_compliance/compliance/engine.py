from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import EARLY_DEPARTURE_TOLERANCE_MINUTES, GRACE_PERIOD_MINUTES
from ..shifts.model import Shift
from .factory import ComplianceStrategyFactory
from .grace import calculate_grace_period
from .model import ComplianceResult, GracePeriodInfo
from .strategies.base import PunchContext


class ShiftComplianceEngine:
    """Classify punches against a shift window.

    Pure and synchronous: no I/O and no exceptions for well-formed input.
    Invalid punches come back as a ``ComplianceResult`` with ``is_valid=False``.
    """

    def __init__(
        self,
        *,
        grace_minutes: int = GRACE_PERIOD_MINUTES,
        early_departure_tolerance_minutes: int = EARLY_DEPARTURE_TOLERANCE_MINUTES,
        strategy_factory: Optional[ComplianceStrategyFactory] = None,
    ):
        self._grace_minutes = int(grace_minutes)
        self._tolerance_minutes = int(early_departure_tolerance_minutes)
        self._factory = strategy_factory or ComplianceStrategyFactory()

    @property
    def grace_minutes(self) -> int:
        return self._grace_minutes

    def _context(self, shift: Shift, punch_time: datetime, punch_in_time: Optional[datetime] = None) -> PunchContext:
        return PunchContext(
            shift=shift,
            punch_time=punch_time,
            punch_in_time=punch_in_time,
            grace_minutes=self._grace_minutes,
            early_departure_tolerance_minutes=self._tolerance_minutes,
        )

    def evaluate_punch_in(self, shift: Shift, punch_time: datetime) -> ComplianceResult:
        ctx = self._context(shift, punch_time)
        return self._factory.for_punch_in(ctx).decide(ctx)

    def evaluate_punch_out(self, shift: Shift, punch_time: datetime, punch_in_time: datetime) -> ComplianceResult:
        ctx = self._context(shift, punch_time, punch_in_time)
        return self._factory.for_punch_out(ctx).decide(ctx)

    def grace_period_info(self, shift_start: datetime, now: datetime) -> GracePeriodInfo:
        return calculate_grace_period(shift_start, now, self._grace_minutes)
