from __future__ import annotations

from datetime import datetime, timedelta

from ..common.datetime_utils import whole_minutes
from .model import GracePeriodInfo


def calculate_grace_period(shift_start: datetime, now: datetime, grace_minutes: int) -> GracePeriodInfo:
    """Countdown data for the punch-in button; remaining minutes never drop below zero."""
    grace_period_end = shift_start + timedelta(minutes=grace_minutes)
    return GracePeriodInfo(
        is_within_grace_period=now <= grace_period_end,
        minutes_remaining=max(0, whole_minutes(now, grace_period_end)),
        grace_period_end=grace_period_end,
    )
