from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...shifts.model import Shift
from ..model import ComplianceResult


@dataclass(frozen=True)
class PunchContext:
    shift: Shift
    punch_time: datetime
    grace_minutes: int
    early_departure_tolerance_minutes: int
    punch_in_time: Optional[datetime] = None


class ComplianceStrategy(ABC):
    """Strategy Pattern: one rule of the punch classification."""

    @abstractmethod
    def decide(self, ctx: PunchContext) -> ComplianceResult:
        raise NotImplementedError
