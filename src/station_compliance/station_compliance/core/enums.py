from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role forwarded by the upstream auth layer."""

    ADMIN = "admin"
    STAFF = "staff"


class PunchKind(str, Enum):
    IN = "in"
    OUT = "out"


class ComplianceStatus(str, Enum):
    """Classification of a punch relative to its shift, as stored in the DB."""

    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"
    EARLY_DEPARTURE = "early_departure"
    OVERTIME = "overtime"


class SequencePolicy(str, Enum):
    """What to do with a double in / double out on the same day."""

    WARN = "warn"
    REJECT = "reject"
