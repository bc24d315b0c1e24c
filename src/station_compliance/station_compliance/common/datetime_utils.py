from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2026-02-01T09:00`` or with seconds)."""
    return datetime.fromisoformat(value.strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open ``[00:00, next day 00:00)`` window of a server-local calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def whole_minutes(earlier: datetime, later: datetime) -> int:
    """Minutes from ``earlier`` to ``later``, floored (negative when reversed)."""
    return int((later - earlier).total_seconds() // 60)


def format_minutes(minutes: int) -> str:
    """Human countdown text: ``1 minute``, ``45 minutes``, ``2 hours 5 minutes``."""
    minutes = max(int(minutes), 0)
    if minutes < 60:
        return f"{minutes} minute{'' if minutes == 1 else 's'}"

    hours, mins = divmod(minutes, 60)
    text = f"{hours} hour{'' if hours == 1 else 's'}"
    if mins:
        text += f" {mins} minute{'' if mins == 1 else 's'}"
    return text
