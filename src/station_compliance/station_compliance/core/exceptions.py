from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``message`` is always safe to show to the officer.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class LocationUnavailable(DomainError):
    """Device location was denied, timed out or is malformed."""


class NoActiveShift(DomainError):
    """Punch-in attempted without an assigned shift."""


class ShiftEnded(DomainError):
    """Punch-in attempted after the shift window closed."""

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class InvalidPunchOrder(DomainError):
    """Punch-out before punch-in, or a rejected double in / double out."""

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        self.result = result


class StoreUnavailable(DomainError):
    """Persistence failed; nothing was written, the whole punch can be retried."""
