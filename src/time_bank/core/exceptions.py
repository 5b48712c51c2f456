from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormatError(ValidationError):
    """A punch field is not a valid HH:MM token, or an exit precedes its entry."""


class InvalidPeriodTokenError(ValidationError):
    """A year-month token could not be parsed."""


class InvalidAdjustmentError(ValidationError):
    """A ledger entry is malformed (zero minutes, bad kind, ...)."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class EmployeeNotFoundError(NotFoundError):
    pass


class LockedPeriodError(DomainError):
    """Raised when a mutation targets a CLOSED period."""


class InvalidTransitionError(DomainError):
    """Raised on an illegal period state change."""
