from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``entity_id`` and ``field`` point at the offending record/attribute and
    ``context`` carries the boundary values, so callers can build their own
    user-facing message.
    """

    def __init__(
        self,
        message: str,
        *,
        entity_id: Optional[Any] = None,
        field: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id
        self.field = field
        self.context = dict(context or {})

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "entity_id": self.entity_id,
            "field": self.field,
            "context": self.context,
        }


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record cannot be resolved by a repository."""


class InvalidTimeFormat(ValidationError):
    """Clock value is not a valid "HH:mm" string."""


class InvalidAmount(ValidationError):
    """Negative or otherwise unusable money/hour amount."""


class InvalidShiftConfig(ValidationError):
    pass


class InvalidAttendanceData(ValidationError):
    pass


class AttendanceOutOfWindow(ValidationError):
    pass


class DuplicateAttendance(ValidationError):
    pass


class OverlappingAssignment(ValidationError):
    pass


class InvalidStateTransition(DomainError):
    """Check-in/check-out attempted from the wrong assignment state."""


class InvalidSalaryConfig(ValidationError):
    pass


class InvalidPayrollSetting(ValidationError):
    pass


class InvalidPeriod(ValidationError):
    """Period dates break the span/future-date rules."""


class PeriodOverlap(ValidationError):
    pass


class PeriodNotFinalizable(DomainError):
    pass


class PeriodLocked(DomainError):
    """Finalized period cannot be edited or recalculated."""


class DetailLocked(DomainError):
    """Paid payroll detail cannot be amended."""
