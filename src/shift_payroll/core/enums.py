from __future__ import annotations

from enum import Enum


class SalaryType(str, Enum):
    """How the basic salary amount is expressed."""

    MONTHLY = "MONTHLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"


class OvertimeCalculationType(str, Enum):
    """Per-day (HOURLY) or per-month (MONTHLY) overtime threshold."""

    HOURLY = "HOURLY"
    MONTHLY = "MONTHLY"


class CalculationMode(str, Enum):
    """Which rule set produced a payroll result."""

    MANUAL = "MANUAL"
    ATTENDANCE_BASED = "ATTENDANCE_BASED"
    HYBRID = "HYBRID"
    DEFAULT = "DEFAULT"


class AttendanceMode(str, Enum):
    LEGACY = "legacy"
    SHIFT_BASED = "shift-based"


class StaffShiftState(str, Enum):
    """Check-in/check-out progress of one assignment."""

    UNSTARTED = "UNSTARTED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class PeriodState(str, Enum):
    OPEN = "OPEN"
    FINALIZED = "FINALIZED"
