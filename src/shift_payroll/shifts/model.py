from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.constants import (
    DEFAULT_EARLY_CHECK_IN_MINUTES,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_MAX_WORKING_HOURS,
    DEFAULT_MIN_WORKING_HOURS,
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_SHIFT_COLOR,
)


@dataclass(frozen=True)
class Shift:
    """Domain entity: a reusable shift template of one tenant.

    ``start_time``/``end_time`` are "HH:mm"; ``end_time < start_time`` means the
    shift runs past midnight.
    """

    shift_id: str
    tenant_id: str
    name: str
    start_time: str
    end_time: str
    is_active: bool = True
    calculate_before_start_time: bool = True
    has_break_time: bool = False
    break_duration_minutes: int = 0
    min_working_hours: Decimal = DEFAULT_MIN_WORKING_HOURS
    max_working_hours: Decimal = DEFAULT_MAX_WORKING_HOURS
    overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES
    early_check_in_allowed_minutes: int = DEFAULT_EARLY_CHECK_IN_MINUTES
    color: str = DEFAULT_SHIFT_COLOR
    description: Optional[str] = None


@dataclass(frozen=True)
class WorkTimeResult:
    """Derived work time of one check-in/check-out pair against a shift."""

    total_minutes: int
    effective_minutes: int
    late_minutes: int
    overtime_minutes: int
