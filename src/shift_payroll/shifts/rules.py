"""Shift rules: durations, lateness, overtime and time-window overlap.

All clock arithmetic happens on minute-of-day integers; a window whose end is
before its start wraps past midnight.
"""
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from ..common.datetime_utils import format_clock, minutes_between, parse_clock, signed_offset
from ..common.money import ZERO, hours_from_minutes, minutes_from_hours, non_negative
from ..core.constants import (
    CHECK_IN_LATE_WINDOW_MINUTES,
    MAX_SHIFT_MINUTES,
    MIN_SHIFT_MINUTES,
    MINUTES_PER_DAY,
)
from ..core.exceptions import AttendanceOutOfWindow, InvalidShiftConfig, InvalidTimeFormat
from .model import Shift, WorkTimeResult


def _window(shift: Shift) -> Tuple[int, int]:
    return parse_clock(shift.start_time, field="start_time"), parse_clock(shift.end_time, field="end_time")


def is_overnight(shift: Shift) -> bool:
    start, end = _window(shift)
    return end < start


def duration_minutes(shift: Shift) -> int:
    start, end = _window(shift)
    if end < start:
        return (MINUTES_PER_DAY - start) + end
    return end - start


def break_minutes(shift: Shift) -> int:
    return int(shift.break_duration_minutes) if shift.has_break_time else 0


def effective_working_minutes(shift: Shift) -> int:
    return duration_minutes(shift) - break_minutes(shift)


def effective_working_hours(shift: Shift) -> Decimal:
    return hours_from_minutes(effective_working_minutes(shift))


def is_time_within(shift: Shift, clock: str) -> bool:
    check = parse_clock(clock)
    start, end = _window(shift)
    if end < start:
        return check >= start or check <= end
    return start <= check <= end


def late_minutes(shift: Shift, check_in: str) -> int:
    """Minutes late, or 0 while still inside the grace period.

    A check-in up to ``early_check_in_allowed_minutes`` before the start counts
    as early, even across midnight; anything else is measured forward from the
    start, so long shifts report lateness past the twelfth hour.
    """
    start, _ = _window(shift)
    forward = (parse_clock(check_in, field="check_in_time") - start) % MINUTES_PER_DAY
    if MINUTES_PER_DAY - forward <= int(shift.early_check_in_allowed_minutes):
        return 0
    if forward <= int(shift.late_threshold_minutes):
        return 0
    return forward


def overtime_hours(shift: Shift, worked_minutes: int) -> Decimal:
    return non_negative(hours_from_minutes(worked_minutes) - Decimal(shift.max_working_hours))


def overtime_minutes(shift: Shift, worked_minutes: int) -> int:
    return minutes_from_hours(overtime_hours(shift, worked_minutes))


def is_full_day(shift: Shift, worked_minutes: int) -> bool:
    return hours_from_minutes(worked_minutes) >= Decimal(shift.min_working_hours)


def _segments(start: int, end: int) -> List[Tuple[int, int]]:
    if end > start:
        return [(start, end)]
    if end < start:
        return [(start, MINUTES_PER_DAY), (0, end)]
    return []


def overlaps(a: Shift, b: Shift) -> bool:
    """True when the two daily windows share at least one minute.

    Windows are half-open, so a shift ending at 16:00 does not overlap one
    starting at 16:00.
    """
    a_start, a_end = _window(a)
    b_start, b_end = _window(b)
    if (a_start, a_end) == (b_start, b_end):
        return True
    for s1, e1 in _segments(a_start, a_end):
        for s2, e2 in _segments(b_start, b_end):
            if max(s1, s2) < min(e1, e2):
                return True
    return False


def check_in_window(shift: Shift, check_in: str) -> None:
    """Reject shift-linked check-ins far from the shift start."""
    start, _ = _window(shift)
    offset = signed_offset(parse_clock(check_in, field="check_in_time"), start)
    early = int(shift.early_check_in_allowed_minutes)
    if offset < -early or offset > CHECK_IN_LATE_WINDOW_MINUTES:
        raise AttendanceOutOfWindow(
            f"Check-in time must be within {early} minutes before and 4 hours after shift start time",
            entity_id=shift.shift_id,
            field="check_in_time",
            context={
                "check_in_time": check_in,
                "earliest": format_clock(start - early),
                "latest": format_clock(start + CHECK_IN_LATE_WINDOW_MINUTES),
            },
        )


def _invalid(shift: Shift, message: str, field: str, **context) -> InvalidShiftConfig:
    return InvalidShiftConfig(message, entity_id=shift.shift_id, field=field, context=context)


def validate_shift(shift: Shift) -> None:
    if not shift.name or not shift.name.strip():
        raise _invalid(shift, "Shift name must not be empty", "name")

    try:
        duration = duration_minutes(shift)
    except InvalidTimeFormat as exc:
        raise _invalid(shift, exc.message, exc.field or "time", **exc.context) from exc

    if Decimal(shift.min_working_hours) <= ZERO:
        raise _invalid(shift, "minWorkingHours must be greater than 0", "min_working_hours",
                       value=str(shift.min_working_hours))
    if Decimal(shift.max_working_hours) < Decimal(shift.min_working_hours):
        raise _invalid(shift, "maxWorkingHours must be >= minWorkingHours", "max_working_hours",
                       value=str(shift.max_working_hours), min=str(shift.min_working_hours))
    if Decimal(shift.overtime_multiplier) <= ZERO:
        raise _invalid(shift, "overtimeMultiplier must be greater than 0", "overtime_multiplier",
                       value=str(shift.overtime_multiplier))
    if int(shift.late_threshold_minutes) < 0:
        raise _invalid(shift, "lateThreshold must be >= 0", "late_threshold_minutes",
                       value=shift.late_threshold_minutes)
    if int(shift.early_check_in_allowed_minutes) < 0:
        raise _invalid(shift, "earlyCheckInAllowed must be >= 0", "early_check_in_allowed_minutes",
                       value=shift.early_check_in_allowed_minutes)
    if int(shift.break_duration_minutes) < 0:
        raise _invalid(shift, "breakDuration must be >= 0", "break_duration_minutes",
                       value=shift.break_duration_minutes)

    if duration < MIN_SHIFT_MINUTES or duration > MAX_SHIFT_MINUTES:
        raise _invalid(shift, "Shift duration must be between 1 and 24 hours", "end_time",
                       duration_minutes=duration, min=MIN_SHIFT_MINUTES, max=MAX_SHIFT_MINUTES)

    if int(shift.break_duration_minutes) >= duration:
        raise _invalid(shift, "Break duration cannot exceed shift duration", "break_duration_minutes",
                       value=shift.break_duration_minutes, duration_minutes=duration)

    effective = effective_working_hours(shift)
    if Decimal(shift.min_working_hours) > effective:
        raise _invalid(shift, "Minimum working hours cannot exceed effective working hours", "min_working_hours",
                       value=str(shift.min_working_hours), effective_hours=str(effective))


def calculate_work_time(
    shift: Shift,
    check_in: Optional[str],
    check_out: Optional[str],
    actual_break_minutes: Optional[int] = None,
) -> WorkTimeResult:
    if not check_in or not check_out:
        return WorkTimeResult(total_minutes=0, effective_minutes=0, late_minutes=0, overtime_minutes=0)

    total = minutes_between(parse_clock(check_in, field="check_in_time"), parse_clock(check_out, field="check_out_time"))
    breaks = actual_break_minutes if actual_break_minutes is not None else break_minutes(shift)
    effective = max(0, total - int(breaks))

    return WorkTimeResult(
        total_minutes=total,
        effective_minutes=effective,
        late_minutes=late_minutes(shift, check_in),
        overtime_minutes=overtime_minutes(shift, effective),
    )
