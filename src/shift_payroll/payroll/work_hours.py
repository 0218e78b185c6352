"""Normalise attendance and staff-shift records into per-day worked hours."""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Mapping, Optional

from ..attendance.factory import AttendanceCalculatorFactory
from ..attendance.model import Attendance
from ..common.datetime_utils import is_weekend
from ..common.money import ZERO, hours_from_minutes, non_negative
from ..shifts.model import Shift
from ..staff_shifts import lifecycle
from ..staff_shifts.model import StaffShift
from .model import WorkDay


def from_attendance(
    records: Iterable[Attendance],
    shifts: Optional[Mapping[str, Shift]] = None,
    *,
    factory: Optional[AttendanceCalculatorFactory] = None,
) -> List[WorkDay]:
    factory = factory or AttendanceCalculatorFactory()
    shifts = shifts or {}
    days = []
    for record in records:
        shift = shifts.get(record.shift_id) if record.shift_id else None
        result = factory.for_attendance(record, shift).calculate(record, shift)
        days.append(WorkDay(work_date=record.work_date, hours=result.effective_hours, is_weekend=record.is_weekend))
    return days


def from_staff_shifts(
    assignments: Iterable[StaffShift],
    shifts: Optional[Mapping[str, Shift]] = None,
) -> List[WorkDay]:
    """Completed assignments only; the weekend flag comes from the calendar."""
    shifts = shifts or {}
    days = []
    for assignment in assignments:
        if not assignment.is_completed:
            continue
        shift = shifts.get(assignment.shift_id)
        if shift is not None:
            minutes = lifecycle.calculate_work_time(assignment, shift).effective_minutes
        else:
            minutes = (assignment.total_worked_minutes or 0) - (assignment.actual_break_duration_minutes or 0)
        days.append(WorkDay(
            work_date=assignment.work_date,
            hours=non_negative(hours_from_minutes(minutes)),
            is_weekend=is_weekend(assignment.work_date),
        ))
    return days


def total_hours(days: Iterable[WorkDay]) -> Decimal:
    return sum((day.hours for day in days), ZERO)
