from __future__ import annotations

from typing import Optional

from ...common.money import ZERO, hours_from_minutes
from ...core.enums import AttendanceMode
from ...core.exceptions import InvalidAttendanceData
from ...shifts import rules
from ...shifts.model import Shift
from ..model import Attendance, AttendanceCalculationResult
from .base import AttendanceCalculator


class ShiftAwareCalculator(AttendanceCalculator):
    """Worked time minus break, with lateness/overtime from the shift's rules."""

    mode = AttendanceMode.SHIFT_BASED

    def calculate(
        self,
        attendance: Attendance,
        shift: Optional[Shift] = None,
        *,
        actual_break_minutes: Optional[int] = None,
    ) -> AttendanceCalculationResult:
        if shift is None:
            raise InvalidAttendanceData(
                "Shift-aware calculation requires the linked shift",
                entity_id=attendance.attendance_id,
                field="shift_id",
                context={"shift_id": attendance.shift_id},
            )

        if not attendance.is_complete:
            late = rules.late_minutes(shift, attendance.check_in_time) if attendance.check_in_time else 0
            return AttendanceCalculationResult(
                total_hours=ZERO,
                effective_hours=ZERO,
                overtime_hours=ZERO,
                late_minutes=late,
                is_full_day=False,
                mode=self.mode,
            )

        work = rules.calculate_work_time(
            shift, attendance.check_in_time, attendance.check_out_time, actual_break_minutes
        )
        return AttendanceCalculationResult(
            total_hours=hours_from_minutes(work.total_minutes),
            effective_hours=hours_from_minutes(work.effective_minutes),
            overtime_hours=rules.overtime_hours(shift, work.effective_minutes),
            late_minutes=work.late_minutes,
            is_full_day=rules.is_full_day(shift, work.effective_minutes),
            mode=self.mode,
        )
