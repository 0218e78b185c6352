from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ...common.datetime_utils import minutes_between, parse_clock
from ...common.money import ZERO, hours_from_minutes, non_negative, to_decimal
from ...core.constants import LEGACY_STANDARD_HOURS
from ...core.enums import AttendanceMode
from ...shifts.model import Shift
from ..model import Attendance, AttendanceCalculationResult
from .base import AttendanceCalculator


class LegacyCalculator(AttendanceCalculator):
    """Shift-less rule: raw (out - in) against a fixed standard day, no lateness."""

    mode = AttendanceMode.LEGACY

    def __init__(self, standard_hours: Decimal = LEGACY_STANDARD_HOURS):
        self._standard_hours = to_decimal(standard_hours)

    def worked_hours(self, attendance: Attendance) -> Decimal:
        if attendance.total_hours:
            return to_decimal(attendance.total_hours)
        if not attendance.is_complete:
            return ZERO
        minutes = minutes_between(
            parse_clock(attendance.check_in_time, field="check_in_time"),
            parse_clock(attendance.check_out_time, field="check_out_time"),
        )
        return hours_from_minutes(minutes)

    def calculate(
        self,
        attendance: Attendance,
        shift: Optional[Shift] = None,
        *,
        actual_break_minutes: Optional[int] = None,
    ) -> AttendanceCalculationResult:
        hours = self.worked_hours(attendance)
        return AttendanceCalculationResult(
            total_hours=hours,
            effective_hours=hours,
            overtime_hours=non_negative(hours - self._standard_hours),
            late_minutes=0,
            is_full_day=hours >= self._standard_hours,
            mode=self.mode,
        )
