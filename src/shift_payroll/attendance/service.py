from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.enums import AttendanceMode
from ..core.exceptions import NotFoundError
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .factory import AttendanceCalculatorFactory
from .model import Attendance, AttendanceCalculationResult
from .validation import suggest_shift, validate_attendance

logger = logging.getLogger(__name__)


def calculation_mode(attendance: Attendance) -> AttendanceMode:
    return AttendanceMode.SHIFT_BASED if attendance.has_shift else AttendanceMode.LEGACY


class AttendanceService:
    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        calculator_factory: Optional[AttendanceCalculatorFactory] = None,
    ):
        self._shifts = shifts
        self._factory = calculator_factory or AttendanceCalculatorFactory()

    def resolve_shift(self, attendance: Attendance) -> Optional[Shift]:
        if not attendance.has_shift:
            return None
        shift = self._shifts.get_by_id(attendance.shift_id)
        if not shift:
            raise NotFoundError("Shift not found", entity_id=attendance.shift_id, field="shift_id",
                                context={"attendance_id": attendance.attendance_id})
        return shift

    def calculate(
        self,
        attendance: Attendance,
        *,
        actual_break_minutes: Optional[int] = None,
    ) -> AttendanceCalculationResult:
        shift = self.resolve_shift(attendance)
        calculator = self._factory.for_attendance(attendance, shift)
        logger.debug("[attendance] %s using %s mode", attendance.attendance_id, calculator.mode.value)
        return calculator.calculate(attendance, shift, actual_break_minutes=actual_break_minutes)

    def validate(self, attendance: Attendance, existing: Iterable[Attendance] = ()) -> None:
        validate_attendance(attendance, existing, self.resolve_shift(attendance))

    def suggest_shift(self, attendance: Attendance) -> Optional[Shift]:
        return suggest_shift(attendance, self._shifts.list_for_tenant(attendance.tenant_id))

    def calculation_mode(self, attendance: Attendance) -> AttendanceMode:
        return calculation_mode(attendance)
