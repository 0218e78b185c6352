from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import AttendanceMode
from ...shifts.model import Shift
from ..model import Attendance, AttendanceCalculationResult


class AttendanceCalculator(ABC):
    """Strategy Pattern: encapsulate how one day's worked hours are derived."""

    mode: AttendanceMode

    @abstractmethod
    def calculate(
        self,
        attendance: Attendance,
        shift: Optional[Shift] = None,
        *,
        actual_break_minutes: Optional[int] = None,
    ) -> AttendanceCalculationResult:
        raise NotImplementedError
