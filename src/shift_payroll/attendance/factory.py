from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from ..core.constants import LEGACY_STANDARD_HOURS
from ..shifts.model import Shift
from .model import Attendance
from .strategies.base import AttendanceCalculator
from .strategies.legacy_strategy import LegacyCalculator
from .strategies.shift_strategy import ShiftAwareCalculator


@dataclass
class AttendanceCalculatorFactory:
    """Factory Pattern: choose the calculation strategy for a record."""

    standard_hours: Decimal = LEGACY_STANDARD_HOURS
    _legacy: LegacyCalculator = field(init=False, repr=False)
    _shift_aware: ShiftAwareCalculator = field(init=False, repr=False)

    def __post_init__(self):
        self._legacy = LegacyCalculator(self.standard_hours)
        self._shift_aware = ShiftAwareCalculator()

    def for_attendance(self, attendance: Attendance, shift: Optional[Shift]) -> AttendanceCalculator:
        if attendance.has_shift and shift is not None:
            return self._shift_aware
        return self._legacy
