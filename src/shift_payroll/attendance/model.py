from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceMode


@dataclass(frozen=True)
class Attendance:
    """Domain entity: one staff member's presence record for a day.

    ``shift_id`` switches the record from the legacy calculation to the
    shift-aware one.
    """

    attendance_id: str
    tenant_id: str
    staff_id: str
    work_date: date
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    is_weekend: bool = False
    total_hours: Optional[Decimal] = None
    shift_id: Optional[str] = None

    @property
    def has_shift(self) -> bool:
        return bool(self.shift_id)

    @property
    def is_complete(self) -> bool:
        return bool(self.check_in_time) and bool(self.check_out_time)


@dataclass(frozen=True)
class AttendanceCalculationResult:
    total_hours: Decimal
    effective_hours: Decimal
    overtime_hours: Decimal
    late_minutes: int
    is_full_day: bool
    mode: AttendanceMode
