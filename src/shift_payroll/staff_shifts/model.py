from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import StaffShiftState


@dataclass(frozen=True)
class StaffShift:
    """Domain entity: one staff member assigned to one shift on one date."""

    staff_shift_id: str
    tenant_id: str
    staff_id: str
    shift_id: str
    work_date: date
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    actual_break_duration_minutes: Optional[int] = None
    total_worked_minutes: Optional[int] = None
    late_minutes: int = 0
    overtime_minutes: int = 0
    is_completed: bool = False
    notes: Optional[str] = None

    @property
    def state(self) -> StaffShiftState:
        if not self.check_in_time:
            return StaffShiftState.UNSTARTED
        if self.check_out_time or self.is_completed:
            return StaffShiftState.COMPLETED
        return StaffShiftState.ACTIVE

    @property
    def can_check_in(self) -> bool:
        return self.state == StaffShiftState.UNSTARTED

    @property
    def can_check_out(self) -> bool:
        return self.state == StaffShiftState.ACTIVE


@dataclass(frozen=True)
class AssignmentRequest:
    tenant_id: str
    staff_id: str
    shift_id: str
    work_date: date
    notes: Optional[str] = None


@dataclass(frozen=True)
class WorkSummary:
    total_shifts: int
    completed_shifts: int
    total_worked_hours: Decimal
    total_late_minutes: int
    total_overtime_minutes: int
    average_work_hours: Decimal
