from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence

from ..common.bulk import BulkResult, run_bulk
from ..common.datetime_utils import today_local
from ..common.money import ZERO, hours_from_minutes, round_money
from ..core.exceptions import NotFoundError, OverlappingAssignment, ValidationError
from ..shifts import rules
from ..shifts.model import Shift, WorkTimeResult
from ..shifts.repository import ShiftRepository
from . import lifecycle
from .model import AssignmentRequest, StaffShift, WorkSummary
from .repository import StaffShiftRepository

logger = logging.getLogger(__name__)


class StaffShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        staff_shifts: StaffShiftRepository,
        *,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
        today: Callable[[], date] = today_local,
    ):
        self._shifts = shifts
        self._staff_shifts = staff_shifts
        self._id_factory = id_factory
        self._today = today

    def _shift(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found", entity_id=shift_id, field="shift_id")
        return shift

    def _ensure_no_overlap(self, staff_id: str, work_date: date, shift: Shift,
                           pending: Sequence[StaffShift] = ()) -> None:
        existing = list(self._staff_shifts.list_for_staff_and_date(staff_id=staff_id, work_date=work_date))
        existing += [a for a in pending if a.staff_id == staff_id and a.work_date == work_date]
        for other in existing:
            other_shift = self._shift(other.shift_id)
            if rules.overlaps(shift, other_shift):
                raise OverlappingAssignment(
                    "Staff already has an overlapping shift on this date",
                    entity_id=staff_id,
                    field="shift_id",
                    context={
                        "work_date": work_date.isoformat(),
                        "shift_id": shift.shift_id,
                        "conflicting_shift_id": other_shift.shift_id,
                        "conflicting_assignment_id": other.staff_shift_id,
                    },
                )

    def assign(
        self,
        *,
        tenant_id: str,
        staff_id: str,
        shift_id: str,
        work_date: date,
        notes: Optional[str] = None,
    ) -> StaffShift:
        return self._assign(AssignmentRequest(tenant_id, staff_id, shift_id, work_date, notes))

    def _assign(self, req: AssignmentRequest, pending: Sequence[StaffShift] = ()) -> StaffShift:
        shift = self._shift(req.shift_id)
        if not shift.is_active:
            raise ValidationError("Cannot assign staff to inactive shift", entity_id=req.shift_id, field="is_active")
        today = self._today()
        if req.work_date < today:
            raise ValidationError(
                "Cannot assign shift to past date",
                entity_id=req.staff_id,
                field="work_date",
                context={"work_date": req.work_date.isoformat(), "min": today.isoformat()},
            )
        self._ensure_no_overlap(req.staff_id, req.work_date, shift, pending)

        return StaffShift(
            staff_shift_id=self._id_factory(),
            tenant_id=req.tenant_id,
            staff_id=req.staff_id,
            shift_id=req.shift_id,
            work_date=req.work_date,
            notes=req.notes,
        )

    def bulk_assign(self, requests: Iterable[AssignmentRequest]) -> BulkResult:
        created: list = []

        def _one(req: AssignmentRequest) -> StaffShift:
            # earlier items of the same batch count as existing assignments
            assignment = self._assign(req, created)
            created.append(assignment)
            return assignment

        return run_bulk(requests, _one, log=logger, tag="staff_shift")

    def check_in(self, assignment: StaffShift, time: str) -> StaffShift:
        updated = lifecycle.check_in(assignment, self._shift(assignment.shift_id), time)
        logger.info("[staff_shift] %s checked in at %s (late=%s)", assignment.staff_shift_id, time, updated.late_minutes)
        return updated

    def check_out(self, assignment: StaffShift, time: str, actual_break_minutes: Optional[int] = None) -> StaffShift:
        updated = lifecycle.check_out(assignment, self._shift(assignment.shift_id), time, actual_break_minutes)
        logger.info(
            "[staff_shift] %s checked out at %s (worked=%s overtime=%s)",
            assignment.staff_shift_id, time, updated.total_worked_minutes, updated.overtime_minutes,
        )
        return updated

    def correct(self, assignment: StaffShift, **changes) -> StaffShift:
        updated = lifecycle.correct(assignment, self._shift(assignment.shift_id), **changes)
        logger.info("[staff_shift] %s corrected: %s", assignment.staff_shift_id, sorted(changes))
        return updated

    def calculate_work_time(self, assignment: StaffShift) -> WorkTimeResult:
        return lifecycle.calculate_work_time(assignment, self._shift(assignment.shift_id))

    def can_delete(self, assignment: StaffShift) -> bool:
        return lifecycle.can_delete(assignment)


def work_summary(assignments: Iterable[StaffShift]) -> WorkSummary:
    items = list(assignments)
    completed = [a for a in items if a.is_completed]
    total_minutes = sum(a.total_worked_minutes or 0 for a in items)
    total_hours = hours_from_minutes(total_minutes)
    average = total_hours / len(completed) if completed else ZERO
    return WorkSummary(
        total_shifts=len(items),
        completed_shifts=len(completed),
        total_worked_hours=round_money(total_hours),
        total_late_minutes=sum(a.late_minutes for a in items),
        total_overtime_minutes=sum(a.overtime_minutes for a in items),
        average_work_hours=round_money(Decimal(average)),
    )
