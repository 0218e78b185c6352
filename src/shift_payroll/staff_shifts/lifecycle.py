"""Check-in / check-out state machine for staff-shift assignments.

Each transition returns a new ``StaffShift``; the input is never modified.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import parse_clock
from ..core.enums import StaffShiftState
from ..core.exceptions import InvalidAttendanceData, InvalidStateTransition
from ..shifts import rules
from ..shifts.model import Shift, WorkTimeResult
from .model import StaffShift

_UNSET = object()


def _transition_error(assignment: StaffShift, action: str, expected: StaffShiftState) -> InvalidStateTransition:
    return InvalidStateTransition(
        f"Cannot {action} from {assignment.state.value} state",
        entity_id=assignment.staff_shift_id,
        field="state",
        context={"state": assignment.state.value, "expected": expected.value},
    )


def _require_break(value: Optional[int], assignment: StaffShift) -> Optional[int]:
    if value is not None and int(value) < 0:
        raise InvalidAttendanceData(
            "Break duration cannot be negative",
            entity_id=assignment.staff_shift_id,
            field="actual_break_duration_minutes",
            context={"value": value},
        )
    return value


def calculate_work_time(assignment: StaffShift, shift: Shift) -> WorkTimeResult:
    return rules.calculate_work_time(
        shift,
        assignment.check_in_time,
        assignment.check_out_time,
        assignment.actual_break_duration_minutes,
    )


def _with_derived(assignment: StaffShift, shift: Shift) -> StaffShift:
    if assignment.check_in_time and assignment.check_out_time:
        work = calculate_work_time(assignment, shift)
        return replace(
            assignment,
            total_worked_minutes=work.total_minutes,
            late_minutes=work.late_minutes,
            overtime_minutes=work.overtime_minutes,
            is_completed=True,
        )
    late = rules.late_minutes(shift, assignment.check_in_time) if assignment.check_in_time else 0
    return replace(assignment, total_worked_minutes=None, late_minutes=late, overtime_minutes=0, is_completed=False)


def check_in(assignment: StaffShift, shift: Shift, time: str) -> StaffShift:
    if assignment.state != StaffShiftState.UNSTARTED:
        raise _transition_error(assignment, "check in", StaffShiftState.UNSTARTED)
    parse_clock(time, field="check_in_time")
    if shift.calculate_before_start_time:
        rules.check_in_window(shift, time)
    return _with_derived(replace(assignment, check_in_time=time), shift)


def check_out(
    assignment: StaffShift,
    shift: Shift,
    time: str,
    actual_break_minutes: Optional[int] = None,
) -> StaffShift:
    if assignment.state != StaffShiftState.ACTIVE:
        raise _transition_error(assignment, "check out", StaffShiftState.ACTIVE)
    parse_clock(time, field="check_out_time")
    breaks = _require_break(actual_break_minutes, assignment)
    if breaks is None:
        breaks = assignment.actual_break_duration_minutes
    return _with_derived(
        replace(assignment, check_out_time=time, actual_break_duration_minutes=breaks),
        shift,
    )


def correct(
    assignment: StaffShift,
    shift: Shift,
    *,
    check_in_time=_UNSET,
    check_out_time=_UNSET,
    actual_break_minutes=_UNSET,
    notes=_UNSET,
) -> StaffShift:
    """Explicit correction of recorded times; derived fields are recomputed.

    A completed assignment's check-in may only move together with its
    check-out.
    """
    changes = {}
    if check_in_time is not _UNSET:
        if assignment.check_out_time and check_out_time is _UNSET:
            raise InvalidStateTransition(
                "Cannot correct check-in after check-out without correcting check-out",
                entity_id=assignment.staff_shift_id,
                field="check_in_time",
                context={"state": assignment.state.value},
            )
        if check_in_time is not None:
            parse_clock(check_in_time, field="check_in_time")
        changes["check_in_time"] = check_in_time
    if check_out_time is not _UNSET:
        if check_out_time is not None:
            parse_clock(check_out_time, field="check_out_time")
        changes["check_out_time"] = check_out_time
    if actual_break_minutes is not _UNSET:
        changes["actual_break_duration_minutes"] = _require_break(actual_break_minutes, assignment)
    if notes is not _UNSET:
        changes["notes"] = notes

    updated = replace(assignment, **changes)
    if updated.check_out_time and not updated.check_in_time:
        raise InvalidAttendanceData(
            "Cannot record check-out without check-in",
            entity_id=assignment.staff_shift_id,
            field="check_out_time",
        )
    return _with_derived(updated, shift)


def can_delete(assignment: StaffShift) -> bool:
    return not assignment.is_completed
