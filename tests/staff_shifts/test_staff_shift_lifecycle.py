from datetime import date
from decimal import Decimal

import pytest

from shift_payroll.core.enums import StaffShiftState
from shift_payroll.core.exceptions import (
    AttendanceOutOfWindow,
    InvalidAttendanceData,
    InvalidStateTransition,
)
from shift_payroll.shifts.model import Shift
from shift_payroll.staff_shifts import lifecycle
from shift_payroll.staff_shifts.model import StaffShift

SHIFT = Shift(shift_id="day", tenant_id="t1", name="Day", start_time="09:00", end_time="17:00",
              late_threshold_minutes=15)


def new_assignment() -> StaffShift:
    return StaffShift(staff_shift_id="ss1", tenant_id="t1", staff_id="u1", shift_id="day",
                      work_date=date(2025, 1, 6))


@pytest.mark.parametrize("check_in, expected_late", [("09:10", 0), ("09:15", 0), ("09:20", 20)])
def test_check_in_then_check_out_keeps_lateness(check_in, expected_late):
    started = lifecycle.check_in(new_assignment(), SHIFT, check_in)
    assert started.state == StaffShiftState.ACTIVE
    assert started.late_minutes == expected_late

    done = lifecycle.check_out(started, SHIFT, "17:00")
    assert done.state == StaffShiftState.COMPLETED
    assert done.is_completed
    assert done.late_minutes == expected_late


def test_check_out_derives_worked_and_overtime_minutes():
    started = lifecycle.check_in(new_assignment(), SHIFT, "09:00")

    done = lifecycle.check_out(started, SHIFT, "18:00", actual_break_minutes=30)

    assert done.total_worked_minutes == 540
    assert done.actual_break_duration_minutes == 30
    # 510 effective minutes against an 8 hour maximum
    assert done.overtime_minutes == 30


def test_transitions_do_not_mutate_input():
    original = new_assignment()

    lifecycle.check_in(original, SHIFT, "09:00")

    assert original.check_in_time is None
    assert original.state == StaffShiftState.UNSTARTED


def test_invalid_transitions_are_rejected():
    unstarted = new_assignment()
    with pytest.raises(InvalidStateTransition):
        lifecycle.check_out(unstarted, SHIFT, "17:00")

    active = lifecycle.check_in(unstarted, SHIFT, "09:00")
    with pytest.raises(InvalidStateTransition) as exc:
        lifecycle.check_in(active, SHIFT, "09:05")
    assert exc.value.context == {"state": "ACTIVE", "expected": "UNSTARTED"}

    done = lifecycle.check_out(active, SHIFT, "17:00")
    with pytest.raises(InvalidStateTransition):
        lifecycle.check_out(done, SHIFT, "18:00")
    with pytest.raises(InvalidStateTransition):
        lifecycle.check_in(done, SHIFT, "09:00")


def test_check_in_outside_window_is_rejected_when_enforced():
    with pytest.raises(AttendanceOutOfWindow):
        lifecycle.check_in(new_assignment(), SHIFT, "07:00")

    relaxed = Shift(shift_id="day", tenant_id="t1", name="Day", start_time="09:00", end_time="17:00",
                    calculate_before_start_time=False)
    assert lifecycle.check_in(new_assignment(), relaxed, "07:00").check_in_time == "07:00"


def test_negative_break_is_rejected():
    active = lifecycle.check_in(new_assignment(), SHIFT, "09:00")

    with pytest.raises(InvalidAttendanceData):
        lifecycle.check_out(active, SHIFT, "17:00", actual_break_minutes=-5)


def test_overnight_check_out_wraps_past_midnight():
    night = Shift(shift_id="night", tenant_id="t1", name="Night", start_time="22:00", end_time="06:00")
    active = lifecycle.check_in(new_assignment(), night, "21:45")

    done = lifecycle.check_out(active, night, "06:30")

    assert done.total_worked_minutes == 525
    assert done.late_minutes == 0
    assert done.overtime_minutes == 45


def test_correct_check_in_after_check_out_needs_check_out_too():
    done = lifecycle.check_out(lifecycle.check_in(new_assignment(), SHIFT, "09:00"), SHIFT, "17:00")

    with pytest.raises(InvalidStateTransition):
        lifecycle.correct(done, SHIFT, check_in_time="09:30")

    fixed = lifecycle.correct(done, SHIFT, check_in_time="09:30", check_out_time="18:30")
    assert fixed.late_minutes == 30
    assert fixed.total_worked_minutes == 540
    assert fixed.overtime_minutes == 60
    assert fixed.is_completed


def test_correct_break_recomputes_completed_assignment():
    done = lifecycle.check_out(lifecycle.check_in(new_assignment(), SHIFT, "09:00"), SHIFT, "18:00")
    assert done.overtime_minutes == 60

    fixed = lifecycle.correct(done, SHIFT, actual_break_minutes=60, notes="lunch")

    assert fixed.overtime_minutes == 0
    assert fixed.notes == "lunch"


def test_correct_removing_check_out_reopens_assignment():
    done = lifecycle.check_out(lifecycle.check_in(new_assignment(), SHIFT, "09:00"), SHIFT, "17:00")

    reopened = lifecycle.correct(done, SHIFT, check_out_time=None)

    assert reopened.state == StaffShiftState.ACTIVE
    assert reopened.total_worked_minutes is None


def test_completed_assignment_cannot_be_deleted():
    active = lifecycle.check_in(new_assignment(), SHIFT, "09:00")

    assert lifecycle.can_delete(active)
    assert not lifecycle.can_delete(lifecycle.check_out(active, SHIFT, "17:00"))


def test_calculate_work_time_for_assignment():
    done = lifecycle.check_out(lifecycle.check_in(new_assignment(), SHIFT, "09:00"), SHIFT, "17:00",
                               actual_break_minutes=60)

    work = lifecycle.calculate_work_time(done, SHIFT)

    assert work.effective_minutes == 420
    assert Decimal(work.total_minutes) == Decimal("480")
