from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_clock
from ..core.exceptions import DuplicateAttendance, InvalidAttendanceData
from ..shifts import rules
from ..shifts.model import Shift
from .model import Attendance


def validate_attendance(
    attendance: Attendance,
    existing: Iterable[Attendance] = (),
    shift: Optional[Shift] = None,
) -> None:
    """Reject duplicates, check-out without check-in and out-of-window check-ins.

    ``existing`` may include ``attendance`` itself (same id); it is skipped.
    """
    if not attendance.staff_id:
        raise InvalidAttendanceData("Attendance must belong to a staff member",
                                    entity_id=attendance.attendance_id, field="staff_id")

    if shift is not None and attendance.shift_id != shift.shift_id:
        raise InvalidAttendanceData(
            "Attendance is not linked to the given shift",
            entity_id=attendance.attendance_id,
            field="shift_id",
            context={"attendance_shift_id": attendance.shift_id, "shift_id": shift.shift_id},
        )

    for other in existing:
        if other.attendance_id == attendance.attendance_id:
            continue
        if other.staff_id != attendance.staff_id or other.work_date != attendance.work_date:
            continue
        if attendance.has_shift and other.shift_id == attendance.shift_id:
            raise DuplicateAttendance(
                "Staff already has attendance for this shift on the same date",
                entity_id=other.attendance_id,
                field="shift_id",
                context={"staff_id": attendance.staff_id, "date": attendance.work_date.isoformat(),
                         "shift_id": attendance.shift_id},
            )
        if not attendance.has_shift and not other.has_shift:
            raise DuplicateAttendance(
                "Staff already has attendance for this date (legacy mode)",
                entity_id=other.attendance_id,
                field="work_date",
                context={"staff_id": attendance.staff_id, "date": attendance.work_date.isoformat()},
            )

    if attendance.check_out_time and not attendance.check_in_time:
        raise InvalidAttendanceData("Cannot check out without checking in first",
                                    entity_id=attendance.attendance_id, field="check_out_time")

    if attendance.check_in_time:
        parse_clock(attendance.check_in_time, field="check_in_time")
    if attendance.check_out_time:
        parse_clock(attendance.check_out_time, field="check_out_time")

    if attendance.check_in_time and shift is not None:
        rules.check_in_window(shift, attendance.check_in_time)


def suggest_shift(attendance: Attendance, candidates: Sequence[Shift]) -> Optional[Shift]:
    """First active shift whose window contains the recorded check-in.

    Advisory only: used when migrating legacy records, never applied
    automatically.
    """
    if attendance.has_shift or not attendance.check_in_time:
        return None

    for shift in candidates:
        if shift.is_active and rules.is_time_within(shift, attendance.check_in_time):
            return shift
    return None
