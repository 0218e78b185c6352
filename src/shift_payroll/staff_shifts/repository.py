from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import StaffShift


class StaffShiftRepository(Protocol):
    def list_for_staff_and_date(self, *, staff_id: str, work_date: date) -> Sequence[StaffShift]:
        """Existing assignments of one staff member on one calendar date."""

        raise NotImplementedError
