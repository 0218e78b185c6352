from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .attendance.factory import AttendanceCalculatorFactory
from .attendance.service import AttendanceService
from .common.datetime_utils import today_local
from .config import EngineSettings, load_settings
from .payroll.model import PayrollSetting
from .payroll.periods import PayrollPeriodService
from .payroll.repository import PayrollPeriodRepository
from .payroll.service import PayrollService
from .payroll.settings import create_payroll_setting
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .staff_shifts.repository import StaffShiftRepository
from .staff_shifts.service import StaffShiftService


@dataclass(frozen=True)
class Container:
    settings: EngineSettings

    shifts_repo: ShiftRepository
    staff_shifts_repo: StaffShiftRepository
    periods_repo: PayrollPeriodRepository

    shift_service: ShiftService
    attendance_service: AttendanceService
    staff_shift_service: StaffShiftService
    payroll_service: PayrollService
    period_service: PayrollPeriodService

    def new_payroll_setting(self, tenant_id: str, **options) -> PayrollSetting:
        options.setdefault("normal_work_hours_per_day", self.settings.normal_work_hours_per_day)
        options.setdefault("normal_work_hours_per_month", self.settings.normal_work_hours_per_month)
        return create_payroll_setting(tenant_id, **options)


def build_container(
    *,
    shifts_repo: ShiftRepository,
    staff_shifts_repo: StaffShiftRepository,
    periods_repo: PayrollPeriodRepository,
    settings: Optional[EngineSettings] = None,
    today: Callable[[], date] = today_local,
    id_factory: Optional[Callable[[], str]] = None,
) -> Container:
    settings = settings or load_settings()
    ids = {"id_factory": id_factory} if id_factory else {}

    attendance_factory = AttendanceCalculatorFactory(standard_hours=settings.legacy_standard_hours)

    shift_service = ShiftService(shifts_repo, **ids)
    attendance_service = AttendanceService(shifts_repo, calculator_factory=attendance_factory)
    staff_shift_service = StaffShiftService(shifts_repo, staff_shifts_repo, today=today, **ids)
    payroll_service = PayrollService(attendance_factory=attendance_factory, today=today, **ids)
    period_service = PayrollPeriodService(periods_repo, today=today, **ids)

    return Container(
        settings=settings,
        shifts_repo=shifts_repo,
        staff_shifts_repo=staff_shifts_repo,
        periods_repo=periods_repo,
        shift_service=shift_service,
        attendance_service=attendance_service,
        staff_shift_service=staff_shift_service,
        payroll_service=payroll_service,
        period_service=period_service,
    )
