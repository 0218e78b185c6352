from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Mapping, Optional, Tuple

from ..attendance.model import Attendance
from ..common.money import ZERO
from ..core.constants import (
    DEFAULT_NORMAL_HOURS_PER_DAY,
    DEFAULT_NORMAL_HOURS_PER_MONTH,
    DEFAULT_OVERTIME_RATE_1,
    DEFAULT_OVERTIME_RATE_2,
    DEFAULT_OVERTIME_RATE_WEEKEND_1,
    DEFAULT_OVERTIME_RATE_WEEKEND_2,
    DEFAULT_OVERTIME_RATE_WEEKEND_3,
)
from ..core.enums import CalculationMode, OvertimeCalculationType, PeriodState, SalaryType
from ..shifts.model import Shift
from ..staff_shifts.model import StaffShift


@dataclass(frozen=True)
class Salary:
    staff_id: str
    basic_salary: Decimal
    fixed_allowance: Decimal = ZERO
    salary_type: SalaryType = SalaryType.MONTHLY
    tenant_id: Optional[str] = None
    salary_id: Optional[str] = None

    @property
    def total_salary(self) -> Decimal:
        return self.basic_salary + self.fixed_allowance


@dataclass(frozen=True)
class PayrollSetting:
    """Per-tenant overtime policy.

    Weekday overtime uses ``overtime_rate_1``/``overtime_rate_2``; weekend
    overtime uses the three weekend tiers. ``ump`` is the regional minimum
    wage, ``None`` when not configured.
    """

    tenant_id: str
    normal_work_hours_per_day: Decimal = DEFAULT_NORMAL_HOURS_PER_DAY
    normal_work_hours_per_month: Decimal = DEFAULT_NORMAL_HOURS_PER_MONTH
    overtime_rate_1: Decimal = DEFAULT_OVERTIME_RATE_1
    overtime_rate_2: Decimal = DEFAULT_OVERTIME_RATE_2
    overtime_rate_weekend_1: Decimal = DEFAULT_OVERTIME_RATE_WEEKEND_1
    overtime_rate_weekend_2: Decimal = DEFAULT_OVERTIME_RATE_WEEKEND_2
    overtime_rate_weekend_3: Decimal = DEFAULT_OVERTIME_RATE_WEEKEND_3
    overtime_calculation_type: OvertimeCalculationType = OvertimeCalculationType.HOURLY
    ump: Optional[Decimal] = None
    setting_id: Optional[str] = None


@dataclass(frozen=True)
class PayrollPeriod:
    period_id: str
    tenant_id: str
    period_start: date
    period_end: date
    is_finalized: bool = False

    @property
    def state(self) -> PeriodState:
        return PeriodState.FINALIZED if self.is_finalized else PeriodState.OPEN


@dataclass(frozen=True)
class PayrollDetail:
    """Computed pay of one staff member in one period.

    ``take_home_pay`` is always derived; see ``details.take_home``.
    """

    detail_id: str
    tenant_id: str
    period_id: str
    staff_id: str
    basic_salary_amount: Decimal
    fixed_allowance_amount: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    bonus_amount: Decimal = ZERO
    deductions_amount: Decimal = ZERO
    take_home_pay: Decimal = ZERO
    is_paid: bool = False
    paid_at: Optional[datetime] = None

    @property
    def gross_pay(self) -> Decimal:
        return self.basic_salary_amount + self.fixed_allowance_amount + self.overtime_pay + self.bonus_amount


@dataclass(frozen=True)
class WorkDay:
    """Worked hours of one day, normalised from Attendance or StaffShift."""

    work_date: date
    hours: Decimal
    is_weekend: bool = False


@dataclass(frozen=True)
class OvertimeBreakdown:
    total_hours: Decimal
    overtime_hours: Decimal
    overtime_pay: Decimal


@dataclass(frozen=True)
class PayrollCalculationResult:
    staff_id: str
    basic_salary_amount: Decimal
    fixed_allowance_amount: Decimal
    total_work_hours: Decimal
    normal_work_hours: Decimal
    overtime_hours: Decimal
    hourly_rate: Decimal
    overtime_pay: Decimal
    bonus_amount: Decimal
    deductions_amount: Decimal
    gross_pay: Decimal
    take_home_pay: Decimal
    calculation_mode: CalculationMode


@dataclass(frozen=True)
class CalculationCheck:
    can_calculate: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class PayrollSummary:
    total_staff: int
    total_gross_pay: Decimal
    total_take_home_pay: Decimal
    total_overtime_pay: Decimal
    total_bonuses: Decimal
    total_deductions: Decimal
    total_overtime_hours: Decimal
    paid_count: int
    unpaid_count: int
    average_take_home_pay: Decimal


@dataclass(frozen=True)
class PayrollItem:
    """Inputs for one staff member in a bulk payroll run."""

    salary: Salary
    setting: PayrollSetting
    attendances: Tuple[Attendance, ...] = ()
    staff_shifts: Tuple[StaffShift, ...] = ()
    shifts: Optional[Mapping[str, Shift]] = None
    bonus_amount: Decimal = ZERO
    deductions_amount: Decimal = ZERO
    manual_overtime_hours: Optional[Decimal] = None
    use_actual_work_hours: bool = False
