from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Callable, Iterable, Mapping, Optional

from ..attendance.factory import AttendanceCalculatorFactory
from ..attendance.model import Attendance
from ..common.bulk import BulkResult, run_bulk
from ..common.datetime_utils import today_local
from ..common.money import ZERO, Number, round_money, to_decimal
from ..common.validators import require_non_negative
from ..core.exceptions import InvalidPayrollSetting, PeriodLocked, PeriodOverlap
from ..shifts.model import Shift
from ..staff_shifts.model import StaffShift
from . import details as detail_rules
from . import salary as salary_rules
from . import settings as setting_rules
from . import work_hours
from .calculator.factory import PayrollCalculatorFactory
from .model import (
    CalculationCheck,
    PayrollCalculationResult,
    PayrollDetail,
    PayrollItem,
    PayrollPeriod,
    PayrollSetting,
    PayrollSummary,
    Salary,
)
from .periods import ensure_no_overlap, validate_period

logger = logging.getLogger(__name__)


def payroll_summary(payroll_details: Iterable[PayrollDetail]) -> PayrollSummary:
    items = list(payroll_details)
    total_take_home = sum((d.take_home_pay for d in items), ZERO)
    paid = sum(1 for d in items if d.is_paid)
    return PayrollSummary(
        total_staff=len(items),
        total_gross_pay=round_money(sum((d.gross_pay for d in items), ZERO)),
        total_take_home_pay=round_money(total_take_home),
        total_overtime_pay=round_money(sum((d.overtime_pay for d in items), ZERO)),
        total_bonuses=round_money(sum((d.bonus_amount for d in items), ZERO)),
        total_deductions=round_money(sum((d.deductions_amount for d in items), ZERO)),
        total_overtime_hours=round_money(sum((d.overtime_hours for d in items), ZERO)),
        paid_count=paid,
        unpaid_count=len(items) - paid,
        average_take_home_pay=round_money(total_take_home / len(items)) if items else round_money(ZERO),
    )


class PayrollService:
    """Payroll calculation engine.

    Mode priority: manual overtime, then attendance-based (records and
    ``use_actual_work_hours``), then hybrid (records only), then the normal
    month.
    """

    def __init__(
        self,
        *,
        calculator_factory: Optional[PayrollCalculatorFactory] = None,
        attendance_factory: Optional[AttendanceCalculatorFactory] = None,
        today: Callable[[], date] = today_local,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self._calculators = calculator_factory or PayrollCalculatorFactory()
        self._attendance_factory = attendance_factory or AttendanceCalculatorFactory()
        self._today = today
        self._id_factory = id_factory

    def calculate(
        self,
        salary: Salary,
        setting: PayrollSetting,
        *,
        attendances: Iterable[Attendance] = (),
        staff_shifts: Iterable[StaffShift] = (),
        shifts: Optional[Mapping[str, Shift]] = None,
        bonus_amount: Number = 0,
        deductions_amount: Number = 0,
        manual_overtime_hours: Optional[Number] = None,
        use_actual_work_hours: bool = False,
    ) -> PayrollCalculationResult:
        salary_rules.validate_salary(salary)
        setting_rules.validate_payroll_setting(setting)
        bonus = require_non_negative(bonus_amount, "bonus_amount", entity_id=salary.staff_id)
        deductions = require_non_negative(deductions_amount, "deductions_amount", entity_id=salary.staff_id)
        manual = None
        if manual_overtime_hours is not None:
            manual = require_non_negative(manual_overtime_hours, "manual_overtime_hours", entity_id=salary.staff_id)

        days = work_hours.from_attendance(attendances, shifts, factory=self._attendance_factory)
        days += work_hours.from_staff_shifts(staff_shifts, shifts)

        rate = setting_rules.hourly_rate(setting, salary.basic_salary)
        calculator = self._calculators.for_inputs(
            has_manual_overtime=manual is not None,
            has_records=bool(days),
            use_actual_work_hours=use_actual_work_hours,
        )
        logger.debug("[payroll] staff %s using %s mode (%s days)", salary.staff_id, calculator.mode.value, len(days))
        breakdown = calculator.breakdown(setting, rate, days, manual)

        basic = round_money(to_decimal(salary.basic_salary, field="basic_salary"))
        allowance = round_money(to_decimal(salary.fixed_allowance, field="fixed_allowance"))
        overtime_pay = round_money(breakdown.overtime_pay)
        bonus = round_money(bonus)
        deductions = round_money(deductions)
        gross = basic + allowance + overtime_pay + bonus
        return PayrollCalculationResult(
            staff_id=salary.staff_id,
            basic_salary_amount=basic,
            fixed_allowance_amount=allowance,
            total_work_hours=round_money(breakdown.total_hours),
            normal_work_hours=to_decimal(setting.normal_work_hours_per_month),
            overtime_hours=round_money(breakdown.overtime_hours),
            hourly_rate=rate,
            overtime_pay=overtime_pay,
            bonus_amount=bonus,
            deductions_amount=deductions,
            gross_pay=gross,
            take_home_pay=detail_rules.take_home(
                basic, allowance, overtime_pay, bonus, deductions
            ),
            calculation_mode=calculator.mode,
        )

    def calculate_from_attendance(
        self,
        salary: Salary,
        setting: PayrollSetting,
        *,
        attendances: Iterable[Attendance] = (),
        staff_shifts: Iterable[StaffShift] = (),
        shifts: Optional[Mapping[str, Shift]] = None,
        bonus_amount: Number = 0,
        deductions_amount: Number = 0,
        use_actual_work_hours: bool = True,
    ) -> PayrollCalculationResult:
        return self.calculate(
            salary,
            setting,
            attendances=attendances,
            staff_shifts=staff_shifts,
            shifts=shifts,
            bonus_amount=bonus_amount,
            deductions_amount=deductions_amount,
            use_actual_work_hours=use_actual_work_hours,
        )

    def calculate_from_manual_overtime(
        self,
        salary: Salary,
        setting: PayrollSetting,
        manual_overtime_hours: Number,
        *,
        bonus_amount: Number = 0,
        deductions_amount: Number = 0,
    ) -> PayrollCalculationResult:
        return self.calculate(
            salary,
            setting,
            bonus_amount=bonus_amount,
            deductions_amount=deductions_amount,
            manual_overtime_hours=manual_overtime_hours,
        )

    def can_calculate_payroll(
        self,
        salary: Salary,
        setting: PayrollSetting,
        period: PayrollPeriod,
        siblings: Iterable[PayrollPeriod] = (),
    ) -> CalculationCheck:
        if not salary_rules.is_valid(salary):
            return CalculationCheck(False, "Invalid salary configuration")
        if period.is_finalized:
            return CalculationCheck(False, "Payroll period is finalized and cannot be modified")
        try:
            setting_rules.validate_payroll_setting(setting)
        except InvalidPayrollSetting as ex:
            return CalculationCheck(False, ex.message)
        errors = validate_period(period, self._today())
        if errors:
            return CalculationCheck(False, ", ".join(errors))
        try:
            ensure_no_overlap(period, siblings)
        except PeriodOverlap as ex:
            return CalculationCheck(False, ex.message)
        return CalculationCheck(True)

    def build_detail(
        self,
        period: PayrollPeriod,
        result: PayrollCalculationResult,
        *,
        detail_id: Optional[str] = None,
    ) -> PayrollDetail:
        if period.is_finalized:
            raise PeriodLocked(
                "Payroll period is finalized and cannot be modified",
                entity_id=period.period_id,
                field="is_finalized",
                context={"staff_id": result.staff_id},
            )
        return detail_rules.create_detail(
            detail_id=detail_id or self._id_factory(),
            tenant_id=period.tenant_id,
            period_id=period.period_id,
            staff_id=result.staff_id,
            basic_salary_amount=result.basic_salary_amount,
            fixed_allowance_amount=result.fixed_allowance_amount,
            overtime_hours=result.overtime_hours,
            overtime_pay=result.overtime_pay,
            bonus_amount=result.bonus_amount,
            deductions_amount=result.deductions_amount,
        )

    def bulk_calculate(self, period: PayrollPeriod, items: Iterable[PayrollItem]) -> BulkResult:
        def _one(item: PayrollItem) -> PayrollDetail:
            result = self.calculate(
                item.salary,
                item.setting,
                attendances=item.attendances,
                staff_shifts=item.staff_shifts,
                shifts=item.shifts,
                bonus_amount=item.bonus_amount,
                deductions_amount=item.deductions_amount,
                manual_overtime_hours=item.manual_overtime_hours,
                use_actual_work_hours=item.use_actual_work_hours,
            )
            return self.build_detail(period, result)

        logger.info("[payroll] bulk calculation for period %s", period.period_id)
        return run_bulk(items, _one, log=logger, tag="payroll")

    def payroll_summary(self, payroll_details: Iterable[PayrollDetail]) -> PayrollSummary:
        return payroll_summary(payroll_details)
