from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from shift_payroll.attendance.model import Attendance
from shift_payroll.core.enums import CalculationMode, OvertimeCalculationType
from shift_payroll.core.exceptions import InvalidAmount, PeriodLocked
from shift_payroll.payroll.calculator.factory import PayrollCalculatorFactory
from shift_payroll.payroll.calculator.hybrid_calculator import HybridCalculator
from shift_payroll.payroll.calculator.manual_calculator import ManualOvertimeCalculator
from shift_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from shift_payroll.payroll.details import add_bonus, mark_paid
from shift_payroll.payroll.model import PayrollItem, PayrollPeriod, PayrollSetting, Salary
from shift_payroll.payroll.salary import create_salary
from shift_payroll.payroll.service import PayrollService
from shift_payroll.shifts.model import Shift
from shift_payroll.staff_shifts.model import StaffShift

TODAY = date(2025, 3, 15)
MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


def legacy_day(day: date, hours: str, *, weekend: bool = False, idx: int = 0) -> Attendance:
    return Attendance(attendance_id=f"a{idx}-{day}", tenant_id="t1", staff_id="u1", work_date=day,
                      check_in_time="08:00", total_hours=Decimal(hours), is_weekend=weekend)


def service() -> PayrollService:
    return PayrollService(today=lambda: TODAY, id_factory=lambda: "d1")


def test_monthly_overtime_from_attendance():
    setting = PayrollSetting(tenant_id="t1", overtime_calculation_type=OvertimeCalculationType.MONTHLY)
    salary = create_salary("u1", 1730)
    records = [legacy_day(MONDAY + timedelta(days=i), "10", idx=i) for i in range(18)]

    result = service().calculate_from_attendance(salary, setting, attendances=records)

    assert result.calculation_mode == CalculationMode.ATTENDANCE_BASED
    assert result.total_work_hours == Decimal("180.00")
    assert result.hourly_rate == Decimal("10")
    assert result.overtime_hours == Decimal("7.00")
    assert result.overtime_pay == Decimal("105.00")
    assert result.gross_pay == Decimal("1835.00")
    assert result.take_home_pay == Decimal("1835.00")


def test_hourly_overtime_from_attendance_uses_daily_tiers():
    setting = PayrollSetting(tenant_id="t1")
    salary = create_salary("u1", 1730)
    records = [
        legacy_day(MONDAY, "10"),
        legacy_day(SATURDAY, "16", weekend=True),
        legacy_day(SATURDAY + timedelta(days=1), "8", weekend=True),
        legacy_day(MONDAY + timedelta(days=7), "6"),
    ]

    result = service().calculate(salary, setting, attendances=records, use_actual_work_hours=True)

    # weekday 3h: 1x15 + 2x20; saturday 9h at weekend tier 2; sunday 1h at tier 1
    assert result.overtime_hours == Decimal("13.00")
    assert result.overtime_pay == Decimal("345.00")
    assert result.total_work_hours == Decimal("40.00")
    assert result.gross_pay == Decimal("2075.00")


def test_hybrid_ignores_weekend_flags_and_bills_monthly_excess():
    setting = PayrollSetting(tenant_id="t1")
    salary = create_salary("u1", 1730)
    records = [legacy_day(SATURDAY + timedelta(days=i), "9", weekend=True, idx=i) for i in range(20)]

    result = service().calculate(salary, setting, attendances=records)

    assert result.calculation_mode == CalculationMode.HYBRID
    assert result.total_work_hours == Decimal("180.00")
    assert result.overtime_hours == Decimal("7.00")
    assert result.overtime_pay == Decimal("135.00")


def test_manual_overtime_by_calculation_type():
    salary = create_salary("u1", 1730)

    hourly = service().calculate_from_manual_overtime(salary, PayrollSetting(tenant_id="t1"), 3)
    monthly = service().calculate_from_manual_overtime(
        salary,
        PayrollSetting(tenant_id="t1", overtime_calculation_type=OvertimeCalculationType.MONTHLY),
        "3",
    )

    assert hourly.calculation_mode == CalculationMode.MANUAL
    assert hourly.total_work_hours == Decimal("176.00")
    assert hourly.overtime_pay == Decimal("55.00")
    assert monthly.overtime_pay == Decimal("45.00")


def test_manual_overtime_wins_over_records():
    result = service().calculate(
        create_salary("u1", 1730),
        PayrollSetting(tenant_id="t1"),
        attendances=[legacy_day(MONDAY, "12")],
        manual_overtime_hours=1,
        use_actual_work_hours=True,
    )

    assert result.calculation_mode == CalculationMode.MANUAL
    assert result.overtime_pay == Decimal("15.00")


def test_default_mode_without_inputs():
    result = service().calculate(create_salary("u1", 1730, 270), PayrollSetting(tenant_id="t1"), bonus_amount=30)

    assert result.calculation_mode == CalculationMode.DEFAULT
    assert result.total_work_hours == Decimal("173.00")
    assert result.overtime_hours == Decimal("0.00")
    assert result.gross_pay == Decimal("2030.00")


def test_take_home_never_negative():
    result = service().calculate(create_salary("u1", 1730), PayrollSetting(tenant_id="t1"), deductions_amount=5000)

    assert result.take_home_pay == Decimal("0.00")


def test_negative_inputs_are_rejected():
    with pytest.raises(InvalidAmount):
        service().calculate(create_salary("u1", 1730), PayrollSetting(tenant_id="t1"), bonus_amount=-1)
    with pytest.raises(InvalidAmount):
        service().calculate_from_manual_overtime(create_salary("u1", 1730), PayrollSetting(tenant_id="t1"), -2)


def test_staff_shift_records_use_effective_shift_hours():
    shift = Shift(shift_id="full", tenant_id="t1", name="Full", start_time="08:00", end_time="18:00",
                  has_break_time=True, break_duration_minutes=60, max_working_hours=Decimal("9"))
    done = StaffShift(staff_shift_id="ss1", tenant_id="t1", staff_id="u1", shift_id="full", work_date=MONDAY,
                      check_in_time="08:00", check_out_time="18:00", total_worked_minutes=600, is_completed=True)
    open_one = StaffShift(staff_shift_id="ss2", tenant_id="t1", staff_id="u1", shift_id="full",
                          work_date=MONDAY + timedelta(days=1), check_in_time="08:00")

    result = service().calculate_from_attendance(
        create_salary("u1", 1730), PayrollSetting(tenant_id="t1"),
        staff_shifts=[done, open_one], shifts={"full": shift},
    )

    assert result.total_work_hours == Decimal("9.00")
    assert result.overtime_hours == Decimal("2.00")
    assert result.overtime_pay == Decimal("35.00")


def test_calculator_factory_priority():
    factory = PayrollCalculatorFactory()

    assert isinstance(factory.for_inputs(has_manual_overtime=True, has_records=True, use_actual_work_hours=True),
                      ManualOvertimeCalculator)
    assert isinstance(factory.for_inputs(has_manual_overtime=False, has_records=True, use_actual_work_hours=False),
                      HybridCalculator)
    assert isinstance(factory.for_inputs(has_manual_overtime=False, has_records=False, use_actual_work_hours=True),
                      StandardPayrollCalculator)


def test_can_calculate_payroll_reports_reason():
    salary = create_salary("u1", 1730)
    setting = PayrollSetting(tenant_id="t1")
    march = PayrollPeriod(period_id="p1", tenant_id="t1", period_start=date(2025, 3, 1), period_end=date(2025, 3, 31))
    svc = service()

    assert svc.can_calculate_payroll(salary, setting, march).can_calculate

    locked = svc.can_calculate_payroll(salary, setting, PayrollPeriod(
        period_id="p0", tenant_id="t1", period_start=date(2025, 2, 1), period_end=date(2025, 2, 28),
        is_finalized=True))
    assert not locked.can_calculate
    assert "finalized" in locked.reason

    bad_salary = Salary(staff_id="u1", basic_salary=Decimal("0"))
    assert svc.can_calculate_payroll(bad_salary, setting, march).reason == "Invalid salary configuration"

    overlapping = PayrollPeriod(period_id="p2", tenant_id="t1", period_start=date(2025, 3, 20),
                                period_end=date(2025, 4, 5))
    assert not svc.can_calculate_payroll(salary, setting, march, [overlapping]).can_calculate

    bad_setting = PayrollSetting(tenant_id="t1", overtime_rate_1=Decimal("0.5"))
    assert not svc.can_calculate_payroll(salary, bad_setting, march).can_calculate


def test_build_detail_and_amend():
    svc = service()
    result = svc.calculate_from_manual_overtime(create_salary("u1", 1730, 100), PayrollSetting(tenant_id="t1"), 3,
                                                bonus_amount=20, deductions_amount=5)
    march = PayrollPeriod(period_id="p1", tenant_id="t1", period_start=date(2025, 3, 1), period_end=date(2025, 3, 31))

    detail = svc.build_detail(march, result)

    assert detail.detail_id == "d1"
    assert detail.period_id == "p1"
    assert detail.take_home_pay == result.take_home_pay == Decimal("1900.00")
    assert detail.overtime_hours == Decimal("3.00")
    assert add_bonus(detail, 10).take_home_pay == Decimal("1910.00")

    with pytest.raises(PeriodLocked):
        svc.build_detail(PayrollPeriod(period_id="p0", tenant_id="t1", period_start=date(2025, 2, 1),
                                       period_end=date(2025, 2, 28), is_finalized=True), result)


def test_bulk_calculate_isolates_failures_and_summarises():
    svc = service()
    setting = PayrollSetting(tenant_id="t1")
    march = PayrollPeriod(period_id="p1", tenant_id="t1", period_start=date(2025, 3, 1), period_end=date(2025, 3, 31))
    items = [
        PayrollItem(salary=create_salary("u1", 1730), setting=setting, manual_overtime_hours=Decimal("3")),
        PayrollItem(salary=Salary(staff_id="u2", basic_salary=Decimal("0")), setting=setting),
        PayrollItem(salary=create_salary("u3", 1000), setting=setting, deductions_amount=Decimal("100")),
    ]

    result = svc.bulk_calculate(march, items)

    assert [d.staff_id for d in result.succeeded] == ["u1", "u3"]
    assert result.failed[0].error_type == "InvalidSalaryConfig"
    assert result.failed[0].details["entity_id"] == "u2"

    paid = [mark_paid(result.succeeded[0], datetime(2025, 4, 1, 9, 0))] + result.succeeded[1:]
    summary = svc.payroll_summary(paid)
    assert summary.total_staff == 2
    assert summary.total_take_home_pay == Decimal("2685.00")
    assert summary.total_overtime_pay == Decimal("55.00")
    assert summary.total_deductions == Decimal("100.00")
    assert summary.paid_count == 1
    assert summary.unpaid_count == 1
    assert summary.average_take_home_pay == Decimal("1342.50")


def test_summary_of_no_details():
    summary = service().payroll_summary([])
    assert summary.total_staff == 0
    assert summary.average_take_home_pay == Decimal("0")


def test_sub_cent_components_are_rounded_before_totals():
    salary = Salary(staff_id="u1", basic_salary=Decimal("1000.004"), fixed_allowance=Decimal("0.004"))

    result = service().calculate(salary, PayrollSetting(tenant_id="t1"), bonus_amount="0.004")

    assert result.basic_salary_amount == Decimal("1000.00")
    assert result.fixed_allowance_amount == Decimal("0.00")
    assert result.bonus_amount == Decimal("0.00")
    assert result.gross_pay == Decimal("1000.00")
    assert result.take_home_pay == result.basic_salary_amount + result.fixed_allowance_amount + result.bonus_amount


def test_bulk_calculate_isolates_non_numeric_amounts():
    setting = PayrollSetting(tenant_id="t1")
    march = PayrollPeriod(period_id="p1", tenant_id="t1", period_start=date(2025, 3, 1), period_end=date(2025, 3, 31))
    items = [
        PayrollItem(salary=create_salary("u1", 1730), setting=setting, bonus_amount="abc"),
        PayrollItem(salary=create_salary("u2", 1730), setting=setting),
    ]

    result = service().bulk_calculate(march, items)

    assert [d.staff_id for d in result.succeeded] == ["u2"]
    assert result.failed[0].error_type == "InvalidAmount"
    assert result.failed[0].details["field"] == "bonus_amount"
