from decimal import Decimal

import pytest

from shift_payroll.core.enums import OvertimeCalculationType, SalaryType
from shift_payroll.core.exceptions import InvalidPayrollSetting, InvalidSalaryConfig
from shift_payroll.payroll import salary as salary_rules
from shift_payroll.payroll import settings as setting_rules
from shift_payroll.payroll.model import PayrollSetting


def test_defaults():
    setting = setting_rules.create_payroll_setting("t1")

    assert setting.normal_work_hours_per_day == Decimal("7")
    assert setting.normal_work_hours_per_month == Decimal("173")
    assert setting.overtime_calculation_type == OvertimeCalculationType.HOURLY
    assert setting.ump is None


def test_create_coerces_numbers_and_type():
    setting = setting_rules.create_payroll_setting(
        "t1", overtime_rate_1=1.25, overtime_calculation_type="MONTHLY", ump="2500000"
    )

    assert setting.overtime_rate_1 == Decimal("1.25")
    assert setting.overtime_calculation_type == OvertimeCalculationType.MONTHLY
    assert setting.ump == Decimal("2500000")


@pytest.mark.parametrize(
    "options, field",
    [
        ({"normal_work_hours_per_day": 0}, "normal_work_hours_per_day"),
        ({"normal_work_hours_per_day": 25}, "normal_work_hours_per_day"),
        ({"normal_work_hours_per_month": 745}, "normal_work_hours_per_month"),
        ({"overtime_rate_1": "0.5"}, "overtime_rate_1"),
        ({"overtime_rate_1": 2, "overtime_rate_2": "1.5"}, "overtime_rate_2"),
        ({"ump": -1}, "ump"),
    ],
)
def test_invalid_settings_name_the_field(options, field):
    with pytest.raises(InvalidPayrollSetting) as exc:
        setting_rules.create_payroll_setting("t1", **options)
    assert exc.value.field == field


def test_unknown_calculation_type_is_rejected():
    with pytest.raises(InvalidPayrollSetting):
        setting_rules.create_payroll_setting("t1", overtime_calculation_type="WEEKLY")


def test_update_rates_is_partial_and_revalidated():
    setting = PayrollSetting(tenant_id="t1")

    updated = setting_rules.update_rates(setting, overtime_rate_2="2.5", overtime_rate_weekend_3=None)
    assert updated.overtime_rate_1 == Decimal("1.5")
    assert updated.overtime_rate_2 == Decimal("2.5")
    assert updated.overtime_rate_weekend_3 == Decimal("4.0")

    with pytest.raises(InvalidPayrollSetting):
        setting_rules.update_rates(setting, overtime_rate_1="3")
    with pytest.raises(InvalidPayrollSetting):
        setting_rules.update_rates(setting, normal_work_hours_per_day=8)


def test_update_setting_changes_other_fields():
    updated = setting_rules.update_setting(PayrollSetting(tenant_id="t1"), normal_work_hours_per_day=8)
    assert updated.normal_work_hours_per_day == Decimal("8")

    with pytest.raises(InvalidPayrollSetting):
        setting_rules.update_setting(PayrollSetting(tenant_id="t1"), tenant_id="t2")


def test_hourly_rate_is_floored_basic_over_normal_month():
    setting = PayrollSetting(tenant_id="t1")

    assert setting_rules.hourly_rate(setting, 1730) == Decimal("10")
    assert setting_rules.hourly_rate(setting, 1000) == Decimal("5")
    with pytest.raises(InvalidSalaryConfig):
        setting_rules.hourly_rate(setting, 0)


@pytest.mark.parametrize(
    "hours, weekend, expected",
    [
        ("0", False, "0"),
        ("0.5", False, "1.5"),
        ("1", False, "1.5"),
        ("1.5", False, "2.0"),
        ("8", True, "2.0"),
        ("8.5", True, "3.0"),
        ("9", True, "3.0"),
        ("9.5", True, "4.0"),
    ],
)
def test_overtime_rate_tiers(hours, weekend, expected):
    setting = PayrollSetting(tenant_id="t1")
    assert setting_rules.overtime_rate(setting, Decimal(hours), weekend) == Decimal(expected)


def test_weekday_overtime_pay_splits_first_hour():
    setting = PayrollSetting(tenant_id="t1")

    assert setting_rules.weekday_overtime_pay(setting, Decimal("3"), Decimal("10")) == Decimal("55")
    assert setting_rules.weekday_overtime_pay(setting, Decimal("0.5"), Decimal("10")) == Decimal("7.5")


def test_weekend_overtime_pay_uses_single_tier():
    setting = PayrollSetting(tenant_id="t1")

    assert setting_rules.weekend_overtime_pay(setting, Decimal("9"), Decimal("10")) == Decimal("270")


def test_overtime_pay_by_calculation_type():
    hourly = PayrollSetting(tenant_id="t1")
    monthly = PayrollSetting(tenant_id="t1", overtime_calculation_type=OvertimeCalculationType.MONTHLY)

    assert setting_rules.overtime_pay(hourly, Decimal("3"), Decimal("10")) == Decimal("55")
    assert setting_rules.overtime_pay(monthly, Decimal("3"), Decimal("10")) == Decimal("45")
    assert setting_rules.overtime_pay(monthly, Decimal("0"), Decimal("10")) == Decimal("0")


def test_ump_and_recommended_hours():
    setting = PayrollSetting(tenant_id="t1", ump=Decimal("2000"))

    assert setting_rules.is_ump_compliant(setting, 2000)
    assert not setting_rules.is_ump_compliant(setting, 1999)
    assert setting_rules.is_ump_compliant(PayrollSetting(tenant_id="t1"), 1)
    assert setting_rules.recommended_minimum_salary(setting) == Decimal("2000")
    assert setting_rules.max_recommended_hours_per_day(setting) == Decimal("10")
    assert setting_rules.max_recommended_hours_per_week(setting) == Decimal("56")


def test_salary_helpers():
    monthly = salary_rules.create_salary("u1", 1730, 200)
    daily = salary_rules.create_salary("u2", "100", salary_type="DAILY")
    hourly = salary_rules.create_salary("u3", "12.5", salary_type=SalaryType.HOURLY)

    assert monthly.total_salary == Decimal("1930")
    assert salary_rules.hourly_rate(monthly) == Decimal("10")
    assert salary_rules.hourly_rate(hourly) == Decimal("12.5")
    assert salary_rules.daily_salary(daily) == Decimal("100")
    assert salary_rules.daily_salary(salary_rules.create_salary("u4", 2500)) == Decimal("100")
    assert salary_rules.is_above_minimum_wage(monthly, 1500)
    assert not salary_rules.is_above_minimum_wage(monthly, 2000)
    assert salary_rules.is_above_minimum_wage(monthly, None)


def test_salary_validation():
    with pytest.raises(InvalidSalaryConfig):
        salary_rules.create_salary("u1", 0)
    with pytest.raises(InvalidSalaryConfig):
        salary_rules.create_salary("u1", 100, -1)
    with pytest.raises(InvalidSalaryConfig):
        salary_rules.create_salary("u1", 100, salary_type="WEEKLY")


def test_salary_update_and_change_type():
    salary = salary_rules.create_salary("u1", 1000)

    raised = salary_rules.update_amount(salary, basic_salary=1200)
    assert raised.basic_salary == Decimal("1200")
    assert raised.fixed_allowance == Decimal("0")
    with pytest.raises(InvalidSalaryConfig):
        salary_rules.update_amount(salary, fixed_allowance=-5)

    assert salary_rules.change_type(salary, "HOURLY").salary_type == SalaryType.HOURLY
    with pytest.raises(InvalidSalaryConfig):
        salary_rules.change_type(salary, "YEARLY")


def test_hours_bound_messages_match_the_checks():
    with pytest.raises(InvalidPayrollSetting) as per_day:
        setting_rules.create_payroll_setting("t1", normal_work_hours_per_day=25)
    with pytest.raises(InvalidPayrollSetting) as per_month:
        setting_rules.create_payroll_setting("t1", normal_work_hours_per_month=745)

    assert "greater than 0 and at most 24" in per_day.value.message
    assert "greater than 0 and at most 744" in per_month.value.message
    assert setting_rules.create_payroll_setting("t1", normal_work_hours_per_day="0.5").normal_work_hours_per_day == Decimal("0.5")
