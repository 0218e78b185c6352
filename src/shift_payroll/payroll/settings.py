"""Payroll settings and overtime rate resolution."""
from __future__ import annotations

from dataclasses import fields, replace
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, Number, floor_whole, non_negative, to_decimal
from ..core.constants import (
    MAX_DAILY_OVERTIME_HOURS,
    MAX_HOURS_PER_DAY,
    MAX_HOURS_PER_MONTH,
    MAX_WEEKLY_OVERTIME_HOURS,
    WEEKDAY_TIER_1_HOURS,
    WEEKEND_TIER_1_MAX_HOURS,
    WEEKEND_TIER_2_MAX_HOURS,
    WORKING_DAYS_PER_WEEK,
)
from ..core.enums import OvertimeCalculationType
from ..core.exceptions import InvalidPayrollSetting, InvalidSalaryConfig
from .model import PayrollSetting

_RATE_FIELDS = (
    "overtime_rate_1",
    "overtime_rate_2",
    "overtime_rate_weekend_1",
    "overtime_rate_weekend_2",
    "overtime_rate_weekend_3",
)
_DECIMAL_FIELDS = set(_RATE_FIELDS) | {"normal_work_hours_per_day", "normal_work_hours_per_month"}


def _invalid(setting: PayrollSetting, message: str, field: str, **context) -> InvalidPayrollSetting:
    return InvalidPayrollSetting(message, entity_id=setting.tenant_id, field=field, context=context)


def validate_payroll_setting(setting: PayrollSetting) -> None:
    per_day = setting.normal_work_hours_per_day
    if per_day <= ZERO or per_day > MAX_HOURS_PER_DAY:
        raise _invalid(setting, "Normal work hours per day must be greater than 0 and at most 24",
                       "normal_work_hours_per_day", value=str(per_day), max=str(MAX_HOURS_PER_DAY))

    per_month = setting.normal_work_hours_per_month
    if per_month <= ZERO or per_month > MAX_HOURS_PER_MONTH:
        raise _invalid(setting, "Normal work hours per month must be greater than 0 and at most 744",
                       "normal_work_hours_per_month", value=str(per_month), max=str(MAX_HOURS_PER_MONTH))

    for name in ("overtime_rate_1", "overtime_rate_2"):
        rate = getattr(setting, name)
        if rate < 1:
            raise _invalid(setting, "Overtime rates must be at least 1.0 (100% of regular rate)",
                           name, value=str(rate), min="1")

    if setting.overtime_rate_2 < setting.overtime_rate_1:
        raise _invalid(setting, "Overtime rate 2 must be greater than or equal to overtime rate 1",
                       "overtime_rate_2", value=str(setting.overtime_rate_2), min=str(setting.overtime_rate_1))

    try:
        OvertimeCalculationType(setting.overtime_calculation_type)
    except ValueError:
        raise _invalid(setting, "Invalid overtime calculation type", "overtime_calculation_type",
                       value=setting.overtime_calculation_type) from None

    if setting.ump is not None and setting.ump < ZERO:
        raise _invalid(setting, "UMP (minimum wage) cannot be negative", "ump", value=str(setting.ump))


def _coerce(values: dict) -> dict:
    out = {}
    for key, value in values.items():
        if key in _DECIMAL_FIELDS:
            value = to_decimal(value, field=key)
        elif key == "ump" and value is not None:
            value = to_decimal(value, field=key)
        elif key == "overtime_calculation_type" and isinstance(value, str):
            try:
                value = OvertimeCalculationType(value)
            except ValueError:
                raise InvalidPayrollSetting("Invalid overtime calculation type", field=key,
                                            context={"value": value}) from None
        out[key] = value
    return out


def create_payroll_setting(tenant_id: str, **options) -> PayrollSetting:
    setting = PayrollSetting(tenant_id=tenant_id, **_coerce(options))
    validate_payroll_setting(setting)
    return setting


def update_rates(setting: PayrollSetting, **rates: Optional[Number]) -> PayrollSetting:
    """Partial rate update; ``None`` keeps the current value."""
    unknown = set(rates) - set(_RATE_FIELDS)
    if unknown:
        raise _invalid(setting, "Unknown overtime rate fields", sorted(unknown)[0], fields=sorted(unknown))
    changes = _coerce({k: v for k, v in rates.items() if v is not None})
    updated = replace(setting, **changes)
    validate_payroll_setting(updated)
    return updated


def update_setting(setting: PayrollSetting, **changes) -> PayrollSetting:
    known = {f.name for f in fields(PayrollSetting)} - {"tenant_id", "setting_id"}
    unknown = set(changes) - known
    if unknown:
        raise _invalid(setting, "Unknown payroll setting fields", sorted(unknown)[0], fields=sorted(unknown))
    updated = replace(setting, **_coerce(changes))
    validate_payroll_setting(updated)
    return updated


def hourly_rate(setting: PayrollSetting, basic_salary: Number) -> Decimal:
    """Whole-unit hourly rate used for overtime: ``floor(basic / normal month)``."""
    basic = to_decimal(basic_salary)
    if basic <= ZERO:
        raise InvalidSalaryConfig("Basic salary must be greater than 0", field="basic_salary",
                                  context={"value": str(basic), "exclusive_min": "0"})
    return floor_whole(basic / setting.normal_work_hours_per_month)


def overtime_rate(setting: PayrollSetting, overtime_hours: Number, is_weekend: bool = False) -> Decimal:
    hours = to_decimal(overtime_hours)
    if hours <= ZERO:
        return ZERO
    if is_weekend:
        if hours <= WEEKEND_TIER_1_MAX_HOURS:
            return setting.overtime_rate_weekend_1
        if hours <= WEEKEND_TIER_2_MAX_HOURS:
            return setting.overtime_rate_weekend_2
        return setting.overtime_rate_weekend_3
    if hours <= WEEKDAY_TIER_1_HOURS:
        return setting.overtime_rate_1
    return setting.overtime_rate_2


def weekday_overtime_pay(setting: PayrollSetting, overtime_hours: Number, rate_per_hour: Number) -> Decimal:
    """First hour at tier 1, the remainder at tier 2. Unrounded."""
    hours = non_negative(to_decimal(overtime_hours))
    rate = to_decimal(rate_per_hour)
    first = min(hours, WEEKDAY_TIER_1_HOURS)
    rest = hours - first
    return first * rate * setting.overtime_rate_1 + rest * rate * setting.overtime_rate_2


def weekend_overtime_pay(setting: PayrollSetting, overtime_hours: Number, rate_per_hour: Number) -> Decimal:
    """The whole day's overtime at the single tier its length falls into."""
    hours = non_negative(to_decimal(overtime_hours))
    return hours * to_decimal(rate_per_hour) * overtime_rate(setting, hours, is_weekend=True)


def overtime_pay(setting: PayrollSetting, overtime_hours: Number, rate_per_hour: Number) -> Decimal:
    """Pay for a lump of overtime hours, by calculation type.

    Weekend flags play no part here.
    """
    hours = non_negative(to_decimal(overtime_hours))
    if hours == ZERO:
        return ZERO
    if setting.overtime_calculation_type == OvertimeCalculationType.HOURLY:
        return weekday_overtime_pay(setting, hours, rate_per_hour)
    return hours * to_decimal(rate_per_hour) * setting.overtime_rate_1


def is_ump_compliant(setting: PayrollSetting, salary_amount: Number) -> bool:
    if setting.ump is None or setting.ump <= ZERO:
        return True
    return to_decimal(salary_amount) >= setting.ump


def recommended_minimum_salary(setting: PayrollSetting) -> Decimal:
    return setting.ump or ZERO


def max_recommended_hours_per_day(setting: PayrollSetting) -> Decimal:
    return setting.normal_work_hours_per_day + MAX_DAILY_OVERTIME_HOURS


def max_recommended_hours_per_week(setting: PayrollSetting) -> Decimal:
    return setting.normal_work_hours_per_day * WORKING_DAYS_PER_WEEK + MAX_WEEKLY_OVERTIME_HOURS

