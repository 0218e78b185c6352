from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from ..common.money import ZERO, Number, to_decimal
from ..common.validators import require_non_negative, require_positive
from ..core.constants import DEFAULT_NORMAL_HOURS_PER_MONTH, DEFAULT_WORK_DAYS_PER_MONTH
from ..core.enums import SalaryType
from ..core.exceptions import InvalidSalaryConfig
from .model import Salary


def _salary_type(value: Union[str, SalaryType], staff_id: Optional[str] = None) -> SalaryType:
    try:
        return SalaryType(value)
    except ValueError:
        raise InvalidSalaryConfig(
            "Invalid salary type. Must be MONTHLY, DAILY, or HOURLY",
            entity_id=staff_id,
            field="salary_type",
            context={"value": value, "allowed": [t.value for t in SalaryType]},
        ) from None


def validate_salary(salary: Salary) -> None:
    require_positive(salary.basic_salary, "basic_salary", error=InvalidSalaryConfig, entity_id=salary.staff_id)
    require_non_negative(salary.fixed_allowance, "fixed_allowance", error=InvalidSalaryConfig, entity_id=salary.staff_id)
    _salary_type(salary.salary_type, salary.staff_id)


def is_valid(salary: Salary) -> bool:
    return salary.basic_salary > ZERO and salary.fixed_allowance >= ZERO


def create_salary(
    staff_id: str,
    basic_salary: Number,
    fixed_allowance: Number = 0,
    salary_type: Union[str, SalaryType] = SalaryType.MONTHLY,
    **extra,
) -> Salary:
    salary = Salary(
        staff_id=staff_id,
        basic_salary=to_decimal(basic_salary),
        fixed_allowance=to_decimal(fixed_allowance),
        salary_type=_salary_type(salary_type, staff_id),
        **extra,
    )
    validate_salary(salary)
    return salary


def hourly_rate(salary: Salary, work_hours_per_month: Number = DEFAULT_NORMAL_HOURS_PER_MONTH) -> Decimal:
    """Unrounded hourly rate; an HOURLY salary already is one."""
    if salary.salary_type == SalaryType.HOURLY:
        return salary.basic_salary
    hours = require_positive(work_hours_per_month, "work_hours_per_month", error=InvalidSalaryConfig,
                             entity_id=salary.staff_id)
    return salary.basic_salary / hours


def daily_salary(salary: Salary, work_days_per_month: Number = DEFAULT_WORK_DAYS_PER_MONTH) -> Decimal:
    if salary.salary_type == SalaryType.DAILY:
        return salary.basic_salary
    days = require_positive(work_days_per_month, "work_days_per_month", error=InvalidSalaryConfig,
                            entity_id=salary.staff_id)
    return salary.basic_salary / days


def is_above_minimum_wage(salary: Salary, minimum_wage: Optional[Number]) -> bool:
    if minimum_wage is None or to_decimal(minimum_wage) <= ZERO:
        return True
    return salary.basic_salary >= to_decimal(minimum_wage)


def update_amount(
    salary: Salary,
    basic_salary: Optional[Number] = None,
    fixed_allowance: Optional[Number] = None,
) -> Salary:
    updated = replace(
        salary,
        basic_salary=salary.basic_salary if basic_salary is None else to_decimal(basic_salary),
        fixed_allowance=salary.fixed_allowance if fixed_allowance is None else to_decimal(fixed_allowance),
    )
    validate_salary(updated)
    return updated


def change_type(salary: Salary, salary_type: Union[str, SalaryType]) -> Salary:
    return replace(salary, salary_type=_salary_type(salary_type, salary.staff_id))
