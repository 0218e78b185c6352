"""PayrollDetail construction and amendments.

Take-home pay is never stored independently of its components: every
constructor and amendment goes through ``take_home``.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from ..common.money import ZERO, Number, non_negative, round_money
from ..common.validators import require_non_negative
from ..core.exceptions import DetailLocked, InvalidAmount
from .model import PayrollDetail


def take_home(
    basic_salary_amount: Decimal,
    fixed_allowance_amount: Decimal,
    overtime_pay: Decimal,
    bonus_amount: Decimal,
    deductions_amount: Decimal,
) -> Decimal:
    gross = basic_salary_amount + fixed_allowance_amount + overtime_pay + bonus_amount
    return round_money(non_negative(gross - deductions_amount))


def create_detail(
    *,
    detail_id: str,
    tenant_id: str,
    period_id: str,
    staff_id: str,
    basic_salary_amount: Number,
    fixed_allowance_amount: Number = 0,
    overtime_hours: Number = 0,
    overtime_pay: Number = 0,
    bonus_amount: Number = 0,
    deductions_amount: Number = 0,
) -> PayrollDetail:
    amounts = {
        name: round_money(require_non_negative(value, name, entity_id=staff_id))
        for name, value in (
            ("basic_salary_amount", basic_salary_amount),
            ("fixed_allowance_amount", fixed_allowance_amount),
            ("overtime_hours", overtime_hours),
            ("overtime_pay", overtime_pay),
            ("bonus_amount", bonus_amount),
            ("deductions_amount", deductions_amount),
        )
    }
    return PayrollDetail(
        detail_id=detail_id,
        tenant_id=tenant_id,
        period_id=period_id,
        staff_id=staff_id,
        take_home_pay=take_home(
            amounts["basic_salary_amount"],
            amounts["fixed_allowance_amount"],
            amounts["overtime_pay"],
            amounts["bonus_amount"],
            amounts["deductions_amount"],
        ),
        **amounts,
    )


def recompute(detail: PayrollDetail, **changes) -> PayrollDetail:
    updated = replace(detail, **changes)
    return replace(
        updated,
        take_home_pay=take_home(
            updated.basic_salary_amount,
            updated.fixed_allowance_amount,
            updated.overtime_pay,
            updated.bonus_amount,
            updated.deductions_amount,
        ),
    )


def is_valid(detail: PayrollDetail) -> bool:
    return all(
        value >= ZERO
        for value in (
            detail.basic_salary_amount,
            detail.fixed_allowance_amount,
            detail.overtime_hours,
            detail.overtime_pay,
            detail.bonus_amount,
            detail.deductions_amount,
            detail.take_home_pay,
        )
    )


def can_be_modified(detail: PayrollDetail) -> bool:
    return not detail.is_paid


def can_be_paid(detail: PayrollDetail) -> bool:
    return not detail.is_paid and detail.take_home_pay > ZERO and is_valid(detail)


def _ensure_unpaid(detail: PayrollDetail, action: str) -> None:
    if detail.is_paid:
        raise DetailLocked(
            f"Cannot {action} a paid payroll detail",
            entity_id=detail.detail_id,
            field="is_paid",
            context={"paid_at": detail.paid_at.isoformat() if detail.paid_at else None},
        )


def add_bonus(detail: PayrollDetail, amount: Number) -> PayrollDetail:
    _ensure_unpaid(detail, "add bonus to")
    delta = require_non_negative(amount, "bonus_amount", entity_id=detail.detail_id)
    return recompute(detail, bonus_amount=round_money(detail.bonus_amount + delta))


def add_deduction(detail: PayrollDetail, amount: Number) -> PayrollDetail:
    _ensure_unpaid(detail, "add deduction to")
    delta = require_non_negative(amount, "deductions_amount", entity_id=detail.detail_id)
    return recompute(detail, deductions_amount=round_money(detail.deductions_amount + delta))


def mark_paid(detail: PayrollDetail, now: datetime) -> PayrollDetail:
    _ensure_unpaid(detail, "mark as paid")
    if not can_be_paid(detail):
        raise InvalidAmount(
            "Payroll detail with no take-home pay cannot be marked as paid",
            entity_id=detail.detail_id,
            field="take_home_pay",
            context={"take_home_pay": str(detail.take_home_pay)},
        )
    return replace(detail, is_paid=True, paid_at=now)


def effective_overtime_rate(detail: PayrollDetail) -> Decimal:
    if detail.overtime_hours <= ZERO:
        return ZERO
    return round_money(detail.overtime_pay / detail.overtime_hours)


def validate_calculation(detail: PayrollDetail) -> bool:
    expected = take_home(
        detail.basic_salary_amount,
        detail.fixed_allowance_amount,
        detail.overtime_pay,
        detail.bonus_amount,
        detail.deductions_amount,
    )
    return expected == detail.take_home_pay
