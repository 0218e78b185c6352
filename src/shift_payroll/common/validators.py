from __future__ import annotations

from decimal import Decimal
from typing import Optional, Type

from ..core.exceptions import InvalidAmount, ValidationError
from .money import Number, to_decimal


def require_non_empty(value: str, field_name: str, *, error: Type[ValidationError] = ValidationError) -> str:
    if not value or not value.strip():
        raise error(f"{field_name} must not be empty", field=field_name)
    return value.strip()


def require_non_negative(
    value: Number,
    field_name: str,
    *,
    error: Type[ValidationError] = InvalidAmount,
    entity_id=None,
) -> Decimal:
    amount = to_decimal(value, field=field_name)
    if amount < 0:
        raise error(
            f"{field_name} cannot be negative",
            entity_id=entity_id,
            field=field_name,
            context={"value": str(amount), "min": "0"},
        )
    return amount


def require_positive(
    value: Number,
    field_name: str,
    *,
    error: Type[ValidationError] = InvalidAmount,
    entity_id=None,
) -> Decimal:
    amount = to_decimal(value, field=field_name)
    if amount <= 0:
        raise error(
            f"{field_name} must be greater than 0",
            entity_id=entity_id,
            field=field_name,
            context={"value": str(amount), "exclusive_min": "0"},
        )
    return amount


def require_between(
    value: Number,
    field_name: str,
    *,
    low: Number,
    high: Number,
    low_inclusive: bool = True,
    error: Type[ValidationError] = ValidationError,
    entity_id: Optional[object] = None,
) -> Decimal:
    amount = to_decimal(value, field=field_name)
    lo, hi = to_decimal(low), to_decimal(high)
    too_low = amount < lo if low_inclusive else amount <= lo
    if too_low or amount > hi:
        raise error(
            f"{field_name} must be between {lo} and {hi}",
            entity_id=entity_id,
            field=field_name,
            context={"value": str(amount), "min": str(lo), "max": str(hi)},
        )
    return amount
