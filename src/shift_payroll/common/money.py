"""Fixed-point helpers for money and fractional hours.

Everything monetary goes through ``Decimal``; rounding to cents happens once,
at the end of a computation, via ``round_money``.
"""
from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from ..core.constants import MINUTES_PER_HOUR, MONEY_PLACES
from ..core.exceptions import InvalidAmount

Number = Union[int, str, float, Decimal]

ZERO = Decimal("0")


def to_decimal(value: Number, *, field: Optional[str] = None) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        # str() keeps the shortest repr, so 1.5 stays 1.5 and not 1.4999...
        amount = _parse(str(value), value, field)
    else:
        amount = _parse(value, value, field)
    if not amount.is_finite():
        raise InvalidAmount(f"{field or 'amount'} must be a finite number", field=field,
                            context={"value": str(value)})
    return amount


def _parse(raw, value, field: Optional[str]) -> Decimal:
    try:
        return Decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmount(f"{field or 'amount'} is not a number", field=field,
                            context={"value": repr(value)}) from exc


def round_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def floor_whole(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_FLOOR)


def hours_from_minutes(minutes: int) -> Decimal:
    return Decimal(minutes) / Decimal(MINUTES_PER_HOUR)


def minutes_from_hours(hours: Decimal) -> int:
    return int((hours * MINUTES_PER_HOUR).to_integral_value(rounding=ROUND_HALF_UP))


def non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO
