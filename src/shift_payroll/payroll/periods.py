"""Payroll period lifecycle: OPEN until finalized, then read-only."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional

from ..common.datetime_utils import add_months, is_weekend, today_local
from ..core.constants import MAX_FUTURE_MONTHS, MAX_PERIOD_DAYS
from ..core.exceptions import InvalidPeriod, PeriodLocked, PeriodNotFinalizable, PeriodOverlap
from .model import PayrollPeriod
from .repository import PayrollPeriodRepository

logger = logging.getLogger(__name__)


def duration_days(period: PayrollPeriod) -> int:
    """Inclusive day count."""
    return (period.period_end - period.period_start).days + 1


def includes(period: PayrollPeriod, day: date) -> bool:
    return period.period_start <= day <= period.period_end


def working_days_count(period: PayrollPeriod, exclude_weekends: bool = True) -> int:
    total = duration_days(period)
    if not exclude_weekends:
        return total
    return sum(
        1 for offset in range(total) if not is_weekend(period.period_start + timedelta(days=offset))
    )


def is_active(period: PayrollPeriod, today: date) -> bool:
    return includes(period, today)


def is_past(period: PayrollPeriod, today: date) -> bool:
    return today > period.period_end


def is_future(period: PayrollPeriod, today: date) -> bool:
    return today < period.period_start


def can_be_modified(period: PayrollPeriod) -> bool:
    return not period.is_finalized


def can_be_finalized(period: PayrollPeriod, today: date) -> bool:
    return is_past(period, today) and not period.is_finalized


def validate_period(period: PayrollPeriod, today: date) -> List[str]:
    """All rule violations of the period's own dates, as messages."""
    errors: List[str] = []
    if period.period_start >= period.period_end:
        errors.append("Period start date must be before end date")
    if duration_days(period) > MAX_PERIOD_DAYS:
        errors.append(f"Payroll period cannot exceed {MAX_PERIOD_DAYS} days")
    if period.period_start > add_months(today, MAX_FUTURE_MONTHS):
        errors.append(f"Payroll period cannot start more than {MAX_FUTURE_MONTHS} months in the future")
    return errors


def _require_valid(period: PayrollPeriod, today: date) -> None:
    errors = validate_period(period, today)
    if errors:
        raise InvalidPeriod(
            ", ".join(errors),
            entity_id=period.period_id,
            field="period_start" if period.period_start >= period.period_end else "period_end",
            context={
                "errors": errors,
                "period_start": period.period_start.isoformat(),
                "period_end": period.period_end.isoformat(),
                "max_days": MAX_PERIOD_DAYS,
                "latest_start": add_months(today, MAX_FUTURE_MONTHS).isoformat(),
            },
        )


def ensure_no_overlap(period: PayrollPeriod, siblings: Iterable[PayrollPeriod]) -> None:
    for other in siblings:
        if other.period_id == period.period_id or other.tenant_id != period.tenant_id:
            continue
        if other.period_start <= period.period_end and other.period_end >= period.period_start:
            raise PeriodOverlap(
                "Payroll period overlaps with an existing period",
                entity_id=period.period_id,
                field="period_start",
                context={
                    "conflicting_period_id": other.period_id,
                    "conflicting_start": other.period_start.isoformat(),
                    "conflicting_end": other.period_end.isoformat(),
                },
            )


def create_period(
    *,
    period_id: str,
    tenant_id: str,
    period_start: date,
    period_end: date,
    today: date,
    siblings: Iterable[PayrollPeriod] = (),
) -> PayrollPeriod:
    period = PayrollPeriod(period_id=period_id, tenant_id=tenant_id,
                           period_start=period_start, period_end=period_end)
    _require_valid(period, today)
    ensure_no_overlap(period, siblings)
    return period


def update_period(
    period: PayrollPeriod,
    *,
    today: date,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
    siblings: Iterable[PayrollPeriod] = (),
) -> PayrollPeriod:
    if period.is_finalized:
        raise PeriodLocked("Cannot modify a finalized payroll period", entity_id=period.period_id,
                           field="is_finalized")
    updated = replace(
        period,
        period_start=period.period_start if period_start is None else period_start,
        period_end=period.period_end if period_end is None else period_end,
    )
    _require_valid(updated, today)
    ensure_no_overlap(updated, siblings)
    return updated


def finalize(period: PayrollPeriod, today: date) -> PayrollPeriod:
    if not can_be_finalized(period, today):
        raise PeriodNotFinalizable(
            "Period cannot be finalized: either it is not past period or already finalized",
            entity_id=period.period_id,
            field="is_finalized" if period.is_finalized else "period_end",
            context={
                "is_finalized": period.is_finalized,
                "period_end": period.period_end.isoformat(),
                "today": today.isoformat(),
            },
        )
    return replace(period, is_finalized=True)


class PayrollPeriodService:
    """Period lifecycle with the sibling lookup and clock wired in."""

    def __init__(
        self,
        periods: PayrollPeriodRepository,
        *,
        today: Callable[[], date] = today_local,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self._periods = periods
        self._today = today
        self._id_factory = id_factory

    def create(self, *, tenant_id: str, period_start: date, period_end: date) -> PayrollPeriod:
        period = create_period(
            period_id=self._id_factory(),
            tenant_id=tenant_id,
            period_start=period_start,
            period_end=period_end,
            today=self._today(),
            siblings=self._periods.list_for_tenant(tenant_id),
        )
        logger.info("[payroll] period %s created: %s..%s", period.period_id, period_start, period_end)
        return period

    def update(self, period: PayrollPeriod, *, period_start: Optional[date] = None,
               period_end: Optional[date] = None) -> PayrollPeriod:
        return update_period(
            period,
            today=self._today(),
            period_start=period_start,
            period_end=period_end,
            siblings=self._periods.list_for_tenant(period.tenant_id),
        )

    def validate(self, period: PayrollPeriod) -> List[str]:
        return validate_period(period, self._today())

    def siblings(self, period: PayrollPeriod) -> List[PayrollPeriod]:
        return [p for p in self._periods.list_for_tenant(period.tenant_id) if p.period_id != period.period_id]

    def finalize(self, period: PayrollPeriod) -> PayrollPeriod:
        finalized = finalize(period, self._today())
        logger.info("[payroll] period %s finalized", period.period_id)
        return finalized
