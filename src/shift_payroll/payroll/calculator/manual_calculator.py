from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...common.money import ZERO
from ...core.enums import CalculationMode
from ..model import OvertimeBreakdown, PayrollSetting, WorkDay
from ..settings import overtime_pay
from .base import PayrollCalculator


class ManualOvertimeCalculator(PayrollCalculator):
    """Overtime hours entered by hand on top of the normal month."""

    mode = CalculationMode.MANUAL

    def breakdown(
        self,
        setting: PayrollSetting,
        hourly_rate: Decimal,
        days: Sequence[WorkDay],
        manual_overtime_hours: Optional[Decimal] = None,
    ) -> OvertimeBreakdown:
        hours = manual_overtime_hours if manual_overtime_hours is not None else ZERO
        return OvertimeBreakdown(
            total_hours=setting.normal_work_hours_per_month + hours,
            overtime_hours=hours,
            overtime_pay=overtime_pay(setting, hours, hourly_rate),
        )
