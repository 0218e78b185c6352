from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...common.money import ZERO
from ...core.enums import CalculationMode
from ..model import OvertimeBreakdown, PayrollSetting, WorkDay
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: the normal month, no overtime."""

    mode = CalculationMode.DEFAULT

    def breakdown(
        self,
        setting: PayrollSetting,
        hourly_rate: Decimal,
        days: Sequence[WorkDay],
        manual_overtime_hours: Optional[Decimal] = None,
    ) -> OvertimeBreakdown:
        return OvertimeBreakdown(
            total_hours=setting.normal_work_hours_per_month,
            overtime_hours=ZERO,
            overtime_pay=ZERO,
        )
