from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...common.money import non_negative
from ...core.enums import CalculationMode
from ..model import OvertimeBreakdown, PayrollSetting, WorkDay
from ..settings import overtime_pay
from ..work_hours import total_hours
from .base import PayrollCalculator


class HybridCalculator(PayrollCalculator):
    """Records give the hour total; overtime is billed like manual overtime.

    Per-day weekend flags are not consulted in this mode.
    """

    mode = CalculationMode.HYBRID

    def breakdown(
        self,
        setting: PayrollSetting,
        hourly_rate: Decimal,
        days: Sequence[WorkDay],
        manual_overtime_hours: Optional[Decimal] = None,
    ) -> OvertimeBreakdown:
        total = total_hours(days)
        hours = non_negative(total - setting.normal_work_hours_per_month)
        return OvertimeBreakdown(
            total_hours=total,
            overtime_hours=hours,
            overtime_pay=overtime_pay(setting, hours, hourly_rate),
        )
