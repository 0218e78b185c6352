from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...common.money import ZERO, non_negative
from ...core.enums import CalculationMode, OvertimeCalculationType
from ..model import OvertimeBreakdown, PayrollSetting, WorkDay
from ..settings import weekday_overtime_pay, weekend_overtime_pay
from ..work_hours import total_hours
from .base import PayrollCalculator


class AttendanceBasedCalculator(PayrollCalculator):
    """Overtime from the actual worked days.

    HOURLY type bills each day's excess over the normal day: weekdays on the
    split schedule, weekends wholly at the tier the day's excess falls into.
    MONTHLY type bills the month's excess at tier 1.
    """

    mode = CalculationMode.ATTENDANCE_BASED

    def breakdown(
        self,
        setting: PayrollSetting,
        hourly_rate: Decimal,
        days: Sequence[WorkDay],
        manual_overtime_hours: Optional[Decimal] = None,
    ) -> OvertimeBreakdown:
        total = total_hours(days)

        if setting.overtime_calculation_type == OvertimeCalculationType.MONTHLY:
            hours = non_negative(total - setting.normal_work_hours_per_month)
            return OvertimeBreakdown(
                total_hours=total,
                overtime_hours=hours,
                overtime_pay=hours * hourly_rate * setting.overtime_rate_1,
            )

        overtime = ZERO
        pay = ZERO
        for day in days:
            excess = non_negative(day.hours - setting.normal_work_hours_per_day)
            if excess == ZERO:
                continue
            overtime += excess
            if day.is_weekend:
                pay += weekend_overtime_pay(setting, excess, hourly_rate)
            else:
                pay += weekday_overtime_pay(setting, excess, hourly_rate)
        return OvertimeBreakdown(total_hours=total, overtime_hours=overtime, overtime_pay=pay)
