from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, Sequence

from ...core.enums import CalculationMode
from ..model import OvertimeBreakdown, PayrollSetting, WorkDay


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll).

    Returns unrounded hours and pay; the service rounds once at the end.
    """

    mode: CalculationMode

    @abstractmethod
    def breakdown(
        self,
        setting: PayrollSetting,
        hourly_rate: Decimal,
        days: Sequence[WorkDay],
        manual_overtime_hours: Optional[Decimal] = None,
    ) -> OvertimeBreakdown:
        raise NotImplementedError
