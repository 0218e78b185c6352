from __future__ import annotations

from dataclasses import dataclass, field

from .attendance_calculator import AttendanceBasedCalculator
from .base import PayrollCalculator
from .hybrid_calculator import HybridCalculator
from .manual_calculator import ManualOvertimeCalculator
from .standard_calculator import StandardPayrollCalculator


@dataclass
class PayrollCalculatorFactory:
    """Factory Pattern: pick the calculation mode from the available inputs.

    Manual overtime wins over records; records count as actual hours only
    when asked to.
    """

    manual: PayrollCalculator = field(default_factory=ManualOvertimeCalculator)
    attendance_based: PayrollCalculator = field(default_factory=AttendanceBasedCalculator)
    hybrid: PayrollCalculator = field(default_factory=HybridCalculator)
    standard: PayrollCalculator = field(default_factory=StandardPayrollCalculator)

    def for_inputs(self, *, has_manual_overtime: bool, has_records: bool,
                   use_actual_work_hours: bool) -> PayrollCalculator:
        if has_manual_overtime:
            return self.manual
        if has_records and use_actual_work_hours:
            return self.attendance_based
        if has_records:
            return self.hybrid
        return self.standard
