"""Shift payroll engine.

This package is organized by feature modules (shifts, attendance, staff_shifts,
payroll) with pure rule functions, thin services over repository protocols and
an explicit composition root in ``container``.
"""

__version__ = "0.1.0"
