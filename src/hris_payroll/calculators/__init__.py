"""Payroll calculation engine."""

from hris_payroll.calculators.aggregator import PayrollAggregator
from hris_payroll.calculators.component_calculator import ComponentCalculator
from hris_payroll.calculators.engine import PayrollCalculator

__all__ = [
    "ComponentCalculator",
    "PayrollAggregator",
    "PayrollCalculator",
]
