"""Payroll calculator - main entry point for recomputation."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from hris_payroll.calculators.aggregator import PayrollAggregator
from hris_payroll.calculators.component_calculator import ComponentCalculator
from hris_payroll.calculators.types import (
    CalculatedComponent,
    ManualDeductions,
    PayrollCalculation,
    PayrollComponent,
    PayrollInputs,
    PayrollRecord,
)

logger = logging.getLogger(__name__)


class PayrollCalculator:
    """Deterministic payroll calculator.

    Pipeline (recomputed from scratch on every input change):
    1) Resolve active components to amounts against the basic salary
    2) Aggregate into subtotals, named fields and net salary

    There is no state between calls; callers hold their own inputs.
    """

    @staticmethod
    def calculate_components(
        basic_salary: Decimal, components: Iterable[PayrollComponent]
    ) -> list[CalculatedComponent]:
        return ComponentCalculator.calculate_components(basic_salary, components)

    @staticmethod
    def aggregate(
        basic_salary: Decimal,
        calculated: list[CalculatedComponent],
        manual: ManualDeductions | None = None,
    ) -> PayrollRecord:
        return PayrollAggregator.aggregate(
            basic_salary, calculated, manual or ManualDeductions()
        )

    @classmethod
    def recompute(cls, inputs: PayrollInputs) -> PayrollCalculation:
        """Recompute the full breakdown for a set of inputs."""
        calculated = cls.calculate_components(inputs.basic_salary, inputs.components)
        record = cls.aggregate(inputs.basic_salary, calculated, inputs.manual_deductions)

        if record.unmapped_components:
            logger.debug(
                "Components without a named payroll field: %s",
                ", ".join(record.unmapped_components),
            )

        return PayrollCalculation(
            inputs=inputs,
            calculated_components=calculated,
            record=record,
        )

    @classmethod
    def net_before_manual_deductions(
        cls, basic_salary: Decimal, components: Iterable[PayrollComponent]
    ) -> Decimal:
        """Net salary of the same inputs with no manual deductions."""
        calculated = cls.calculate_components(basic_salary, components)
        return cls.aggregate(basic_salary, calculated).net_salary
