"""Resolution of configured payroll components into amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from hris_payroll.calculators.catalog import resolve_key
from hris_payroll.calculators.types import (
    ZERO,
    CalculatedComponent,
    PayrollComponent,
    to_decimal,
)

HUNDRED = Decimal("100")


class ComponentCalculator:
    """Turns component configuration into calculated amounts.

    Resolution rules:
    - Inactive components are skipped entirely
    - percentage > 0: basic_salary * percentage / 100
    - otherwise amount > 0: the fixed amount
    - otherwise: 0

    Amounts are kept at full precision. IDR has no minor unit, so
    rounding to whole rupiah only happens for display.
    """

    RUPIAH = Decimal("1")

    @staticmethod
    def round_to_rupiah(amount: Decimal) -> Decimal:
        """Round amount to whole rupiah."""
        return amount.quantize(ComponentCalculator.RUPIAH, rounding=ROUND_HALF_UP)

    @staticmethod
    def resolve_amount(
        basic_salary: Decimal, component: PayrollComponent
    ) -> tuple[Decimal, bool]:
        """Return (amount, is_percentage) for a single component."""
        if component.percentage > 0:
            return basic_salary * component.percentage / HUNDRED, True
        if component.amount > 0:
            return component.amount, False
        return ZERO, False

    @staticmethod
    def calculate_components(
        basic_salary: Decimal, components: Iterable[PayrollComponent]
    ) -> list[CalculatedComponent]:
        """Calculate every active component against a basic salary.

        A non-positive basic salary yields no components. Input order is
        preserved.
        """
        basic_salary = to_decimal(basic_salary)
        if basic_salary <= 0:
            return []

        calculated: list[CalculatedComponent] = []
        for component in components:
            if not component.is_active:
                continue
            amount, is_percentage = ComponentCalculator.resolve_amount(
                basic_salary, component
            )
            calculated.append(
                CalculatedComponent(
                    name=component.name,
                    type=component.type,
                    category=component.category,
                    amount=amount,
                    percentage=component.percentage,
                    is_percentage=is_percentage,
                    key=resolve_key(component),
                )
            )
        return calculated

    @staticmethod
    def format_rupiah(amount: Decimal) -> str:
        """Format an amount the way payslips show it, e.g. ``Rp 5.000.000``."""
        rounded = ComponentCalculator.round_to_rupiah(amount)
        sign = "-" if rounded < 0 else ""
        grouped = f"{abs(int(rounded)):,}".replace(",", ".")
        return f"{sign}Rp {grouped}"
