"""Pytest fixtures for HRIS payroll tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from hris_payroll.calculators.types import (
    ComponentCategory,
    ComponentType,
    ManualDeductions,
    PayrollComponent,
)


def make_component(
    name: str,
    component_type: ComponentType = ComponentType.INCOME,
    category: ComponentCategory = ComponentCategory.ALLOWANCE,
    percentage: str = "0",
    amount: str = "0",
    is_active: bool = True,
    **kwargs,
) -> PayrollComponent:
    """Build a component with string-typed money for readability."""
    return PayrollComponent(
        name=name,
        type=component_type,
        category=category,
        percentage=Decimal(percentage),
        amount=Decimal(amount),
        is_active=is_active,
        **kwargs,
    )


@pytest.fixture
def position_allowance() -> PayrollComponent:
    return make_component("Tunjangan Jabatan", amount="500000")


@pytest.fixture
def health_company() -> PayrollComponent:
    return make_component(
        "BPJS Kesehatan (Perusahaan)",
        ComponentType.INCOME,
        ComponentCategory.BPJS,
        percentage="4",
    )


@pytest.fixture
def health_employee() -> PayrollComponent:
    return make_component(
        "BPJS Kesehatan (Karyawan)",
        ComponentType.DEDUCTION,
        ComponentCategory.BPJS,
        percentage="1",
    )


@pytest.fixture
def example_components(
    position_allowance, health_company, health_employee
) -> list[PayrollComponent]:
    """Allowance, company BPJS and employee BPJS for a 5,000,000 salary."""
    return [position_allowance, health_company, health_employee]


@pytest.fixture
def no_manual_deductions() -> ManualDeductions:
    return ManualDeductions()
