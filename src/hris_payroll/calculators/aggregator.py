"""Aggregation of calculated components into a payroll record."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from hris_payroll.calculators.types import (
    ZERO,
    CalculatedComponent,
    ComponentCategory,
    ComponentKey,
    ComponentType,
    ManualDeductions,
    PayrollRecord,
    to_decimal,
)

# key -> (record field, type the component must have)
NAMED_FIELDS: dict[ComponentKey, tuple[str, ComponentType]] = {
    ComponentKey.POSITION_ALLOWANCE: ("position_allowance", ComponentType.INCOME),
    ComponentKey.MANAGEMENT_ALLOWANCE: ("management_allowance", ComponentType.INCOME),
    ComponentKey.PHONE_ALLOWANCE: ("phone_allowance", ComponentType.INCOME),
    ComponentKey.INCENTIVE_ALLOWANCE: ("incentive_allowance", ComponentType.INCOME),
    ComponentKey.OVERTIME_ALLOWANCE: ("overtime_allowance", ComponentType.INCOME),
    ComponentKey.BPJS_HEALTH_COMPANY: ("bpjs_health_company", ComponentType.INCOME),
    ComponentKey.BPJS_JHT_COMPANY: ("bpjs_jht_company", ComponentType.INCOME),
    ComponentKey.BPJS_JKK_COMPANY: ("bpjs_jkk_company", ComponentType.INCOME),
    ComponentKey.BPJS_JKM_COMPANY: ("bpjs_jkm_company", ComponentType.INCOME),
    ComponentKey.BPJS_PENSION_COMPANY: ("bpjs_pension_company", ComponentType.INCOME),
    ComponentKey.BPJS_HEALTH_EMPLOYEE: ("bpjs_health_employee", ComponentType.DEDUCTION),
    ComponentKey.BPJS_JHT_EMPLOYEE: ("bpjs_jht_employee", ComponentType.DEDUCTION),
    ComponentKey.BPJS_PENSION_EMPLOYEE: ("bpjs_pension_employee", ComponentType.DEDUCTION),
}

SUBTOTALED = {
    (ComponentType.INCOME, ComponentCategory.ALLOWANCE),
    (ComponentType.INCOME, ComponentCategory.BPJS),
    (ComponentType.DEDUCTION, ComponentCategory.BPJS),
}


class PayrollAggregator:
    """Builds a PayrollRecord from calculated components.

    Slices (by type and category):
    - income/allowance  -> total_allowances
    - income/bpjs       -> total_bpjs_company
    - deduction/bpjs    -> total_bpjs_employee
    Fixed and variable components are not subtotaled.

    Totals:
    - gross_salary     = basic + allowances
    - total_deductions = employee bpjs + manual deductions
    - total_pendapatan = basic + allowances + company bpjs
    - net_salary       = total_pendapatan - total_deductions

    Never raises; a component that is missing contributes 0.
    """

    @staticmethod
    def sum_slice(
        components: Iterable[CalculatedComponent],
        component_type: ComponentType,
        category: ComponentCategory,
    ) -> Decimal:
        """Sum amounts of components with the given type and category."""
        total = ZERO
        for component in components:
            if component.type == component_type and component.category == category:
                total += component.amount
        return total

    @staticmethod
    def aggregate(
        basic_salary: Decimal,
        calculated: list[CalculatedComponent],
        manual: ManualDeductions,
    ) -> PayrollRecord:
        """Aggregate calculated components and manual deductions."""
        basic_salary = to_decimal(basic_salary)
        total_allowances = PayrollAggregator.sum_slice(
            calculated, ComponentType.INCOME, ComponentCategory.ALLOWANCE
        )
        company_bpjs = PayrollAggregator.sum_slice(
            calculated, ComponentType.INCOME, ComponentCategory.BPJS
        )
        employee_bpjs = PayrollAggregator.sum_slice(
            calculated, ComponentType.DEDUCTION, ComponentCategory.BPJS
        )

        total_manual = manual.total
        total_deductions = employee_bpjs + total_manual
        total_pendapatan = basic_salary + total_allowances + company_bpjs

        record = PayrollRecord(
            basic_salary=basic_salary,
            total_bpjs_company=company_bpjs,
            total_bpjs_employee=employee_bpjs,
            kasbon=manual.kasbon,
            telat=manual.telat,
            angsuran_kredit=manual.angsuran_kredit,
            total_manual_deductions=total_manual,
            total_allowances=total_allowances,
            total_deductions=total_deductions,
            total_pendapatan=total_pendapatan,
            gross_salary=basic_salary + total_allowances,
            net_salary=total_pendapatan - total_deductions,
        )

        PayrollAggregator._fill_named_fields(record, calculated)
        return record

    @staticmethod
    def _fill_named_fields(
        record: PayrollRecord, calculated: list[CalculatedComponent]
    ) -> None:
        # First matching component wins.
        filled: set[str] = set()
        for component in calculated:
            target = NAMED_FIELDS.get(component.key) if component.key else None
            if target is None or target[1] != component.type:
                if component.amount and (component.type, component.category) in SUBTOTALED:
                    record.unmapped_components.append(component.name)
                continue
            field_name = target[0]
            if field_name in filled:
                continue
            setattr(record, field_name, component.amount)
            filled.add(field_name)
