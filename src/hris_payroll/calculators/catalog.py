"""Default payroll component configuration and key resolution."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from hris_payroll.calculators.types import (
    ComponentCategory,
    ComponentKey,
    ComponentType,
    PayrollComponent,
)

_INCOME = ComponentType.INCOME
_DEDUCTION = ComponentType.DEDUCTION


def _component(
    key: ComponentKey,
    name: str,
    component_type: ComponentType,
    category: ComponentCategory,
    description: str,
    percentage: str = "0",
    amount: str = "0",
) -> PayrollComponent:
    return PayrollComponent(
        id=key.value,
        key=key,
        name=name,
        type=component_type,
        category=category,
        percentage=Decimal(percentage),
        amount=Decimal(amount),
        is_active=True,
        description=description,
    )


DEFAULT_COMPONENTS: tuple[PayrollComponent, ...] = (
    # Fixed income
    _component(
        key=ComponentKey.BASIC_SALARY,
        name="Gaji Pokok",
        component_type=_INCOME,
        category=ComponentCategory.FIXED,
        description="Gaji pokok karyawan",
    ),
    # BPJS paid by the company
    _component(
        key=ComponentKey.BPJS_JHT_COMPANY,
        name="BPJS Ketenagakerjaan JHT (Perusahaan)",
        component_type=_INCOME,
        category=ComponentCategory.BPJS,
        description="Jaminan Hari Tua dari perusahaan",
        percentage="3.7",
    ),
    _component(
        key=ComponentKey.BPJS_JKM_COMPANY,
        name="BPJS Ketenagakerjaan JKM (Perusahaan)",
        component_type=_INCOME,
        category=ComponentCategory.BPJS,
        description="Jaminan Kematian dari perusahaan",
        percentage="0.3",
    ),
    _component(
        key=ComponentKey.BPJS_JKK_COMPANY,
        name="BPJS Ketenagakerjaan JKK (Perusahaan)",
        component_type=_INCOME,
        category=ComponentCategory.BPJS,
        description="Jaminan Kecelakaan Kerja dari perusahaan",
        percentage="0.24",
    ),
    _component(
        key=ComponentKey.BPJS_PENSION_COMPANY,
        name="BPJS Jaminan Pensiun (Perusahaan)",
        component_type=_INCOME,
        category=ComponentCategory.BPJS,
        description="Jaminan Pensiun dari perusahaan",
        percentage="2",
    ),
    _component(
        key=ComponentKey.BPJS_HEALTH_COMPANY,
        name="BPJS Kesehatan (Perusahaan)",
        component_type=_INCOME,
        category=ComponentCategory.BPJS,
        description="BPJS Kesehatan dari perusahaan",
        percentage="4",
    ),
    # Allowances
    _component(
        key=ComponentKey.POSITION_ALLOWANCE,
        name="Tunjangan Jabatan",
        component_type=_INCOME,
        category=ComponentCategory.ALLOWANCE,
        description="Tunjangan berdasarkan jabatan",
    ),
    _component(
        key=ComponentKey.MANAGEMENT_ALLOWANCE,
        name="Tunjangan Pengurus",
        component_type=_INCOME,
        category=ComponentCategory.ALLOWANCE,
        description="Tunjangan untuk pengurus",
    ),
    _component(
        key=ComponentKey.PHONE_ALLOWANCE,
        name="Tunjangan Pulsa",
        component_type=_INCOME,
        category=ComponentCategory.ALLOWANCE,
        description="Tunjangan pulsa bulanan",
        amount="100000",
    ),
    _component(
        key=ComponentKey.INCENTIVE_ALLOWANCE,
        name="Tunjangan Insentif",
        component_type=_INCOME,
        category=ComponentCategory.ALLOWANCE,
        description="Tunjangan insentif kinerja",
        amount="500000",
    ),
    _component(
        key=ComponentKey.OVERTIME_ALLOWANCE,
        name="Tunjangan Lembur",
        component_type=_INCOME,
        category=ComponentCategory.ALLOWANCE,
        description="Tunjangan lembur",
    ),
    # BPJS paid by the employee
    _component(
        key=ComponentKey.BPJS_HEALTH_EMPLOYEE,
        name="BPJS Kesehatan (Karyawan)",
        component_type=_DEDUCTION,
        category=ComponentCategory.BPJS,
        description="BPJS Kesehatan dari karyawan",
        percentage="1",
    ),
    _component(
        key=ComponentKey.BPJS_JHT_EMPLOYEE,
        name="BPJS Ketenagakerjaan JHT (Karyawan)",
        component_type=_DEDUCTION,
        category=ComponentCategory.BPJS,
        description="Jaminan Hari Tua dari karyawan",
        percentage="2",
    ),
    _component(
        key=ComponentKey.BPJS_PENSION_EMPLOYEE,
        name="BPJS Jaminan Pensiun (Karyawan)",
        component_type=_DEDUCTION,
        category=ComponentCategory.BPJS,
        description="Jaminan Pensiun dari karyawan",
        percentage="1",
    ),
    # Variable deductions, entered per run
    _component(
        key=ComponentKey.CASH_ADVANCE,
        name="Kasbon",
        component_type=_DEDUCTION,
        category=ComponentCategory.VARIABLE,
        description="Pinjaman kasbon",
    ),
    _component(
        key=ComponentKey.LOAN_INSTALLMENT,
        name="Angsuran Kredit",
        component_type=_DEDUCTION,
        category=ComponentCategory.VARIABLE,
        description="Angsuran kredit karyawan",
    ),
    _component(
        key=ComponentKey.LATE_PENALTY,
        name="Telat",
        component_type=_DEDUCTION,
        category=ComponentCategory.VARIABLE,
        description="Denda keterlambatan",
    ),
    _component(
        key=ComponentKey.ABSENT_PENALTY,
        name="Alfa",
        component_type=_DEDUCTION,
        category=ComponentCategory.VARIABLE,
        description="Denda ketidakhadiran",
    ),
)

# Labels the backend has used for the well-known components. Matching is exact.
LEGACY_LABELS: dict[str, ComponentKey] = {
    component.name: component.key
    for component in DEFAULT_COMPONENTS
    if component.key is not None
}
LEGACY_LABELS.update(
    {
        "Tunjangan Manajemen": ComponentKey.MANAGEMENT_ALLOWANCE,
        "Tunjangan Telepon": ComponentKey.PHONE_ALLOWANCE,
    }
)


@dataclass(frozen=True)
class ComponentStats:
    """Counts over a component configuration."""

    total: int
    income_count: int
    deduction_count: int
    bpjs_count: int
    active_count: int


def default_components() -> list[PayrollComponent]:
    """Return the shipped component configuration."""
    return list(DEFAULT_COMPONENTS)


def resolve_key(component: PayrollComponent) -> ComponentKey | None:
    """Resolve the stable key of a component.

    An explicit key wins; otherwise the exact label is looked up.
    """
    if component.key is not None:
        return component.key
    return LEGACY_LABELS.get(component.name)


def component_stats(components: Iterable[PayrollComponent]) -> ComponentStats:
    """Summarize a component configuration."""
    items = list(components)
    return ComponentStats(
        total=len(items),
        income_count=sum(1 for c in items if c.type == ComponentType.INCOME),
        deduction_count=sum(1 for c in items if c.type == ComponentType.DEDUCTION),
        bpjs_count=sum(1 for c in items if c.category == ComponentCategory.BPJS),
        active_count=sum(1 for c in items if c.is_active),
    )
