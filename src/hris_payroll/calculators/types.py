"""Type definitions for the payroll calculation pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class ComponentType(str, Enum):
    """Whether a component adds to or is taken from pay."""

    INCOME = "income"
    DEDUCTION = "deduction"


class ComponentCategory(str, Enum):
    """Payroll component categories."""

    FIXED = "fixed"
    VARIABLE = "variable"
    BPJS = "bpjs"
    ALLOWANCE = "allowance"


class ComponentKey(str, Enum):
    """Stable identifiers for the well-known payroll components."""

    BASIC_SALARY = "basic_salary"

    BPJS_JHT_COMPANY = "bpjs_jht_company"
    BPJS_JKM_COMPANY = "bpjs_jkm_company"
    BPJS_JKK_COMPANY = "bpjs_jkk_company"
    BPJS_PENSION_COMPANY = "bpjs_pension_company"
    BPJS_HEALTH_COMPANY = "bpjs_health_company"

    POSITION_ALLOWANCE = "position_allowance"
    MANAGEMENT_ALLOWANCE = "management_allowance"
    PHONE_ALLOWANCE = "phone_allowance"
    INCENTIVE_ALLOWANCE = "incentive_allowance"
    OVERTIME_ALLOWANCE = "overtime_allowance"

    BPJS_HEALTH_EMPLOYEE = "bpjs_health_employee"
    BPJS_JHT_EMPLOYEE = "bpjs_jht_employee"
    BPJS_PENSION_EMPLOYEE = "bpjs_pension_employee"

    CASH_ADVANCE = "cash_advance"
    LOAN_INSTALLMENT = "loan_installment"
    LATE_PENALTY = "late_penalty"
    ABSENT_PENALTY = "absent_penalty"


def to_decimal(value: Any) -> Decimal:
    """Coerce a number or numeric string to Decimal; anything unparsable is 0."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return ZERO
    try:
        result = Decimal(str(value).strip() or "0")
    except ArithmeticError:
        return ZERO
    return result if result.is_finite() else ZERO


@dataclass(frozen=True)
class PayrollComponent:
    """Component configuration as owned by the HRIS backend."""

    name: str
    type: ComponentType
    category: ComponentCategory
    percentage: Decimal = ZERO
    amount: Decimal = ZERO
    is_active: bool = True
    description: str = ""
    id: str | int | None = None
    key: ComponentKey | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PayrollComponent:
        """Build a component from a backend JSON object."""
        raw_key = data.get("key")
        key = None
        if raw_key:
            try:
                key = ComponentKey(raw_key)
            except ValueError:
                key = None
        return cls(
            name=str(data.get("name", "")),
            type=ComponentType(data["type"]),
            category=ComponentCategory(data["category"]),
            percentage=to_decimal(data.get("percentage")),
            amount=to_decimal(data.get("amount")),
            is_active=bool(data.get("is_active", True)),
            description=str(data.get("description") or ""),
            id=data.get("id"),
            key=key,
        )


@dataclass(frozen=True)
class ManualDeductions:
    """Deductions entered by hand for a single payroll run."""

    kasbon: Decimal = ZERO  # cash advance
    telat: Decimal = ZERO  # lateness penalty
    angsuran_kredit: Decimal = ZERO  # credit installment

    FIELDS = ("kasbon", "telat", "angsuran_kredit")

    @property
    def total(self) -> Decimal:
        return self.kasbon + self.telat + self.angsuran_kredit

    def with_value(self, field_name: str, value: Decimal) -> ManualDeductions:
        """Return a copy with one field replaced."""
        if field_name not in self.FIELDS:
            raise KeyError(f"Unknown manual deduction field '{field_name}'")
        return replace(self, **{field_name: value})


@dataclass(frozen=True)
class CalculatedComponent:
    """A component resolved to a monetary amount."""

    name: str
    type: ComponentType
    category: ComponentCategory
    amount: Decimal
    percentage: Decimal
    is_percentage: bool
    key: ComponentKey | None = None


@dataclass
class PayrollRecord:
    """Aggregated payroll breakdown for one employee and one period."""

    basic_salary: Decimal = ZERO

    # Allowances
    position_allowance: Decimal = ZERO
    management_allowance: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    incentive_allowance: Decimal = ZERO
    overtime_allowance: Decimal = ZERO

    # BPJS paid by the company
    bpjs_health_company: Decimal = ZERO
    bpjs_jht_company: Decimal = ZERO
    bpjs_jkk_company: Decimal = ZERO
    bpjs_jkm_company: Decimal = ZERO
    bpjs_pension_company: Decimal = ZERO
    total_bpjs_company: Decimal = ZERO

    # BPJS paid by the employee
    bpjs_health_employee: Decimal = ZERO
    bpjs_jht_employee: Decimal = ZERO
    bpjs_pension_employee: Decimal = ZERO
    total_bpjs_employee: Decimal = ZERO

    # Manual deductions
    kasbon: Decimal = ZERO
    telat: Decimal = ZERO
    angsuran_kredit: Decimal = ZERO
    total_manual_deductions: Decimal = ZERO

    # Totals
    total_allowances: Decimal = ZERO
    total_deductions: Decimal = ZERO
    total_pendapatan: Decimal = ZERO
    gross_salary: Decimal = ZERO
    net_salary: Decimal = ZERO

    unmapped_components: list[str] = field(default_factory=list)

    def amounts(self) -> dict[str, Decimal]:
        """Return every monetary field keyed by name."""
        data = asdict(self)
        data.pop("unmapped_components")
        return data


@dataclass(frozen=True)
class SalaryRecord:
    """Per-employee salary data as stored by the backend."""

    employee_id: str
    basic_salary: Decimal = ZERO
    position_allowance: Decimal = ZERO
    management_allowance: Decimal = ZERO
    phone_allowance: Decimal = ZERO
    incentive_allowance: Decimal = ZERO
    overtime_allowance: Decimal = ZERO
    nik: str | None = None

    ALLOWANCE_FIELDS = (
        "position_allowance",
        "management_allowance",
        "phone_allowance",
        "incentive_allowance",
        "overtime_allowance",
    )

    @property
    def total_allowances(self) -> Decimal:
        return sum((getattr(self, f) for f in self.ALLOWANCE_FIELDS), ZERO)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SalaryRecord:
        """Parse a backend salary row; numeric strings are accepted."""
        employee_id = data.get("employee_id")
        return cls(
            employee_id=str(employee_id) if employee_id is not None else "",
            basic_salary=to_decimal(data.get("basic_salary")),
            position_allowance=to_decimal(data.get("position_allowance")),
            management_allowance=to_decimal(data.get("management_allowance")),
            phone_allowance=to_decimal(data.get("phone_allowance")),
            incentive_allowance=to_decimal(data.get("incentive_allowance")),
            overtime_allowance=to_decimal(data.get("overtime_allowance")),
            nik=data.get("nik"),
        )


@dataclass(frozen=True)
class PayrollInputs:
    """Everything a payroll recomputation depends on."""

    basic_salary: Decimal
    components: tuple[PayrollComponent, ...] = ()
    manual_deductions: ManualDeductions = field(default_factory=ManualDeductions)


@dataclass(frozen=True)
class PayrollCalculation:
    """Output of one recomputation."""

    inputs: PayrollInputs
    calculated_components: list[CalculatedComponent]
    record: PayrollRecord
