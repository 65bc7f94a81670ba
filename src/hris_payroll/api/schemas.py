"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from hris_payroll.calculators.types import (
    ComponentCategory,
    ComponentKey,
    ComponentType,
    ManualDeductions,
    PayrollComponent,
)


# ============================================================================
# Component schemas
# ============================================================================


class PayrollComponentSchema(BaseModel):
    """Payroll component configuration."""

    model_config = ConfigDict(from_attributes=True)

    id: str | int | None = None
    key: ComponentKey | None = None
    name: str
    type: ComponentType
    category: ComponentCategory
    percentage: Decimal = Field(default=Decimal("0"), ge=0)
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True
    description: str = ""

    def to_domain(self) -> PayrollComponent:
        return PayrollComponent(
            id=self.id,
            key=self.key,
            name=self.name,
            type=self.type,
            category=self.category,
            percentage=self.percentage,
            amount=self.amount,
            is_active=self.is_active,
            description=self.description,
        )


class ComponentStatsResponse(BaseModel):
    """Counts over a component configuration."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    income_count: int
    deduction_count: int
    bpjs_count: int
    active_count: int


# ============================================================================
# Calculation schemas
# ============================================================================


class ManualDeductionsSchema(BaseModel):
    """Manual deductions of one payroll run."""

    model_config = ConfigDict(from_attributes=True)

    kasbon: Decimal = Field(default=Decimal("0"), ge=0)
    telat: Decimal = Field(default=Decimal("0"), ge=0)
    angsuran_kredit: Decimal = Field(default=Decimal("0"), ge=0)

    def to_domain(self) -> ManualDeductions:
        return ManualDeductions(
            kasbon=self.kasbon,
            telat=self.telat,
            angsuran_kredit=self.angsuran_kredit,
        )


class CalculateRequest(BaseModel):
    """Request to calculate a payroll breakdown.

    The default component configuration is used when components is omitted.
    """

    basic_salary: Decimal = Field(ge=0)
    components: list[PayrollComponentSchema] | None = None
    manual_deductions: ManualDeductionsSchema = Field(
        default_factory=ManualDeductionsSchema
    )


class CalculatedComponentResponse(BaseModel):
    """A component resolved to an amount."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    type: ComponentType
    category: ComponentCategory
    amount: Decimal
    percentage: Decimal
    is_percentage: bool
    key: ComponentKey | None = None


class PayrollRecordResponse(BaseModel):
    """Aggregated payroll breakdown."""

    model_config = ConfigDict(from_attributes=True)

    basic_salary: Decimal
    position_allowance: Decimal
    management_allowance: Decimal
    phone_allowance: Decimal
    incentive_allowance: Decimal
    overtime_allowance: Decimal
    bpjs_health_company: Decimal
    bpjs_jht_company: Decimal
    bpjs_jkk_company: Decimal
    bpjs_jkm_company: Decimal
    bpjs_pension_company: Decimal
    total_bpjs_company: Decimal
    bpjs_health_employee: Decimal
    bpjs_jht_employee: Decimal
    bpjs_pension_employee: Decimal
    total_bpjs_employee: Decimal
    kasbon: Decimal
    telat: Decimal
    angsuran_kredit: Decimal
    total_manual_deductions: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    total_pendapatan: Decimal
    gross_salary: Decimal
    net_salary: Decimal
    unmapped_components: list[str] = []


class CalculateResponse(BaseModel):
    """Calculated components and the resulting record."""

    calculated_components: list[CalculatedComponentResponse]
    record: PayrollRecordResponse


class ManualDeductionEditRequest(BaseModel):
    """A single manual-deduction edit to check against the net salary."""

    basic_salary: Decimal = Field(ge=0)
    components: list[PayrollComponentSchema] | None = None
    current: ManualDeductionsSchema = Field(default_factory=ManualDeductionsSchema)
    field: Literal["kasbon", "telat", "angsuran_kredit"]
    value: Decimal


class ManualDeductionEditResponse(BaseModel):
    """Outcome of a manual-deduction edit."""

    accepted: bool
    deductions: ManualDeductionsSchema
    warning: str | None = None
    net_before_manual_deductions: Decimal


# ============================================================================
# Submission schemas
# ============================================================================


class SubmissionRequest(BaseModel):
    """Payroll to validate before it is sent to the backend."""

    employee_id: str
    pay_period_start: date
    pay_period_end: date
    payment_date: date | None = None
    status: str = "PAID"
    basic_salary: Decimal
    components: list[PayrollComponentSchema] | None = None
    manual_deductions: ManualDeductionsSchema = Field(
        default_factory=ManualDeductionsSchema
    )


class SubmissionResponse(BaseModel):
    """Validated create-call body."""

    payload: dict[str, Any]


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    field: str | None = None
