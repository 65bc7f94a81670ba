"""Input validation at the payroll boundary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from hris_payroll.calculators.component_calculator import ComponentCalculator
from hris_payroll.calculators.types import ManualDeductions, SalaryRecord

logger = logging.getLogger(__name__)


class ValidationCode(str, Enum):
    """Machine-readable validation failure codes."""

    BASIC_SALARY_NOT_POSITIVE = "BASIC_SALARY_NOT_POSITIVE"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    NEGATIVE_ALLOWANCE = "NEGATIVE_ALLOWANCE"
    NEGATIVE_DEDUCTION = "NEGATIVE_DEDUCTION"
    MANUAL_DEDUCTION_EXCEEDS_NET = "MANUAL_DEDUCTION_EXCEEDS_NET"
    INVALID_PERIOD = "INVALID_PERIOD"
    INVALID_STATUS = "INVALID_STATUS"


class PayrollValidationError(Exception):
    """Raised when user input is rejected."""

    def __init__(self, code: ValidationCode, message: str, field: str | None = None):
        self.code = code
        self.message = message
        self.field = field
        super().__init__(message)


ALLOWANCE_LABELS: dict[str, str] = {
    "position_allowance": "Tunjangan Jabatan",
    "management_allowance": "Tunjangan Manajemen",
    "phone_allowance": "Tunjangan Telepon",
    "incentive_allowance": "Tunjangan Insentif",
    "overtime_allowance": "Tunjangan Lembur",
}

DEDUCTION_LABELS: dict[str, str] = {
    "kasbon": "Kasbon",
    "telat": "Telat",
    "angsuran_kredit": "Angsuran Kredit",
}


def validate_basic_salary(basic_salary: Decimal) -> None:
    """Reject a non-positive basic salary."""
    if basic_salary <= 0:
        raise PayrollValidationError(
            ValidationCode.BASIC_SALARY_NOT_POSITIVE,
            "Gaji Pokok harus lebih dari 0",
            field="basic_salary",
        )


def validate_salary_record(record: SalaryRecord) -> None:
    """Validate a salary record before it is saved.

    Checks run in the order the salary form reports them; the first
    failure is raised.
    """
    if not record.employee_id or not record.nik or not record.basic_salary:
        raise PayrollValidationError(
            ValidationCode.REQUIRED_FIELD_MISSING,
            "Employee, NIK, dan Basic Salary wajib diisi",
        )

    validate_basic_salary(record.basic_salary)

    for field_name, label in ALLOWANCE_LABELS.items():
        if getattr(record, field_name) < 0:
            raise PayrollValidationError(
                ValidationCode.NEGATIVE_ALLOWANCE,
                f"{label} tidak boleh minus",
                field=field_name,
            )


@dataclass(frozen=True)
class DeductionEditResult:
    """Outcome of a manual-deduction edit."""

    accepted: bool
    deductions: ManualDeductions
    warning: str | None = None


class ManualDeductionGuard:
    """Soft ceiling on manual deductions.

    An edit is rejected when the updated kasbon + telat + angsuran_kredit
    would exceed the net salary before manual deductions. Rejected edits
    keep the previous values.
    """

    @staticmethod
    def check(
        current: ManualDeductions,
        field_name: str,
        value: Decimal,
        net_before_manual: Decimal,
    ) -> DeductionEditResult:
        label = DEDUCTION_LABELS.get(field_name, field_name)

        if value < 0:
            return DeductionEditResult(
                accepted=False,
                deductions=current,
                warning=f"{label} tidak boleh minus",
            )

        updated = current.with_value(field_name, value)
        if updated.total > net_before_manual:
            logger.info(
                "Rejected %s=%s: manual total %s exceeds net %s",
                field_name,
                value,
                updated.total,
                net_before_manual,
            )
            return DeductionEditResult(
                accepted=False,
                deductions=current,
                warning=(
                    "Total potongan manual "
                    f"({ComponentCalculator.format_rupiah(updated.total)}) "
                    "melebihi gaji bersih "
                    f"({ComponentCalculator.format_rupiah(net_before_manual)})"
                ),
            )

        return DeductionEditResult(accepted=True, deductions=updated)

    @staticmethod
    def validate(deductions: ManualDeductions, net_before_manual: Decimal) -> None:
        """Raise if a complete set of manual deductions is not acceptable."""
        for field_name in ManualDeductions.FIELDS:
            if getattr(deductions, field_name) < 0:
                raise PayrollValidationError(
                    ValidationCode.NEGATIVE_DEDUCTION,
                    f"{DEDUCTION_LABELS[field_name]} tidak boleh minus",
                    field=field_name,
                )
        if deductions.total > net_before_manual:
            raise PayrollValidationError(
                ValidationCode.MANUAL_DEDUCTION_EXCEEDS_NET,
                "Total potongan manual melebihi gaji bersih",
            )
