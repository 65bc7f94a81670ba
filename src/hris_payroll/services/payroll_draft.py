"""Payroll draft - inputs of one payroll run and their submission payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable

from hris_payroll.calculators.catalog import resolve_key
from hris_payroll.calculators.engine import PayrollCalculator
from hris_payroll.calculators.types import (
    ComponentCategory,
    ComponentKey,
    ComponentType,
    ManualDeductions,
    PayrollCalculation,
    PayrollComponent,
    PayrollInputs,
    PayrollRecord,
    SalaryRecord,
)
from hris_payroll.services.validation import (
    ALLOWANCE_LABELS,
    DeductionEditResult,
    ManualDeductionGuard,
    PayrollValidationError,
    ValidationCode,
    validate_basic_salary,
)

logger = logging.getLogger(__name__)

WIRE_PRECISION = Decimal("0.01")

SALARY_ALLOWANCE_DESCRIPTION = "Dari data salary"


class PaymentStatus(str, Enum):
    """Payment status of a submitted payroll."""

    PAID = "PAID"
    UNPAID = "UNPAID"


@dataclass(frozen=True)
class PayrollSubmission:
    """A payroll record ready for the backend create call."""

    employee_id: str
    pay_period_start: date
    pay_period_end: date
    payment_date: date | None
    status: PaymentStatus
    record: PayrollRecord

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for the create call.

        Money goes over the wire as numbers at two decimal places.
        """
        payload: dict[str, Any] = {
            "employee_id": self.employee_id,
            "pay_period_start": self.pay_period_start.isoformat(),
            "pay_period_end": self.pay_period_end.isoformat(),
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
            "status": self.status.value,
        }
        for name, amount in self.record.amounts().items():
            payload[name] = float(amount.quantize(WIRE_PRECISION, rounding=ROUND_HALF_UP))
        payload["deductions"] = payload["total_deductions"]
        return payload


class PayrollDraft:
    """Holds the inputs of one payroll run and recomputes on every change.

    The draft never patches a previous result: each setter builds a new
    PayrollInputs value and calls PayrollCalculator.recompute.
    """

    def __init__(
        self,
        employee_id: str | None = None,
        components: Iterable[PayrollComponent] = (),
        basic_salary: Decimal = Decimal("0"),
    ):
        self.employee_id = employee_id
        self._inputs = PayrollInputs(
            basic_salary=basic_salary,
            components=tuple(components),
        )
        self.calculation: PayrollCalculation = PayrollCalculator.recompute(self._inputs)

    @property
    def inputs(self) -> PayrollInputs:
        return self._inputs

    @property
    def record(self) -> PayrollRecord:
        return self.calculation.record

    @property
    def manual_deductions(self) -> ManualDeductions:
        return self._inputs.manual_deductions

    def _update(self, **changes: Any) -> PayrollCalculation:
        self._inputs = replace(self._inputs, **changes)
        self.calculation = PayrollCalculator.recompute(self._inputs)
        return self.calculation

    def set_basic_salary(self, basic_salary: Decimal) -> PayrollCalculation:
        return self._update(basic_salary=basic_salary)

    def set_components(self, components: Iterable[PayrollComponent]) -> PayrollCalculation:
        return self._update(components=tuple(components))

    def net_before_manual_deductions(self) -> Decimal:
        return PayrollCalculator.net_before_manual_deductions(
            self._inputs.basic_salary, self._inputs.components
        )

    def edit_manual_deduction(self, field_name: str, value: Decimal) -> DeductionEditResult:
        """Apply one manual-deduction edit, or keep the old values if rejected."""
        result = ManualDeductionGuard.check(
            self._inputs.manual_deductions,
            field_name,
            value,
            self.net_before_manual_deductions(),
        )
        if result.accepted:
            self._update(manual_deductions=result.deductions)
        return result

    def set_manual_deductions(self, deductions: ManualDeductions) -> PayrollCalculation:
        """Replace all manual deductions; the ceiling is checked at submission."""
        return self._update(manual_deductions=deductions)

    def reset_manual_deductions(self) -> PayrollCalculation:
        return self._update(manual_deductions=ManualDeductions())

    def load_salary(self, salary: SalaryRecord) -> PayrollCalculation:
        """Take basic salary and allowance amounts from a salary record.

        Non-zero allowances on the record replace the amount of the matching
        active fixed-amount allowance component. Percentage components are
        kept. An allowance with no active matching component is added as a
        fixed allowance component of its own, so it always reaches the
        totals. Components added by an earlier load are replaced.
        """
        overrides = {
            field_name: getattr(salary, field_name)
            for field_name in SalaryRecord.ALLOWANCE_FIELDS
            if getattr(salary, field_name) > 0
        }

        components: list[PayrollComponent] = []
        covered: set[str] = set()
        for component in self._inputs.components:
            if component.description == SALARY_ALLOWANCE_DESCRIPTION:
                continue
            key = resolve_key(component)
            if (
                key is not None
                and key.value in overrides
                and component.is_active
                and component.type == ComponentType.INCOME
                and component.category == ComponentCategory.ALLOWANCE
            ):
                covered.add(key.value)
                if component.percentage == 0:
                    component = replace(component, amount=overrides[key.value])
            components.append(component)

        for field_name, amount in overrides.items():
            if field_name in covered:
                continue
            logger.info(
                "No active component for %s; adding it from the salary record",
                field_name,
            )
            components.append(
                PayrollComponent(
                    name=ALLOWANCE_LABELS[field_name],
                    type=ComponentType.INCOME,
                    category=ComponentCategory.ALLOWANCE,
                    amount=amount,
                    description=SALARY_ALLOWANCE_DESCRIPTION,
                    key=ComponentKey(field_name),
                )
            )

        if salary.employee_id:
            self.employee_id = salary.employee_id
        logger.debug(
            "Loaded salary for employee %s (%d allowance overrides)",
            self.employee_id,
            len(overrides),
        )
        return self._update(
            basic_salary=salary.basic_salary,
            components=tuple(components),
        )

    def to_submission(
        self,
        pay_period_start: date,
        pay_period_end: date,
        payment_date: date | None = None,
        status: PaymentStatus | str = PaymentStatus.PAID,
    ) -> PayrollSubmission:
        """Validate the draft and build the submission."""
        if not self.employee_id:
            raise PayrollValidationError(
                ValidationCode.REQUIRED_FIELD_MISSING,
                "Karyawan wajib dipilih",
                field="employee_id",
            )
        validate_basic_salary(self._inputs.basic_salary)
        if pay_period_start > pay_period_end:
            raise PayrollValidationError(
                ValidationCode.INVALID_PERIOD,
                "Periode mulai tidak boleh setelah periode akhir",
                field="pay_period_start",
            )
        try:
            status = PaymentStatus(status)
        except ValueError:
            raise PayrollValidationError(
                ValidationCode.INVALID_STATUS,
                f"Status pembayaran tidak dikenal: {status}",
                field="status",
            )
        ManualDeductionGuard.validate(
            self._inputs.manual_deductions, self.net_before_manual_deductions()
        )

        return PayrollSubmission(
            employee_id=self.employee_id,
            pay_period_start=pay_period_start,
            pay_period_end=pay_period_end,
            payment_date=payment_date,
            status=status,
            record=self.calculation.record,
        )
