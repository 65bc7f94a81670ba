"""Payroll calculation endpoints."""

from fastapi import APIRouter, status

from hris_payroll.api.schemas import (
    CalculatedComponentResponse,
    CalculateRequest,
    CalculateResponse,
    ErrorResponse,
    ManualDeductionEditRequest,
    ManualDeductionEditResponse,
    ManualDeductionsSchema,
    PayrollComponentSchema,
    PayrollRecordResponse,
    SubmissionRequest,
    SubmissionResponse,
)
from hris_payroll.calculators.catalog import default_components
from hris_payroll.calculators.engine import PayrollCalculator
from hris_payroll.calculators.types import PayrollComponent, PayrollInputs
from hris_payroll.services.payroll_draft import PayrollDraft
from hris_payroll.services.validation import ManualDeductionGuard

router = APIRouter(prefix="/payrolls", tags=["payrolls"])


def _components(
    components: list[PayrollComponentSchema] | None,
) -> list[PayrollComponent]:
    if components is None:
        return default_components()
    return [c.to_domain() for c in components]


@router.post(
    "/calculate",
    response_model=CalculateResponse,
    status_code=status.HTTP_200_OK,
)
async def calculate_payroll(payload: CalculateRequest) -> CalculateResponse:
    """Calculate components, subtotals and net salary."""
    calculation = PayrollCalculator.recompute(
        PayrollInputs(
            basic_salary=payload.basic_salary,
            components=tuple(_components(payload.components)),
            manual_deductions=payload.manual_deductions.to_domain(),
        )
    )
    return CalculateResponse(
        calculated_components=[
            CalculatedComponentResponse.model_validate(c)
            for c in calculation.calculated_components
        ],
        record=PayrollRecordResponse.model_validate(calculation.record),
    )


@router.post(
    "/manual-deductions",
    response_model=ManualDeductionEditResponse,
    status_code=status.HTTP_200_OK,
)
async def check_manual_deduction(
    payload: ManualDeductionEditRequest,
) -> ManualDeductionEditResponse:
    """Check one manual-deduction edit against the net salary."""
    net_before = PayrollCalculator.net_before_manual_deductions(
        payload.basic_salary, _components(payload.components)
    )
    result = ManualDeductionGuard.check(
        payload.current.to_domain(),
        payload.field,
        payload.value,
        net_before,
    )
    return ManualDeductionEditResponse(
        accepted=result.accepted,
        deductions=ManualDeductionsSchema.model_validate(result.deductions),
        warning=result.warning,
        net_before_manual_deductions=net_before,
    )


@router.post(
    "/validate",
    response_model=SubmissionResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": ErrorResponse}},
)
async def validate_submission(payload: SubmissionRequest) -> SubmissionResponse:
    """Validate a payroll and return the body for the backend create call."""
    draft = PayrollDraft(
        employee_id=payload.employee_id,
        components=_components(payload.components),
        basic_salary=payload.basic_salary,
    )
    draft.set_manual_deductions(payload.manual_deductions.to_domain())

    submission = draft.to_submission(
        pay_period_start=payload.pay_period_start,
        pay_period_end=payload.pay_period_end,
        payment_date=payload.payment_date,
        status=payload.status,
    )
    return SubmissionResponse(payload=submission.to_payload())
