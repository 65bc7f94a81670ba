"""Payroll services."""

from hris_payroll.services.backend_client import (
    BackendError,
    BackendErrorKind,
    BackendResult,
    HRISBackendClient,
)
from hris_payroll.services.payroll_draft import (
    PaymentStatus,
    PayrollDraft,
    PayrollSubmission,
)
from hris_payroll.services.reporting import PayrollSummary, summarize_payrolls
from hris_payroll.services.validation import (
    ManualDeductionGuard,
    PayrollValidationError,
    ValidationCode,
)

__all__ = [
    "BackendError",
    "BackendErrorKind",
    "BackendResult",
    "HRISBackendClient",
    "ManualDeductionGuard",
    "PaymentStatus",
    "PayrollDraft",
    "PayrollSubmission",
    "PayrollSummary",
    "PayrollValidationError",
    "ValidationCode",
    "summarize_payrolls",
]
