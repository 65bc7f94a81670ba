"""HTTP client for the HRIS backend.

Every call returns a BackendResult instead of raising. The client never
retries: callers decide whether and when to try again. Local state is
never touched by a failed call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

import httpx

from hris_payroll.calculators.types import PayrollComponent, SalaryRecord
from hris_payroll.config import get_settings
from hris_payroll.services.payroll_draft import PayrollSubmission

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackendErrorKind(str, Enum):
    """Failure classes for backend calls."""

    NETWORK = "network"
    HTTP = "http"
    DECODE = "decode"


@dataclass(frozen=True)
class BackendError:
    """Why a backend call failed."""

    kind: BackendErrorKind
    message: str
    status_code: int | None = None

    @property
    def retryable(self) -> bool:
        """Network failures and 5xx responses are worth retrying."""
        if self.kind == BackendErrorKind.NETWORK:
            return True
        return self.status_code is not None and self.status_code >= 500


@dataclass(frozen=True)
class BackendResult(Generic[T]):
    """Either a value or an error."""

    value: T | None = None
    error: BackendError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise BackendCallError."""
        if self.error is not None:
            raise BackendCallError(self.error)
        return self.value  # type: ignore[return-value]


class BackendCallError(Exception):
    """Raised by BackendResult.unwrap on a failed call."""

    def __init__(self, error: BackendError):
        self.error = error
        super().__init__(error.message)


class HRISBackendClient:
    """Async client for the HRIS REST backend.

    Usage:
        async with HRISBackendClient() as backend:
            result = await backend.fetch_components()
            if result.ok:
                draft.set_components(result.value)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self._client = httpx.AsyncClient(
            base_url=base_url if base_url is not None else settings.api_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> HRISBackendClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        fallback_message: str,
        parse: Callable[[Any], T],
        json: dict[str, Any] | None = None,
    ) -> BackendResult[T]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return BackendResult(
                error=BackendError(BackendErrorKind.NETWORK, f"{fallback_message}: {exc}")
            )

        if response.is_error:
            message = self._error_message(response, fallback_message)
            logger.warning(
                "%s %s returned %s: %s",
                method,
                path,
                response.status_code,
                message,
            )
            return BackendResult(
                error=BackendError(BackendErrorKind.HTTP, message, response.status_code)
            )

        try:
            return BackendResult(value=parse(response.json()))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("%s %s returned an unreadable body: %s", method, path, exc)
            return BackendResult(
                error=BackendError(
                    BackendErrorKind.DECODE,
                    f"{fallback_message}: respons tidak valid",
                    response.status_code,
                )
            )

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        """Prefer the backend's ``error`` field, else ``HTTP <status>: <fallback>``."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code}: {fallback}"

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def fetch_components(self) -> BackendResult[list[PayrollComponent]]:
        """GET /api/payroll-components"""
        return await self._request(
            "GET",
            "/api/payroll-components",
            "Gagal mengambil konfigurasi payroll",
            lambda data: [PayrollComponent.from_dict(item) for item in data],
        )

    async def fetch_salary_records(self) -> BackendResult[list[SalaryRecord]]:
        """GET /api/salary"""
        return await self._request(
            "GET",
            "/api/salary",
            "Gagal mengambil data salary",
            lambda data: [SalaryRecord.from_dict(item) for item in data],
        )

    async def fetch_salary_for_employee(
        self, employee_id: str
    ) -> BackendResult[SalaryRecord | None]:
        """Find one employee's salary record; the value is None when absent."""
        result = await self.fetch_salary_records()
        if not result.ok:
            return BackendResult(error=result.error)
        for record in result.value or []:
            if record.employee_id == str(employee_id):
                return BackendResult(value=record)
        return BackendResult(value=None)

    async def submit_payroll(
        self, submission: PayrollSubmission
    ) -> BackendResult[dict[str, Any]]:
        """POST /api/payrolls"""
        return await self._request(
            "POST",
            "/api/payrolls",
            "Gagal tambah payroll",
            dict,
            json=submission.to_payload(),
        )

    async def list_payrolls(self) -> BackendResult[list[dict[str, Any]]]:
        """GET /api/payrolls"""
        return await self._request(
            "GET",
            "/api/payrolls",
            "Gagal mengambil data payroll",
            lambda data: [dict(item) for item in data],
        )
