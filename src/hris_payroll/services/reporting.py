"""Summary statistics over submitted payroll records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from hris_payroll.calculators.types import ZERO, to_decimal


@dataclass(frozen=True)
class PayrollSummary:
    """Dashboard figures for the payroll list."""

    total: int
    this_month: int
    total_amount: Decimal
    avg_salary: Decimal


def _period_start(record: dict[str, Any]) -> date | None:
    raw = record.get("pay_period_start")
    if isinstance(raw, date):
        return raw
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def summarize_payrolls(
    records: Iterable[dict[str, Any]], today: date | None = None
) -> PayrollSummary:
    """Count records, those starting this month, and total/average net pay."""
    today = today or date.today()
    items = list(records)

    this_month = 0
    for record in items:
        start = _period_start(record)
        if start is not None and (start.year, start.month) == (today.year, today.month):
            this_month += 1

    total_amount = sum((to_decimal(r.get("net_salary")) for r in items), ZERO)
    avg_salary = total_amount / len(items) if items else ZERO

    return PayrollSummary(
        total=len(items),
        this_month=this_month,
        total_amount=total_amount,
        avg_salary=avg_salary,
    )
