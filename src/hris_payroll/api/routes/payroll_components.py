"""Payroll component configuration endpoints."""

from fastapi import APIRouter, status

from hris_payroll.api.schemas import ComponentStatsResponse, PayrollComponentSchema
from hris_payroll.calculators.catalog import component_stats, default_components

router = APIRouter(prefix="/payroll-components", tags=["payroll-components"])


@router.get(
    "/defaults",
    response_model=list[PayrollComponentSchema],
    status_code=status.HTTP_200_OK,
)
async def list_default_components() -> list[PayrollComponentSchema]:
    """Return the shipped component configuration."""
    return [PayrollComponentSchema.model_validate(c) for c in default_components()]


@router.post(
    "/stats",
    response_model=ComponentStatsResponse,
    status_code=status.HTTP_200_OK,
)
async def get_component_stats(
    components: list[PayrollComponentSchema],
) -> ComponentStatsResponse:
    """Count income, deduction, BPJS and active components."""
    stats = component_stats(c.to_domain() for c in components)
    return ComponentStatsResponse.model_validate(stats)
