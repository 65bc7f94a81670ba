"""API routes."""

from hris_payroll.api.routes.health import router as health_router
from hris_payroll.api.routes.payroll_components import router as payroll_components_router
from hris_payroll.api.routes.payrolls import router as payrolls_router

__all__ = ["health_router", "payroll_components_router", "payrolls_router"]
