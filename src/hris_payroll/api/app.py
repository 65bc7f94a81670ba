"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hris_payroll import __version__
from hris_payroll.api.routes import (
    health_router,
    payroll_components_router,
    payrolls_router,
)
from hris_payroll.services.validation import PayrollValidationError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="HRIS Payroll API",
        description="Payroll calculation for the HRIS: allowances, BPJS and net salary",
        version=__version__,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(PayrollValidationError)
    async def validation_exception_handler(
        request: Request, exc: PayrollValidationError
    ) -> JSONResponse:
        """Report rejected input to the caller."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": exc.message,
                "code": exc.code.value,
                "field": exc.field,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(payrolls_router, prefix="/api/v1")
    app.include_router(payroll_components_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
