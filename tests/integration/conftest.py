"""Integration test fixtures for the HTTP API."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hris_payroll.api.app import create_app


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to a fresh application instance."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def example_components_json() -> list[dict[str, Any]]:
    return [
        {
            "name": "Tunjangan Jabatan",
            "type": "income",
            "category": "allowance",
            "percentage": 0,
            "amount": 500000,
        },
        {
            "name": "BPJS Kesehatan (Perusahaan)",
            "type": "income",
            "category": "bpjs",
            "percentage": 4,
            "amount": 0,
        },
        {
            "name": "BPJS Kesehatan (Karyawan)",
            "type": "deduction",
            "category": "bpjs",
            "percentage": 1,
            "amount": 0,
        },
    ]
