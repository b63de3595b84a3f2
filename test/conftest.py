# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Financial Calculators API test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from fincalc.main import app


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Sample return fixtures ───────────────────────────────────────────────

@pytest.fixture
def personal_details():
    return {
        "firstName": "Asha",
        "lastName": "Rao",
        "pan": "abcde1234f",
        "aadhaar": "1234 5678 9012",
        "dateOfBirth": "1990-05-14",
        "gender": "female",
        "status": "resident",
        "mobile": "9876543210",
        "email": "asha.rao@example.com",
        "flatNo": "12B",
        "premises": "Lotus Towers",
        "area": "Kothrud",
        "city": "Pune",
        "state": "Maharashtra",
        "pincode": "411038",
    }


@pytest.fixture
def income_details():
    """Salary ₹12L + other sources ₹50k = ₹12.5L gross."""
    return {"salary": 1_200_000, "otherSources": 50_000}


@pytest.fixture
def deduction_details():
    """Every capped section over-claimed: 80C, 80D and 80TTA."""
    return {"section80C": 200_000, "section80D": 30_000, "section80TTA": 12_000}


@pytest.fixture
def tax_payments():
    return {
        "tdsOnSalary": 100_000,
        "bankName": "State Bank of India",
        "accountNumber": "123456789012",
        "ifscCode": "sbin0001234",
    }


@pytest.fixture
def return_form(personal_details, income_details, deduction_details, tax_payments):
    return {
        "personal": personal_details,
        "income": income_details,
        "deductions": deduction_details,
        "taxes": tax_payments,
    }
