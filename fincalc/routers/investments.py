"""Routers for deposit and loan endpoints:
    POST  /api/v1/investments:maturity
    POST  /api/v1/loans:emi
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from fincalc.models.domain import InvestmentInput
from fincalc.models.schemas import (
    InvestmentRequest,
    InvestmentResponse,
    LoanRequest,
    LoanResponse,
)
from fincalc.services.investment_service import calculate_maturity
from fincalc.services.loan_service import calculate_loan

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Investments"],
)


@router.post(
    "/investments:maturity",
    response_model=InvestmentResponse,
    summary="Maturity value of an FD, RD or NSC-style deposit",
)
async def investment_maturity(body: InvestmentRequest) -> InvestmentResponse:
    """Compute maturity amount, total contributed and interest earned.

    - ``lump_sum``: compounded ``compoundingFrequency`` times a year (default 4).
    - ``recurring``: ``amount`` is the monthly instalment.
    - ``annual``: compounded yearly at the given rate or the NSC rate.
    """
    investment = InvestmentInput(
        instrument=body.instrument,
        principal_or_contribution=body.amount,
        term_years=body.termYears,
        annual_rate_percent=body.annualRatePercent,
        compounding_frequency=body.compoundingFrequency,
    )
    try:
        result = calculate_maturity(investment)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return InvestmentResponse(
        instrument=body.instrument,
        maturityAmount=result.maturity_amount,
        totalContributed=result.total_contributed,
        totalInterest=result.total_interest,
        annualRatePercent=result.annual_rate_percent,
    )


@router.post(
    "/loans:emi",
    response_model=LoanResponse,
    summary="Equated monthly instalment and optional amortisation schedule",
    tags=["Loans"],
)
async def loan_emi(body: LoanRequest) -> LoanResponse:
    try:
        result = calculate_loan(
            principal=body.amount,
            annual_rate_percent=body.annualRatePercent,
            years=body.termYears,
            include_schedule=body.includeSchedule,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.debug("EMI %.2f over %d months", result["monthlyPayment"], result["months"])
    return LoanResponse(**result)
