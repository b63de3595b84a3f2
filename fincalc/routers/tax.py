"""Routers for tax endpoints:
    GET   /api/v1/tax/regimes
    POST  /api/v1/tax:calculate
    POST  /api/v1/tax:compare
    POST  /api/v1/tax:brackets
    GET   /api/v1/gst/slabs
    POST  /api/v1/gst:calculate
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from fincalc.config import settings
from fincalc.models.domain import TaxInput
from fincalc.models.schemas import (
    BracketsRequest,
    BracketsResponse,
    CompareRequest,
    CompareResponse,
    GstRequest,
    GstResponse,
    GstSlab,
    RegimeSchema,
    TaxRequest,
    TaxResponse,
    to_bracket_table,
)
from fincalc.services.bracket_service import evaluate_brackets
from fincalc.services.gst_service import calculate_gst
from fincalc.services.tax_service import compare_regimes, compute_tax
from fincalc.services.tax_tables import get_regime, list_regimes
from fincalc.utils.helpers import round_currency

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Tax"],
)

_GST_LABELS = {
    0.0: "Essential goods",
    5.0: "Household necessities",
    12.0: "Standard items",
    18.0: "Most goods & services",
    28.0: "Luxury items",
}


# ── Regimes ───────────────────────────────────────────────────────────────

@router.get(
    "/tax/regimes",
    response_model=List[RegimeSchema],
    summary="List the built-in income-tax regimes and their bracket tables",
)
async def tax_regimes() -> List[RegimeSchema]:
    return [RegimeSchema.from_regime(regime) for regime in list_regimes()]


# ── Income tax ────────────────────────────────────────────────────────────

@router.post(
    "/tax:calculate",
    response_model=TaxResponse,
    summary="Calculate income tax under one regime",
)
async def tax_calculate(body: TaxRequest) -> TaxResponse:
    """Apply capped deductions, evaluate the regime's brackets, then the
    87A rebate and 4 % health & education cess.

    Supplying ``brackets`` evaluates that schedule instead of the built-in
    table while keeping the regime's rebate and cess rules.
    """
    try:
        table = to_bracket_table(body.brackets) if body.brackets else None
        regime = get_regime(body.regime, body.financialYear, body.ageCategory, table=table)
        tax_input = TaxInput(
            gross_income=body.income,
            deductions=body.deductions,
            age_category=body.ageCategory,
            standard_deduction=regime.standard_deduction if body.applyStandardDeduction else 0.0,
        )
        result = compute_tax(tax_input, regime)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.info(
        "Tax computed: regime=%s fy=%s taxable=%.2f total=%.2f",
        regime.name.value, regime.financial_year, result.taxable_income, result.total_tax,
    )
    return TaxResponse.from_result(result, regime)


@router.post(
    "/tax:compare",
    response_model=CompareResponse,
    summary="Compare old and new regime liability",
)
async def tax_compare(body: CompareRequest) -> CompareResponse:
    try:
        comparison = compare_regimes(
            gross_income=body.income,
            deductions=body.deductions,
            financial_year=body.financialYear,
            age_category=body.ageCategory,
            include_standard_deduction=body.includeStandardDeduction,
        )
        old_regime = get_regime("old", body.financialYear, body.ageCategory)
        new_regime = get_regime("new", body.financialYear, body.ageCategory)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return CompareResponse(
        old=TaxResponse.from_result(comparison["old"], old_regime),
        new=TaxResponse.from_result(comparison["new"], new_regime),
        recommended=comparison["recommended"],
        savings=comparison["savings"],
    )


@router.post(
    "/tax:brackets",
    response_model=BracketsResponse,
    summary="Evaluate a caller-supplied bracket table",
)
async def tax_brackets(body: BracketsRequest) -> BracketsResponse:
    """Marginal-rate tax on ``taxableIncome`` with no rebate or cess."""
    try:
        table = to_bracket_table(body.brackets)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    tax = evaluate_brackets(body.taxableIncome, table)
    effective = tax / body.taxableIncome if body.taxableIncome > 0 else 0.0
    return BracketsResponse(
        taxableIncome=round_currency(body.taxableIncome),
        tax=tax,
        effectiveRate=round(effective, 6),
    )


# ── GST ───────────────────────────────────────────────────────────────────

@router.get(
    "/gst/slabs",
    response_model=List[GstSlab],
    summary="Standard GST slabs",
    tags=["GST"],
)
async def gst_slabs() -> List[GstSlab]:
    return [
        GstSlab(rate=rate, label=_GST_LABELS.get(rate, f"{rate:g}%"))
        for rate in settings.GST_SLABS
    ]


@router.post(
    "/gst:calculate",
    response_model=GstResponse,
    summary="Calculate GST on an amount (exclusive or inclusive)",
    tags=["GST"],
)
async def gst_calculate(body: GstRequest) -> GstResponse:
    result = calculate_gst(body.amount, body.rate, body.calculationType)
    return GstResponse(**result)
