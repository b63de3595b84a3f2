"""Routers for income-tax return endpoints:
    POST  /api/v1/itr:step
    POST  /api/v1/itr:prepare
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from fincalc.models.schemas import (
    PrepareRequest,
    ReturnSummary,
    StepRequest,
    StepResponse,
)
from fincalc.services.itr_service import next_step, prepare_return, validate_step

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Income Tax Return"],
)


@router.post(
    "/itr:step",
    response_model=StepResponse,
    summary="Validate one step of the return form",
)
async def itr_step(body: StepRequest) -> StepResponse:
    """Check the fields of a single step and name the step that follows.

    Field errors are reported in the body with ``valid=false`` so the form
    can show them next to the inputs; an unknown step name is a 422.
    """
    try:
        record, errors = validate_step(body.step, body.data)
        following = next_step(body.step) if record is not None else None
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return StepResponse(
        step=body.step,
        valid=record is not None,
        errors=errors,
        nextStep=following.value if following is not None else None,
    )


@router.post(
    "/itr:prepare",
    response_model=ReturnSummary,
    summary="Prepare the return summary: liability, taxes paid, refund or due",
)
async def itr_prepare(body: PrepareRequest) -> ReturnSummary:
    try:
        summary = prepare_return(body, body.regime, body.financialYear)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    logger.info(
        "Return prepared for FY %s (%s regime): %s %.2f",
        summary.financialYear, summary.regime.value, summary.status, abs(summary.refundOrDue),
    )
    return summary
