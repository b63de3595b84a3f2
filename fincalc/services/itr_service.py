"""Income-tax return preparation: the multi-step filing form.

Steps, in order:
    personal    → identity, contact details and address
    income      → six income heads
    deductions  → Chapter VI-A claims (80C, 80D, 80G, 80E, 80EE, 80TTA)
    taxes       → TDS, advance / self-assessment tax and refund bank account
    summary     → liability vs taxes paid, refund or amount payable

``ReturnWorkflow`` keeps the records of one in-progress return in memory;
``prepare_return`` is the stateless calculation behind the summary step.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from fincalc.config import settings
from fincalc.models.domain import AgeCategory, RegimeName, TaxInput
from fincalc.models.schemas import (
    DeductionDetails,
    IncomeDetails,
    PersonalDetails,
    ReturnForm,
    ReturnSummary,
    TaxPayments,
    TaxResponse,
)
from fincalc.services.tax_service import compute_tax
from fincalc.services.tax_tables import get_regime
from fincalc.utils.helpers import (
    assessment_year,
    parse_financial_year,
    round_currency,
    round_rupee,
)

logger = logging.getLogger(__name__)


class ReturnStep(str, Enum):
    PERSONAL = "personal"
    INCOME = "income"
    DEDUCTIONS = "deductions"
    TAXES = "taxes"
    SUMMARY = "summary"


STEP_ORDER: Tuple[ReturnStep, ...] = tuple(ReturnStep)

_STEP_MODELS: Dict[ReturnStep, Type[BaseModel]] = {
    ReturnStep.PERSONAL: PersonalDetails,
    ReturnStep.INCOME: IncomeDetails,
    ReturnStep.DEDUCTIONS: DeductionDetails,
    ReturnStep.TAXES: TaxPayments,
}


def _parse_step(step: ReturnStep | str) -> ReturnStep:
    try:
        return ReturnStep(step)
    except ValueError:
        raise ValueError(
            f"Unknown step '{step}'. Expected one of: "
            f"{', '.join(s.value for s in STEP_ORDER)}"
        ) from None


def next_step(step: ReturnStep | str) -> Optional[ReturnStep]:
    """The step after *step*, or ``None`` once the summary is reached."""
    index = STEP_ORDER.index(_parse_step(step))
    if index + 1 < len(STEP_ORDER):
        return STEP_ORDER[index + 1]
    return None


def _format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def validate_step(
    step: ReturnStep | str,
    payload: dict,
) -> Tuple[Optional[BaseModel], List[str]]:
    """Validate the fields of a single step.

    Returns ``(record, [])`` on success or ``(None, errors)`` on failure.
    Raises ``ValueError`` for an unknown step or for the summary step,
    which has no fields of its own.
    """
    parsed = _parse_step(step)
    model = _STEP_MODELS.get(parsed)
    if model is None:
        raise ValueError("The summary step has no fields to validate")

    try:
        return model.model_validate(payload), []
    except ValidationError as exc:
        return None, _format_errors(exc)


def age_category_for(date_of_birth: date, financial_year: str) -> AgeCategory:
    """Age bracket on the last day of *financial_year* (31 March)."""
    _, end_year = parse_financial_year(financial_year)
    year_end = date(end_year, 3, 31)
    age = year_end.year - date_of_birth.year - (
        (year_end.month, year_end.day) < (date_of_birth.month, date_of_birth.day)
    )
    if age >= 80:
        return AgeCategory.SUPER_SENIOR
    if age >= 60:
        return AgeCategory.SENIOR
    return AgeCategory.BELOW_60


# ── Summary ───────────────────────────────────────────────────────────────

def prepare_return(
    form: ReturnForm,
    regime: RegimeName | str = RegimeName.NEW,
    financial_year: str = settings.DEFAULT_FINANCIAL_YEAR,
) -> ReturnSummary:
    """Compute the summary of a completed return.

    The standard deduction is limited to salary income.  The liability is
    rounded to the whole rupee before it is compared with taxes paid.
    """
    age = age_category_for(form.personal.dateOfBirth, financial_year)
    tax_regime = get_regime(regime, financial_year, age)

    salary_income = form.income.salary + form.income.allowances
    standard_deduction = min(tax_regime.standard_deduction, salary_income)

    tax_input = TaxInput(
        gross_income=form.income.total(),
        deductions=form.deductions.by_code(),
        age_category=age,
        standard_deduction=standard_deduction,
    )
    result = compute_tax(tax_input, tax_regime)

    tax_liability = round_rupee(result.total_tax)
    taxes_paid = round_currency(form.taxes.total_paid())
    refund_or_due = round_currency(taxes_paid - tax_liability)

    logger.debug(
        "Prepared %s-regime return for FY %s: liability=%.2f paid=%.2f",
        tax_regime.name.value, financial_year, tax_liability, taxes_paid,
    )

    return ReturnSummary(
        financialYear=financial_year,
        assessmentYear=assessment_year(financial_year),
        regime=tax_regime.name,
        totalIncome=result.gross_income,
        totalDeductions=round_currency(result.total_deductions - standard_deduction),
        standardDeduction=round_currency(standard_deduction),
        taxableIncome=result.taxable_income,
        taxLiability=tax_liability,
        taxesPaid=taxes_paid,
        refundOrDue=refund_or_due,
        status="REFUND" if refund_or_due >= 0 else "PAYABLE",
        fileName=f"ITR_{form.personal.pan}_FY{financial_year}.json",
        breakdown=TaxResponse.from_result(result, tax_regime),
    )


# ── Workflow ──────────────────────────────────────────────────────────────

class ReturnWorkflow:
    """Step-by-step state of one return being filled in.

    ``submit`` validates the current step and moves forward; ``back``
    moves one step back without discarding what was entered.  The summary
    is only available once every data step has been accepted.
    """

    def __init__(
        self,
        regime: RegimeName | str = RegimeName.NEW,
        financial_year: str = settings.DEFAULT_FINANCIAL_YEAR,
    ) -> None:
        # Fail early on an unsupported regime or year
        get_regime(regime, financial_year)
        self.regime = RegimeName(regime)
        self.financial_year = financial_year
        self.current_step: ReturnStep = ReturnStep.PERSONAL
        self._records: Dict[ReturnStep, BaseModel] = {}

    @property
    def is_complete(self) -> bool:
        return all(step in self._records for step in _STEP_MODELS)

    def record(self, step: ReturnStep | str) -> Optional[BaseModel]:
        return self._records.get(_parse_step(step))

    def submit(self, payload: dict) -> ReturnStep:
        """Validate *payload* for the current step and advance.

        Raises ``pydantic.ValidationError`` (a ``ValueError``) if the fields
        are invalid; the workflow stays on the same step.
        """
        if self.current_step is ReturnStep.SUMMARY:
            raise ValueError("All steps are already submitted")

        model = _STEP_MODELS[self.current_step]
        self._records[self.current_step] = model.model_validate(payload)
        self.current_step = next_step(self.current_step)
        return self.current_step

    def back(self) -> ReturnStep:
        index = STEP_ORDER.index(self.current_step)
        self.current_step = STEP_ORDER[max(0, index - 1)]
        return self.current_step

    def form(self) -> ReturnForm:
        if not self.is_complete:
            missing = [s.value for s in _STEP_MODELS if s not in self._records]
            raise ValueError(f"Return is incomplete; missing steps: {', '.join(missing)}")
        return ReturnForm(
            personal=self._records[ReturnStep.PERSONAL],
            income=self._records[ReturnStep.INCOME],
            deductions=self._records[ReturnStep.DEDUCTIONS],
            taxes=self._records[ReturnStep.TAXES],
        )

    def summary(self) -> ReturnSummary:
        return prepare_return(self.form(), self.regime, self.financial_year)
