"""Income-tax liability pipeline.

    gross income, deductions
        → taxable income          (capped deductions + standard deduction)
        → base tax                (bracket evaluation)
        → rebate                  (u/s 87A style, gross income ≤ threshold)
        → cess                    (on the post-rebate liability)
        → total tax, net income
"""

from __future__ import annotations

from typing import Mapping, Optional

from fincalc.config import settings
from fincalc.models.domain import AgeCategory, RegimeName, TaxInput, TaxRegime, TaxResult
from fincalc.services.bracket_service import (
    apply_cess,
    apply_rebate,
    cap_deductions,
    evaluate_brackets,
)
from fincalc.services.tax_tables import get_regime
from fincalc.utils.helpers import round_currency


def compute_tax(
    tax_input: TaxInput,
    regime: TaxRegime,
    cap_table: Optional[Mapping[str, float]] = None,
) -> TaxResult:
    """Run the full liability pipeline for *tax_input* under *regime*.

    Chapter VI-A deductions only count when the regime allows them; the
    standard deduction on ``tax_input`` always applies.
    """
    caps = settings.DEDUCTION_CAPS if cap_table is None else cap_table

    claimed = cap_deductions(tax_input.deductions, caps) if regime.allows_deductions else 0.0
    total_deductions = round_currency(claimed + tax_input.standard_deduction)
    taxable_income = round_currency(max(0.0, tax_input.gross_income - total_deductions))

    base_tax = evaluate_brackets(taxable_income, regime.table)
    after_rebate = apply_rebate(
        base_tax,
        tax_input.gross_income,
        regime.rebate_threshold,
        regime.rebate_amount,
    )
    rebate = round_currency(base_tax - after_rebate)
    liability, cess = apply_cess(after_rebate, regime.cess_rate)
    total_tax = round_currency(liability + cess)

    return TaxResult(
        gross_income=round_currency(tax_input.gross_income),
        total_deductions=total_deductions,
        taxable_income=taxable_income,
        base_tax=base_tax,
        rebate=rebate,
        cess=cess,
        total_tax=total_tax,
        net_income=round_currency(tax_input.gross_income - total_tax),
    )


def compare_regimes(
    gross_income: float,
    deductions: Mapping[str, float],
    financial_year: str,
    age_category: AgeCategory = AgeCategory.BELOW_60,
    include_standard_deduction: bool = True,
) -> dict:
    """Compute old- and new-regime liability side by side.

    Returns dict with keys: old, new (TaxResult), recommended, savings.
    """
    results: dict[RegimeName, TaxResult] = {}
    for name in (RegimeName.OLD, RegimeName.NEW):
        regime = get_regime(name, financial_year, age_category)
        tax_input = TaxInput(
            gross_income=gross_income,
            deductions=deductions,
            age_category=age_category,
            standard_deduction=regime.standard_deduction if include_standard_deduction else 0.0,
        )
        results[name] = compute_tax(tax_input, regime)

    old_tax = results[RegimeName.OLD].total_tax
    new_tax = results[RegimeName.NEW].total_tax
    # Ties go to the new regime, the statutory default
    recommended = RegimeName.OLD if old_tax < new_tax else RegimeName.NEW

    return {
        "old": results[RegimeName.OLD],
        "new": results[RegimeName.NEW],
        "recommended": recommended,
        "savings": round_currency(abs(old_tax - new_tax)),
    }
