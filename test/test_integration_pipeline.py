# Test type: Integration Test
# Validation to be executed: End-to-end business logic integration: regime
#   lookup, deduction capping, bracket evaluation, rebate and cess chained
#   through the return workflow, checked against hand-computed figures.
# Command: pytest test/test_integration_pipeline.py -v

"""Integration tests that exercise the full tax pipeline without HTTP."""

import pytest

from fincalc.config import settings
from fincalc.models.domain import AgeCategory, TaxInput
from fincalc.services.bracket_service import (
    apply_cess,
    apply_rebate,
    cap_deductions,
    evaluate_brackets,
)
from fincalc.services.itr_service import ReturnWorkflow
from fincalc.services.tax_service import compute_tax
from fincalc.services.tax_tables import get_regime


class TestPipelineMatchesComposedSteps:
    """compute_tax must equal the primitives chained by hand."""

    @pytest.mark.parametrize("gross", [350_000, 480_000, 760_000, 1_480_000, 3_200_000])
    @pytest.mark.parametrize("age", list(AgeCategory))
    def test_old_regime(self, gross, age):
        regime = get_regime("old", "2024-25", age)
        deductions = {"80C": 175_000, "80D": 20_000, "80G": 5_000}

        claimed = cap_deductions(deductions, settings.DEDUCTION_CAPS)
        taxable = max(0.0, gross - claimed - regime.standard_deduction)
        base = evaluate_brackets(taxable, regime.table)
        after_rebate = apply_rebate(base, gross, regime.rebate_threshold, regime.rebate_amount)
        _, cess = apply_cess(after_rebate, regime.cess_rate)

        result = compute_tax(
            TaxInput(gross, deductions, age, regime.standard_deduction), regime,
        )
        assert result.taxable_income == pytest.approx(taxable)
        assert result.base_tax == base
        assert result.cess == cess
        assert result.total_tax == pytest.approx(after_rebate + cess)


class TestWorkflowScenario:
    """A senior filer walks the form under the old regime."""

    def test_senior_filer(self, personal_details, tax_payments):
        personal_details["dateOfBirth"] = "1958-09-01"   # 66 on 31 Mar 2025
        tax_payments["tdsOnSalary"] = 0
        tax_payments["advanceTax"] = 10_000

        workflow = ReturnWorkflow(regime="old", financial_year="2024-25")
        workflow.submit(personal_details)
        workflow.submit({"salary": 650_000, "otherSources": 40_000})
        workflow.submit({"section80C": 150_000, "section80TTA": 15_000})
        workflow.submit(tax_payments)

        summary = workflow.summary()
        # 6.9L − 50k − 1.5L − 10k = 4.8L; senior exemption 3L → 5 % of 1.8L = 9,000
        # gross 6.9L > 5L so no rebate; cess 360
        assert summary.taxableIncome == 480_000.0
        assert summary.breakdown.baseTax == 9_000.0
        assert summary.taxLiability == 9_360.0
        assert summary.refundOrDue == 640.0
        assert summary.status == "REFUND"
