# Test type: Unit Test
# Validation to be executed: Validates bracket-table construction, marginal
#   bracket evaluation (boundaries, monotonicity), rebate, cess and
#   deduction capping.
# Command: pytest test/test_unit_brackets.py -v

"""Unit tests for fincalc.services.bracket_service and BracketTable."""

import pytest

from fincalc.config import settings
from fincalc.models.domain import Bracket, BracketTable
from fincalc.services.bracket_service import (
    apply_cess,
    apply_rebate,
    cap_deductions,
    evaluate_brackets,
)
from fincalc.services.tax_tables import get_regime


@pytest.fixture
def new_regime_fy24():
    """New regime FY 2023-24: ₹3L 5 %, ₹6L 10 %, ₹9L 15 %, ₹12L 20 %, ₹15L 30 %."""
    return get_regime("new", "2023-24").table


class TestBracketTable:
    """Construction-time validation."""

    def test_from_pairs(self):
        table = BracketTable.from_pairs([(0, 0.1), (10_000, 0.2)])
        assert table.brackets == (Bracket(0.0, 0.1), Bracket(10_000.0, 0.2))
        assert table.exemption_limit == 0.0

    def test_upper_bounds_end_with_infinity(self):
        table = BracketTable.from_pairs([(100, 0.1), (200, 0.2)])
        assert table.upper_bounds() == (200.0, float("inf"))

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError, match="at least one"):
            BracketTable(())

    def test_non_increasing_bounds_rejected(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            BracketTable.from_pairs([(0, 0.1), (5_000, 0.2), (5_000, 0.3)])

    def test_rate_above_one_rejected(self):
        with pytest.raises(ValueError, match="rate"):
            BracketTable.from_pairs([(0, 1.5)])

    def test_negative_bound_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            BracketTable.from_pairs([(-1, 0.1)])


class TestEvaluateBrackets:
    """Marginal-rate accumulation."""

    def test_scenario_9L_new_regime(self, new_regime_fy24):
        """₹9L = 5 % of ₹3L + 10 % of ₹3L = ₹45,000."""
        assert evaluate_brackets(900_000, new_regime_fy24) == 45_000.0

    def test_zero_income(self, new_regime_fy24):
        assert evaluate_brackets(0, new_regime_fy24) == 0.0

    def test_below_first_bound(self, new_regime_fy24):
        assert evaluate_brackets(250_000, new_regime_fy24) == 0.0

    def test_exactly_at_first_bound(self, new_regime_fy24):
        assert evaluate_brackets(300_000, new_regime_fy24) == 0.0

    def test_one_rupee_over_boundary(self, new_regime_fy24):
        """₹6,00,001 → ₹15,000 + 10 % of ₹1; only the excess is taxed higher."""
        assert evaluate_brackets(600_001, new_regime_fy24) == 15_000.10

    def test_top_bracket(self, new_regime_fy24):
        """₹20L = 15k + 30k + 45k + 60k + 30 % of ₹5L = ₹3,00,000."""
        assert evaluate_brackets(2_000_000, new_regime_fy24) == 300_000.0

    def test_zero_based_table(self):
        table = BracketTable.from_pairs([(0, 0.1), (10_000, 0.2)])
        assert evaluate_brackets(15_000, table) == 2_000.0

    def test_monotonic_in_income(self, new_regime_fy24):
        previous = 0.0
        for income in range(0, 3_000_000, 12_345):
            tax = evaluate_brackets(income, new_regime_fy24)
            assert tax >= previous
            previous = tax

    def test_post_tax_income_never_drops(self, new_regime_fy24):
        """No cliff: a raise never leaves less after tax."""
        incomes = [299_999, 300_000, 300_001, 599_999, 600_000, 600_001, 1_500_000, 1_500_001]
        after_tax = [i - evaluate_brackets(i, new_regime_fy24) for i in incomes]
        assert after_tax == sorted(after_tax)


class TestApplyRebate:

    def test_rebate_wipes_small_liability(self):
        assert apply_rebate(10_000, 600_000, 700_000, 25_000) == 0.0

    def test_rebate_partially_reduces(self):
        assert apply_rebate(30_000, 650_000, 700_000, 25_000) == 5_000.0

    def test_threshold_is_inclusive(self):
        assert apply_rebate(20_000, 700_000, 700_000, 25_000) == 0.0

    def test_above_threshold_unchanged(self):
        assert apply_rebate(45_000, 900_000, 700_000, 25_000) == 45_000

    def test_never_negative(self):
        for base in (0, 1, 12_499, 12_500, 12_501):
            assert apply_rebate(base, 100_000, 500_000, 12_500) >= 0.0


class TestApplyCess:

    def test_four_percent(self):
        assert apply_cess(45_000, 0.04) == (45_000, 1_800.0)

    def test_zero_liability(self):
        assert apply_cess(0.0, 0.04) == (0.0, 0.0)


class TestCapDeductions:

    def test_capped_codes_are_clamped(self):
        claimed = {"80C": 200_000, "80D": 30_000, "80TTA": 12_000}
        assert cap_deductions(claimed, settings.DEDUCTION_CAPS) == 185_000.0

    def test_uncapped_codes_summed(self):
        claimed = {"80C": 100_000, "80G": 40_000, "80E": 60_000}
        assert cap_deductions(claimed, settings.DEDUCTION_CAPS) == 200_000.0

    def test_code_lookup_is_case_insensitive(self):
        assert cap_deductions({"80c": 500_000}, settings.DEDUCTION_CAPS) == 150_000.0

    def test_negative_capped_claim_clamped_to_zero(self):
        assert cap_deductions({"80C": -100}, settings.DEDUCTION_CAPS) == 0.0

    def test_empty(self):
        assert cap_deductions({}, settings.DEDUCTION_CAPS) == 0.0
