# Test type: Unit Test
# Validation to be executed: Validates EMI computation, the zero-rate fallback
#   and the amortisation schedule (balance reaches zero, parts add up).
# Command: pytest test/test_unit_loan.py -v

"""Unit tests for fincalc.services.loan_service module."""

import pytest

from fincalc.services.loan_service import (
    amortization_schedule,
    calculate_loan,
    monthly_payment,
)


class TestMonthlyPayment:

    def test_scenario_10k_5_percent_5_years(self):
        assert monthly_payment(10_000, 5, 5) == pytest.approx(188.71, abs=0.01)

    def test_zero_rate_spreads_principal(self):
        assert monthly_payment(12_000, 0, 1) == 1_000

    def test_term_shorter_than_a_month(self):
        with pytest.raises(ValueError, match="at least one month"):
            monthly_payment(1_000, 5, 0.01)


class TestAmortizationSchedule:

    @pytest.fixture
    def schedule(self):
        return amortization_schedule(10_000, 5, 5)

    def test_length(self, schedule):
        assert len(schedule) == 60
        assert schedule[0]["month"] == 1
        assert schedule[-1]["month"] == 60

    def test_first_month_split(self, schedule):
        """Interest = 10000 × 5/1200 = 41.67; principal = 188.71 − 41.67."""
        assert schedule[0]["interest"] == 41.67
        assert schedule[0]["principal"] == 147.04
        assert schedule[0]["balance"] == 9_852.96

    def test_balance_reaches_zero(self, schedule):
        assert schedule[-1]["balance"] == 0.0

    def test_principal_repaid_exactly(self, schedule):
        assert sum(row["principal"] for row in schedule) == pytest.approx(10_000, abs=0.01)

    def test_balance_decreases(self, schedule):
        balances = [row["balance"] for row in schedule]
        assert balances == sorted(balances, reverse=True)

    def test_too_long(self):
        with pytest.raises(ValueError, match="limited to"):
            amortization_schedule(1_000, 5, 51)


class TestCalculateLoan:

    def test_summary(self):
        result = calculate_loan(10_000, 5, 5)
        assert result["monthlyPayment"] == 188.71
        assert result["months"] == 60
        assert result["totalInterest"] == pytest.approx(result["totalPayment"] - 10_000, abs=0.01)
        assert "schedule" not in result

    def test_with_schedule(self):
        result = calculate_loan(10_000, 5, 5, include_schedule=True)
        assert len(result["schedule"]) == 60

    def test_zero_rate_no_interest(self):
        result = calculate_loan(12_000, 0, 1)
        assert result["totalInterest"] == 0.0
        assert result["totalPayment"] == 12_000.0
