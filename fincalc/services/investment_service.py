"""Deposit maturity calculations: FD, RD and NSC.

Instruments:
    Lump sum (FD)  – A = P × (1 + r / (100 n))^(n t),  n compoundings a year
    Recurring (RD) – annuity-due over t × 12 months at i = r / 1200:
                     A = M × ((1 + i)^N − 1) / i × (1 + i)
    Annual (NSC)   – A = P × (1 + r / 100)^t

Rates are percentages per annum; terms are years (fractions allowed).
"""

from __future__ import annotations

from fincalc.config import settings
from fincalc.models.domain import Instrument, InvestmentInput, InvestmentResult
from fincalc.utils.helpers import round_currency


def lump_sum_maturity(
    principal: float,
    annual_rate_percent: float,
    years: float,
    compounding_frequency: int = settings.FD_COMPOUNDING_FREQUENCY,
) -> float:
    """P × (1 + r/(100·n))^(n·t)."""
    if compounding_frequency < 1:
        raise ValueError("Compounding frequency must be at least once a year")
    periodic_rate = annual_rate_percent / (100 * compounding_frequency)
    return principal * ((1 + periodic_rate) ** (compounding_frequency * years))


def periodic_contribution_maturity(
    monthly_amount: float,
    annual_rate_percent: float,
    years: float,
) -> float:
    """Future value of monthly contributions paid at the start of each month.

    A zero rate has no growth term, so the maturity is the plain sum of
    contributions.
    """
    months = years * 12
    monthly_rate = annual_rate_percent / 1200
    if monthly_rate == 0:
        return monthly_amount * months
    growth = ((1 + monthly_rate) ** months - 1) / monthly_rate
    return monthly_amount * growth * (1 + monthly_rate)


def annual_compound_maturity(
    principal: float,
    annual_rate_percent: float,
    years: float,
) -> float:
    """P × (1 + r/100)^t (compounded annually, n=1)."""
    return principal * ((1 + annual_rate_percent / 100) ** years)


# ── Public API ────────────────────────────────────────────────────────────

def calculate_maturity(investment: InvestmentInput) -> InvestmentResult:
    """Dispatch on the instrument and build the maturity breakdown.

    Interest is derived from the rounded maturity and contribution so the
    three reported figures always add up exactly.
    """
    amount = investment.principal_or_contribution
    years = investment.term_years
    rate = investment.annual_rate_percent

    if investment.instrument is Instrument.LUMP_SUM:
        if rate is None:
            raise ValueError("An interest rate is required for a lump-sum deposit")
        frequency = investment.compounding_frequency
        if frequency is None:
            frequency = settings.FD_COMPOUNDING_FREQUENCY
        maturity = lump_sum_maturity(amount, rate, years, frequency)
        contributed = amount
    elif investment.instrument is Instrument.RECURRING:
        if rate is None:
            raise ValueError("An interest rate is required for a recurring deposit")
        maturity = periodic_contribution_maturity(amount, rate, years)
        contributed = amount * years * 12
    elif investment.instrument is Instrument.ANNUAL:
        if rate is None:
            rate = settings.NSC_RATE
        maturity = annual_compound_maturity(amount, rate, years)
        contributed = amount
    else:
        raise ValueError(f"Unsupported instrument: {investment.instrument}")

    maturity_amount = round_currency(maturity)
    total_contributed = round_currency(contributed)

    return InvestmentResult(
        maturity_amount=maturity_amount,
        total_contributed=total_contributed,
        total_interest=round_currency(maturity_amount - total_contributed),
        annual_rate_percent=rate,
    )
