"""Loan repayment: equated monthly instalment and amortisation schedule.

EMI = P × i × (1 + i)^n / ((1 + i)^n − 1),  i = r / 1200,  n = years × 12
"""

from __future__ import annotations

from typing import List

from fincalc.config import settings
from fincalc.utils.helpers import round_currency


def _months(years: float) -> int:
    months = int(round(years * 12))
    if months < 1:
        raise ValueError("Loan term must cover at least one month")
    return months


def monthly_payment(principal: float, annual_rate_percent: float, years: float) -> float:
    """Unrounded EMI; a zero rate spreads the principal evenly."""
    months = _months(years)
    monthly_rate = annual_rate_percent / 1200
    if monthly_rate == 0:
        return principal / months
    factor = (1 + monthly_rate) ** months
    return principal * monthly_rate * factor / (factor - 1)


def amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    years: float,
) -> List[dict]:
    """Month-by-month split of each instalment into interest and principal.

    Every row is rounded to paise; the final instalment absorbs the rounding
    remainder so the closing balance is exactly zero.
    """
    months = _months(years)
    if months > settings.MAX_LOAN_SCHEDULE_MONTHS:
        raise ValueError(
            f"Schedules are limited to {settings.MAX_LOAN_SCHEDULE_MONTHS} months"
        )

    monthly_rate = annual_rate_percent / 1200
    emi = round_currency(monthly_payment(principal, annual_rate_percent, years))
    balance = round_currency(principal)
    rows: list[dict] = []

    for month in range(1, months + 1):
        interest = round_currency(balance * monthly_rate)
        if month == months:
            principal_part = balance
        else:
            principal_part = min(balance, round_currency(emi - interest))
        balance = round_currency(balance - principal_part)
        rows.append({
            "month": month,
            "payment": round_currency(principal_part + interest),
            "principal": principal_part,
            "interest": interest,
            "balance": balance,
        })

    return rows


def calculate_loan(
    principal: float,
    annual_rate_percent: float,
    years: float,
    include_schedule: bool = False,
) -> dict:
    """Summarise a loan.

    Returns dict with keys: monthlyPayment, totalPayment, totalInterest,
    months and, when requested, schedule.
    """
    months = _months(years)
    emi = monthly_payment(principal, annual_rate_percent, years)
    total_payment = round_currency(emi * months)

    result = {
        "monthlyPayment": round_currency(emi),
        "totalPayment": total_payment,
        "totalInterest": round_currency(total_payment - principal),
        "months": months,
    }
    if include_schedule:
        result["schedule"] = amortization_schedule(principal, annual_rate_percent, years)
    return result
