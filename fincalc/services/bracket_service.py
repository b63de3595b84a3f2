"""Progressive bracket evaluation and the adjustments applied after it.

Every regime (old, new, any caller-supplied schedule) is a ``BracketTable``
value; this module holds the single routine that walks such a table, plus the
rebate / cess / deduction-cap rules that surround it.

    tax = Σ  (min(income, next_bound) − lower_bound) × rate
          over brackets whose lower_bound < income
"""

from __future__ import annotations

from typing import Mapping, Tuple

from fincalc.models.domain import BracketTable
from fincalc.utils.helpers import clamp, round_currency


def evaluate_brackets(taxable_income: float, table: BracketTable) -> float:
    """Marginal-rate liability of *taxable_income* under *table*.

    Only the slice of income above each bound is taxed at that bracket's
    rate, so crossing a boundary never produces a jump.

    Returns
    -------
    float
        Liability before rebate and cess, rounded to 2 dp.
    """
    if taxable_income <= table.exemption_limit:
        return 0.0

    tax = 0.0
    for bracket, upper in zip(table.brackets, table.upper_bounds()):
        if taxable_income <= bracket.lower_bound:
            break
        taxable_in_bracket = min(taxable_income, upper) - bracket.lower_bound
        tax += taxable_in_bracket * bracket.rate

    return round_currency(tax)


def apply_rebate(
    base_tax: float,
    gross_income: float,
    rebate_threshold: float,
    rebate_amount: float,
) -> float:
    """Liability after the low-income rebate (never below zero)."""
    if gross_income <= rebate_threshold:
        return max(0.0, base_tax - rebate_amount)
    return base_tax


def apply_cess(liability: float, cess_rate: float) -> Tuple[float, float]:
    """Split ``liability × (1 + cess_rate)`` into ``(liability, cess)``."""
    cess = round_currency(liability * cess_rate)
    return liability, cess


def cap_deductions(
    deductions: Mapping[str, float],
    cap_table: Mapping[str, float],
) -> float:
    """Total of *deductions* with capped codes clamped to ``[0, cap]``."""
    total = 0.0
    for code, claimed in deductions.items():
        cap = cap_table.get(code.upper())
        if cap is None:
            total += claimed
        else:
            total += clamp(claimed, 0.0, cap)
    return round_currency(total)
