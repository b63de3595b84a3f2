"""Immutable calculation records shared by the tax and deposit engines.

These are plain frozen dataclasses: the services build them fresh for every
request and never mutate them afterwards.  The pydantic schemas in
``fincalc.models.schemas`` map HTTP payloads onto these records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Tuple


class AgeCategory(str, Enum):
    BELOW_60 = "below60"
    SENIOR = "60to80"
    SUPER_SENIOR = "above80"


class RegimeName(str, Enum):
    OLD = "old"
    NEW = "new"


class Instrument(str, Enum):
    """Deposit instruments supported by the maturity engine."""
    LUMP_SUM = "lump_sum"      # fixed deposit, intra-year compounding
    RECURRING = "recurring"    # recurring deposit, monthly contributions
    ANNUAL = "annual"          # NSC-style, compounded once a year


class GstCalculationType(str, Enum):
    EXCLUSIVE = "exclusive"    # amount is the net price
    INCLUSIVE = "inclusive"    # amount already contains GST


# ── Bracket tables ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Bracket:
    lower_bound: float
    rate: float


@dataclass(frozen=True)
class BracketTable:
    """Ordered marginal-rate brackets.

    Bounds must be strictly increasing and non-negative; rates lie in [0, 1].
    The first bound may be 0 or an exemption threshold below which no tax
    is due.
    """

    brackets: Tuple[Bracket, ...]

    def __post_init__(self) -> None:
        if not self.brackets:
            raise ValueError("A bracket table needs at least one bracket")
        previous = -math.inf
        for bracket in self.brackets:
            if bracket.lower_bound < 0 or not math.isfinite(bracket.lower_bound):
                raise ValueError(
                    f"Bracket lower bound must be a finite non-negative amount, "
                    f"got {bracket.lower_bound}"
                )
            if bracket.lower_bound <= previous:
                raise ValueError("Bracket lower bounds must be strictly increasing")
            if not 0.0 <= bracket.rate <= 1.0:
                raise ValueError(f"Bracket rate must lie in [0, 1], got {bracket.rate}")
            previous = bracket.lower_bound

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[float, float]]) -> "BracketTable":
        """Build a table from ``(lower_bound, rate)`` pairs."""
        return cls(tuple(Bracket(float(lower), float(rate)) for lower, rate in pairs))

    @property
    def exemption_limit(self) -> float:
        """Income up to this amount is untaxed."""
        return self.brackets[0].lower_bound

    def upper_bounds(self) -> Tuple[float, ...]:
        """Next bracket's lower bound for every bracket (infinity for the last)."""
        bounds = [b.lower_bound for b in self.brackets[1:]]
        bounds.append(math.inf)
        return tuple(bounds)


@dataclass(frozen=True)
class TaxRegime:
    """Everything needed to compute liability for one regime and year."""

    name: RegimeName
    financial_year: str
    table: BracketTable
    cess_rate: float
    rebate_threshold: float
    rebate_amount: float
    standard_deduction: float
    allows_deductions: bool
    age_category: Optional[AgeCategory] = None


# ── Tax pipeline records ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TaxInput:
    gross_income: float
    deductions: Mapping[str, float] = field(default_factory=dict)
    age_category: AgeCategory = AgeCategory.BELOW_60
    standard_deduction: float = 0.0


@dataclass(frozen=True)
class TaxResult:
    gross_income: float
    total_deductions: float
    taxable_income: float
    base_tax: float
    rebate: float
    cess: float
    total_tax: float
    net_income: float


# ── Deposit records ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class InvestmentInput:
    instrument: Instrument
    principal_or_contribution: float
    term_years: float
    annual_rate_percent: Optional[float] = None
    compounding_frequency: Optional[int] = None


@dataclass(frozen=True)
class InvestmentResult:
    maturity_amount: float
    total_contributed: float
    total_interest: float
    annual_rate_percent: float
