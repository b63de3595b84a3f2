"""Built-in Indian income-tax schedules, expressed as bracket tables.

New regime (Budget 2023 onwards):
    FY 2023-24   ₹3L 5 % · ₹6L 10 % · ₹9L 15 % · ₹12L 20 % · ₹15L 30 %
    FY 2024-25   ₹3L 5 % · ₹7L 10 % · ₹10L 15 % · ₹12L 20 % · ₹15L 30 %
    Rebate u/s 87A ₹25,000 up to ₹7L.

Old regime (both years):
    exemption ₹2.5L / ₹3L / ₹5L by age, then 5 % to ₹5L, 20 % to ₹10L, 30 %.
    Rebate u/s 87A ₹12,500 up to ₹5L.

These are configuration values, not code: a caller can evaluate any other
schedule by passing its own ``BracketTable``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from fincalc.config import settings
from fincalc.models.domain import AgeCategory, BracketTable, RegimeName, TaxRegime

FINANCIAL_YEARS: Tuple[str, ...] = ("2023-24", "2024-25")

_NEW_REGIME_TABLES: Dict[str, BracketTable] = {
    "2023-24": BracketTable.from_pairs([
        (300_000, 0.05),
        (600_000, 0.10),
        (900_000, 0.15),
        (1_200_000, 0.20),
        (1_500_000, 0.30),
    ]),
    "2024-25": BracketTable.from_pairs([
        (300_000, 0.05),
        (700_000, 0.10),
        (1_000_000, 0.15),
        (1_200_000, 0.20),
        (1_500_000, 0.30),
    ]),
}

_OLD_REGIME_TABLES: Dict[AgeCategory, BracketTable] = {
    AgeCategory.BELOW_60: BracketTable.from_pairs([
        (250_000, 0.05),
        (500_000, 0.20),
        (1_000_000, 0.30),
    ]),
    AgeCategory.SENIOR: BracketTable.from_pairs([
        (300_000, 0.05),
        (500_000, 0.20),
        (1_000_000, 0.30),
    ]),
    AgeCategory.SUPER_SENIOR: BracketTable.from_pairs([
        (500_000, 0.20),
        (1_000_000, 0.30),
    ]),
}

# (rebate threshold, rebate amount)
_REBATES: Dict[RegimeName, Tuple[float, float]] = {
    RegimeName.NEW: (700_000.0, 25_000.0),
    RegimeName.OLD: (500_000.0, 12_500.0),
}

_STANDARD_DEDUCTIONS: Dict[Tuple[RegimeName, str], float] = {
    (RegimeName.NEW, "2023-24"): 50_000.0,
    (RegimeName.NEW, "2024-25"): 75_000.0,
    (RegimeName.OLD, "2023-24"): 50_000.0,
    (RegimeName.OLD, "2024-25"): 50_000.0,
}


def get_regime(
    name: RegimeName | str,
    financial_year: str,
    age_category: AgeCategory | str = AgeCategory.BELOW_60,
    table: Optional[BracketTable] = None,
) -> TaxRegime:
    """Look up a regime for *financial_year*.

    *table* replaces the built-in bracket table while keeping the regime's
    rebate, cess and deduction rules.

    Raises ``ValueError`` for an unknown regime, year or age category.
    """
    try:
        regime = RegimeName(name)
        age = AgeCategory(age_category)
    except ValueError as exc:
        raise ValueError(f"Unsupported regime or age category: {exc}") from exc

    if financial_year not in FINANCIAL_YEARS:
        raise ValueError(
            f"Unsupported financial year '{financial_year}'. "
            f"Supported: {', '.join(FINANCIAL_YEARS)}"
        )

    if table is None:
        if regime is RegimeName.NEW:
            table = _NEW_REGIME_TABLES[financial_year]
        else:
            table = _OLD_REGIME_TABLES[age]
    else:
        # Net income stays non-negative only while each marginal rupee,
        # cess included, is taxed at no more than 100 %
        top_rate = max(b.rate for b in table.brackets)
        if top_rate * (1 + settings.CESS_RATE) > 1:
            raise ValueError(
                f"Bracket rate {top_rate} plus {settings.CESS_RATE:.0%} cess "
                f"exceeds 100 % of income"
            )

    rebate_threshold, rebate_amount = _REBATES[regime]
    return TaxRegime(
        name=regime,
        financial_year=financial_year,
        table=table,
        cess_rate=settings.CESS_RATE,
        rebate_threshold=rebate_threshold,
        rebate_amount=rebate_amount,
        standard_deduction=_STANDARD_DEDUCTIONS[(regime, financial_year)],
        allows_deductions=regime is RegimeName.OLD,
        # New-regime slabs are the same for every age
        age_category=age if regime is RegimeName.OLD else None,
    )


def list_regimes() -> List[TaxRegime]:
    """Every built-in regime/year/age combination."""
    regimes: list[TaxRegime] = []
    for fy in FINANCIAL_YEARS:
        regimes.append(get_regime(RegimeName.NEW, fy))
        for age in AgeCategory:
            regimes.append(get_regime(RegimeName.OLD, fy, age))
    return regimes
