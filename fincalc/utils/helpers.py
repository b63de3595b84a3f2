"""Shared utility functions: rounding and financial-year arithmetic."""

from __future__ import annotations

import re

_FY_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def round_currency(value: float, decimals: int = 2) -> float:
    """Round to *decimals* places (standard banker-friendly rounding)."""
    return round(value, decimals)


def round_rupee(value: float) -> float:
    """Round to the nearest whole rupee, halves away from zero."""
    if value < 0:
        return -float(int(-value + 0.5))
    return float(int(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp *value* into ``[lower, upper]``."""
    return max(lower, min(value, upper))


def parse_financial_year(value: str) -> tuple[int, int]:
    """Split ``"2024-25"`` into ``(2024, 2025)``.

    Raises ``ValueError`` if the string is not a consecutive FY label.
    """
    match = _FY_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(
            f"Invalid financial year: '{value}'. Expected YYYY-YY (e.g. 2024-25)."
        )
    start = int(match.group(1))
    end_suffix = int(match.group(2))
    if (start + 1) % 100 != end_suffix:
        raise ValueError(
            f"Invalid financial year: '{value}'. Years must be consecutive."
        )
    return start, start + 1


def assessment_year(financial_year: str) -> str:
    """The assessment year follows the financial year: 2024-25 → 2025-26."""
    start, _ = parse_financial_year(financial_year)
    return f"{start + 1}-{(start + 2) % 100:02d}"
