"""Goods and Services Tax on an invoice amount.

Exclusive:  amount is the net price   → GST = amount × rate / 100
Inclusive:  amount already holds GST  → net = amount × 100 / (100 + rate)
"""

from __future__ import annotations

from fincalc.models.domain import GstCalculationType
from fincalc.utils.helpers import round_currency


def calculate_gst(
    amount: float,
    rate_percent: float,
    calculation_type: GstCalculationType | str = GstCalculationType.EXCLUSIVE,
) -> dict:
    """Split *amount* into net price and GST.

    Returns dict with keys: netAmount, gstAmount, totalAmount, rate, type.
    """
    kind = GstCalculationType(calculation_type)

    if kind is GstCalculationType.EXCLUSIVE:
        gst_amount = amount * rate_percent / 100
        net_amount = amount
        total_amount = amount + gst_amount
    else:
        net_amount = amount * 100 / (100 + rate_percent)
        gst_amount = amount - net_amount
        total_amount = amount

    return {
        "netAmount": round_currency(net_amount),
        "gstAmount": round_currency(gst_amount),
        "totalAmount": round_currency(total_amount),
        "rate": rate_percent,
        "type": kind.value,
    }
