from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Tuple

from core.utils import ZERO, d, q2

# Inputs that feed total_deduction / net_amount
TOTAL_INPUTS = ('gross_amount', 'deduction_amount_hlw', 'deduction_amount_moi_bdoi', 'other_deductions')


def clean_other_deductions(items: Iterable[Dict[str, Any]] | None) -> List[Dict[str, Any]]:
    """Normalize ``[{amount, remarks}]``; amounts become two-place floats for JSON storage."""
    cleaned = []
    for item in items or []:
        if not isinstance(item, dict):
            raise ValueError("Each other deduction must be an object with amount and remarks")
        amount = q2(d(item.get('amount')))
        cleaned.append({'amount': float(amount), 'remarks': str(item.get('remarks') or '').strip()})
    return cleaned


def other_deductions_total(items: Iterable[Dict[str, Any]] | None) -> Decimal:
    return sum((d(item.get('amount')) for item in items or []), ZERO)


def compute_totals(
    gross_amount,
    deduction_amount_hlw=None,
    deduction_amount_moi_bdoi=None,
    other_deductions=None,
) -> Tuple[Decimal, Decimal]:
    """
    Returns ``(total_deduction, net_amount)``.

    total_deduction = HLW deduction + MOI/BDOI deduction + sum of other deductions
    net_amount = gross_amount - total_deduction
    """
    total = q2(d(deduction_amount_hlw) + d(deduction_amount_moi_bdoi) + other_deductions_total(other_deductions))
    return total, q2(d(gross_amount) - total)


def apply_totals(order) -> None:
    order.total_deduction, order.net_amount = compute_totals(
        order.gross_amount,
        order.deduction_amount_hlw,
        order.deduction_amount_moi_bdoi,
        order.other_deductions,
    )
