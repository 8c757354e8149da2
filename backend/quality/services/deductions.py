"""
Quality-based price deductions

A lab measurement that deviates from a commodity's standard reduces what the
buyer pays. The deduction percentage is the relative deviation from the
standard, and the amount is that percentage of the order value.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction

from core.units import gross_amount, quintals
from core.utils import ZERO, d, q2, q4
from orders.models import APPROVED, AWAITING_LOGISTICS
from orders.services import validate_deduction, OrderError

from ..models import QualityDeduction, QualityParameter

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
DEDUCTIBLE_STATUSES = frozenset({APPROVED, AWAITING_LOGISTICS})

_NUMBER_RE = re.compile(r"\d*\.?\d+")


class DeductionError(Exception):
    """Base exception for quality deduction errors"""
    pass


class InvalidStandardError(DeductionError):
    """Raised when a parameter's standard carries no usable reference value"""
    pass


@dataclass
class DeductionLine:
    parameter: QualityParameter
    measured_value: Decimal
    standard_value: Decimal
    deduction_percentage: Decimal
    deduction_amount: Decimal

    def as_dict(self) -> Dict[str, Any]:
        return {
            "parameter_id": self.parameter.pk,
            "param_name": self.parameter.param_name,
            "unit": self.parameter.unit,
            "standard": self.parameter.standard,
            "measured_value": self.measured_value,
            "standard_value": self.standard_value,
            "deduction_percentage": self.deduction_percentage,
            "deduction_amount": self.deduction_amount,
        }


def parse_standard_value(standard: str) -> Decimal:
    """
    Reference value of a standard string.

    Ranges ("16-17", "6%-8%") resolve to their lower bound.

    Raises:
        InvalidStandardError: no number present, or the value is zero
    """
    match = _NUMBER_RE.search(str(standard or ""))
    if not match:
        raise InvalidStandardError(f"Standard '{standard}' has no numeric value")
    value = Decimal(match.group(0))
    if value == 0:
        raise InvalidStandardError(f"Standard '{standard}' resolves to zero")
    return value


def deviation_percentage(standard_value, measured) -> Decimal:
    standard_value = d(standard_value)
    if standard_value == 0:
        raise InvalidStandardError("Standard value cannot be zero")
    return q4(abs(d(measured) - standard_value) / standard_value * HUNDRED)


def deduction_amount(price_per_quintal, quantity_mt, percentage) -> Decimal:
    """price x quantity in quintals x percentage / 100, to the paisa."""
    return q2(d(price_per_quintal) * quintals(quantity_mt) * d(percentage) / HUNDRED)


def compute_quality_deductions(order, measurements: Iterable[Dict[str, Any]]) -> List[DeductionLine]:
    """
    Price each measurement against the order without saving anything.

    Args:
        order: trade order being graded
        measurements: dicts with ``parameter_id``, ``measured_value`` and an
            optional ``deduction_percentage`` override

    Returns:
        One line per measurement with a non-zero percentage.

    Raises:
        DeductionError: unknown parameter, commodity mismatch, bad override
            or a total above the order's gross amount
    """
    measurements = list(measurements)
    param_ids = [m.get("parameter_id") for m in measurements]
    params = QualityParameter.objects.in_bulk([p for p in param_ids if p is not None])
    commodity = order.offer.commodity.strip().lower()

    lines: List[DeductionLine] = []
    for m in measurements:
        param = params.get(m.get("parameter_id"))
        if param is None:
            raise DeductionError(f"Quality parameter {m.get('parameter_id')} not found")
        if param.commodity.strip().lower() != commodity:
            raise DeductionError(
                f"Parameter '{param.param_name}' belongs to {param.commodity}, not {order.offer.commodity}"
            )

        measured = d(m.get("measured_value"))
        standard_value = parse_standard_value(param.standard)
        override: Optional[Any] = m.get("deduction_percentage")
        if override is not None and override != "":
            pct = q4(d(override))
            if pct < 0 or pct > HUNDRED:
                raise DeductionError(f"Deduction percentage for '{param.param_name}' must be between 0 and 100")
        else:
            pct = deviation_percentage(standard_value, measured)

        if pct == 0:
            continue
        lines.append(DeductionLine(
            parameter=param,
            measured_value=measured,
            standard_value=standard_value,
            deduction_percentage=pct,
            deduction_amount=deduction_amount(order.final_price_per_quintal, order.quantity_mt, pct),
        ))

    total = sum((line.deduction_amount for line in lines), ZERO)
    gross = gross_amount(order.quantity_mt, order.final_price_per_quintal)
    if total > gross:
        raise DeductionError(f"Total deduction ({total}) cannot exceed gross amount ({gross})")
    return lines


def summarize(order, lines: List[DeductionLine]) -> Dict[str, Any]:
    total = q2(sum((line.deduction_amount for line in lines), ZERO))
    gross = gross_amount(order.quantity_mt, order.final_price_per_quintal)
    return {
        "order_id": order.pk,
        "gross_amount": gross,
        "total_deduction": total,
        "net_amount": q2(gross - total),
        "deductions": [line.as_dict() for line in lines],
    }


@transaction.atomic
def apply_quality_deductions(order, measurements: Iterable[Dict[str, Any]], user=None) -> List[QualityDeduction]:
    """
    Replace the order's quality deductions and set its deduction amount to their total.
    """
    if order.status not in DEDUCTIBLE_STATUSES:
        raise DeductionError(
            f"Quality deductions can only be applied to approved orders (current status: '{order.status}')"
        )
    lines = compute_quality_deductions(order, measurements)
    total = sum((line.deduction_amount for line in lines), ZERO)
    try:
        total = validate_deduction(order.gross_amount, total)
    except OrderError as e:
        raise DeductionError(str(e)) from e

    order.quality_deductions.all().delete()
    rows = QualityDeduction.objects.bulk_create([
        QualityDeduction(
            order=order,
            parameter=line.parameter,
            measured_value=line.measured_value,
            standard_value=line.standard_value,
            deduction_percentage=line.deduction_percentage,
            deduction_amount=line.deduction_amount,
            created_by=user,
        )
        for line in lines
    ])
    order.deduction_amount = total
    order.save(update_fields=["deduction_amount", "updated_at"])
    logger.info(
        "Applied %d quality deductions to order %s: total=%s net=%s",
        len(rows), order.pk, total, order.net_amount,
    )
    return rows
