"""
Quantity units and trade arithmetic for agricultural commodities.

Standard conversions:
  - 1 MT (metric ton) = 10 Quintal = 1000 KG
  - 1 Quintal = 100 KG = 0.1 MT

Prices on the platform are quoted per quintal while quantities are held in MT,
so every amount goes through ``quintals()`` before it meets a price.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Dict

from .utils import ZERO, d, q2

QUINTALS_PER_MT = Decimal("10")
KG_PER_MT = Decimal("1000")

MT = "MT"
QUINTAL = "Quintal"
KG = "KG"

_PER_MT: Dict[str, Decimal] = {
    MT: Decimal("1"),
    QUINTAL: QUINTALS_PER_MT,
    KG: KG_PER_MT,
}

UNIT_CHOICES = tuple(_PER_MT.keys())


class UnitError(ValueError):
    """Raised for unknown quantity units."""
    pass


def normalize_unit(unit: str | None) -> str:
    if not unit:
        return MT
    key = str(unit).strip().lower()
    for known in _PER_MT:
        if known.lower() == key:
            return known
    if key in {"mt", "ton", "tons", "tonne", "tonnes"}:
        return MT
    if key in {"qtl", "quintals"}:
        return QUINTAL
    if key in {"kg", "kgs"}:
        return KG
    raise UnitError(f"Unknown quantity unit '{unit}'. Use one of: {', '.join(UNIT_CHOICES)}")


def convert_unit(quantity, from_unit: str, to_unit: str) -> Decimal:
    from_unit = normalize_unit(from_unit)
    to_unit = normalize_unit(to_unit)
    qty = d(quantity)
    if from_unit == to_unit:
        return qty
    in_mt = qty / _PER_MT[from_unit]
    return in_mt * _PER_MT[to_unit]


def to_metric_tons(quantity, unit: str | None = MT) -> Decimal:
    return convert_unit(quantity, unit or MT, MT)


def to_all_units(quantity, unit: str = MT) -> Dict[str, Decimal]:
    in_mt = to_metric_tons(quantity, unit)
    return {u: in_mt * factor for u, factor in _PER_MT.items()}


def quintals(quantity_mt) -> Decimal:
    return d(quantity_mt) * QUINTALS_PER_MT


def gross_amount(quantity_mt, price_per_quintal) -> Decimal:
    """Gross value of a trade: quantity in quintals times the per-quintal price."""
    return q2(quintals(quantity_mt) * d(price_per_quintal))


def net_amount(gross, deduction) -> Decimal:
    return q2(d(gross) - d(deduction or ZERO))
