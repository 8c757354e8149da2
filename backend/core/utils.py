from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

TWOPLACES = Decimal("0.01")
THREEPLACES = Decimal("0.001")
FOURPLACES = Decimal("0.0001")
ZERO = Decimal("0")


def d(val) -> Decimal:
    """Coerce incoming values to Decimal safely."""
    if isinstance(val, Decimal):
        return val
    if val is None or val == "":
        return ZERO
    try:
        return Decimal(str(val))
    except InvalidOperation:
        raise ValueError(f"Not a number: {val!r}")


def q2(val) -> Decimal:
    """Money rounding: two places, half-up."""
    return d(val).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def q3(val) -> Decimal:
    """Quantity rounding: three places (MT to the kilogram), half-up."""
    return d(val).quantize(THREEPLACES, rounding=ROUND_HALF_UP)


def q4(val) -> Decimal:
    return d(val).quantize(FOURPLACES, rounding=ROUND_HALF_UP)
