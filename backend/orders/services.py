"""
Trade order lifecycle.

Orders move through review the same way the console's review screen presents
them: a pending order is approved or rejected, an approved order may wait on
logistics, and finalizing records the quality deduction and completes it.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, FrozenSet, Optional

from django.db import transaction

from core.units import gross_amount, to_metric_tons
from core.utils import ZERO, d, q2, q3

from .models import (
    APPROVED,
    AWAITING_LOGISTICS,
    COMPLETED,
    PENDING_APPROVAL,
    REJECTED,
    Order,
)

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PENDING_APPROVAL: frozenset({APPROVED, REJECTED}),
    APPROVED: frozenset({AWAITING_LOGISTICS, COMPLETED, REJECTED}),
    AWAITING_LOGISTICS: frozenset({COMPLETED, REJECTED}),
    COMPLETED: frozenset(),
    REJECTED: frozenset(),
}

FINALIZABLE = frozenset({APPROVED, AWAITING_LOGISTICS})


class OrderError(Exception):
    """Base exception for trade order rule violations"""
    pass


class StatusTransitionError(OrderError):
    """Raised when a status change skips or reverses the review flow"""
    pass


class TradeValidationError(OrderError):
    """Raised when a trade does not fit the offer it is placed against"""
    pass


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def change_status(order: Order, target: str) -> Order:
    if target not in ALLOWED_TRANSITIONS:
        raise StatusTransitionError(f"Unknown status '{target}'")
    if target == order.status:
        return order
    if not can_transition(order.status, target):
        raise StatusTransitionError(f"Cannot move order from '{order.status}' to '{target}'")
    previous = order.status
    order.status = target
    order.save(update_fields=['status', 'updated_at'])
    logger.info("Order %s status %s -> %s", order.pk, previous, target)
    return order


def validate_deduction(order_gross: Decimal, deduction) -> Decimal:
    amount = d(deduction)
    if amount < 0:
        raise TradeValidationError("Deduction amount cannot be negative")
    if amount > order_gross:
        raise TradeValidationError(
            f"Deduction amount ({amount}) cannot exceed gross amount ({order_gross})"
        )
    return amount


def finalize_order(order: Order, deduction_amount) -> Order:
    """Record the final deduction and complete the order."""
    if order.status not in FINALIZABLE:
        raise StatusTransitionError(f"Only approved orders can be finalized (current status: '{order.status}')")
    order.deduction_amount = validate_deduction(order.gross_amount, deduction_amount or ZERO)
    order.status = COMPLETED
    order.save(update_fields=['deduction_amount', 'status', 'updated_at'])
    logger.info(
        "Order %s finalized: gross=%s deduction=%s net=%s",
        order.pk, order.gross_amount, order.deduction_amount, order.net_amount,
    )
    return order


def assign_logistics(order: Order, provider) -> Order:
    if order.is_final:
        raise StatusTransitionError(f"Cannot assign logistics to a {order.status.lower()} order")
    if not provider.is_active:
        raise TradeValidationError(f"Logistics provider '{provider.company_name}' is inactive")
    order.logistics_provider = provider
    fields = ['logistics_provider', 'updated_at']
    if order.status == APPROVED:
        order.status = AWAITING_LOGISTICS
        fields.append('status')
    order.save(update_fields=fields)
    logger.info("Order %s assigned to logistics provider %s", order.pk, provider.pk)
    return order


def check_trade_against_offer(offer, quantity_mt: Decimal, price_per_quintal: Decimal) -> None:
    if offer.status != 'Active':
        raise TradeValidationError(f"Offer is not active (status: {offer.status})")
    if quantity_mt <= 0:
        raise TradeValidationError("Quantity must be greater than zero")
    if price_per_quintal <= 0:
        raise TradeValidationError("Price per quintal must be greater than zero")
    if quantity_mt > offer.quantity_mt:
        raise TradeValidationError(
            f"Quantity cannot exceed available offer quantity ({offer.quantity_mt} MT)"
        )
    if offer.min_trade_quantity_mt and quantity_mt < offer.min_trade_quantity_mt:
        raise TradeValidationError(
            f"Quantity is below the offer's minimum trade quantity ({offer.min_trade_quantity_mt} MT)"
        )


@transaction.atomic
def place_trade_order(
    *,
    offer,
    buyer,
    quantity,
    quantity_unit: Optional[str] = None,
    price_per_quintal=None,
    status: str = PENDING_APPROVAL,
    deduction_amount=None,
    created_by=None,
) -> Order:
    """Create a trade order against an offer after checking it fits the offer."""
    # Checks run on the values as stored: MT to 3 places, price to 2
    quantity_mt = q3(to_metric_tons(quantity, quantity_unit))
    price = q2(price_per_quintal) if price_per_quintal not in (None, "") else offer.price_per_quintal
    check_trade_against_offer(offer, quantity_mt, price)
    if status not in ALLOWED_TRANSITIONS:
        raise StatusTransitionError(f"Unknown status '{status}'")
    deduction = validate_deduction(gross_amount(quantity_mt, price), deduction_amount or ZERO)

    order = Order.objects.create(
        offer=offer,
        buyer=buyer,
        quantity_mt=quantity_mt,
        final_price_per_quintal=price,
        status=status,
        deduction_amount=deduction,
        sauda_confirmation_date=offer.sauda_confirmation_date,
        created_by=created_by,
    )
    logger.info(
        "Trade order %s placed: offer=%s buyer=%s qty=%s MT price=%s/qtl",
        order.pk, offer.pk, buyer.pk, quantity_mt, price,
    )
    return order
