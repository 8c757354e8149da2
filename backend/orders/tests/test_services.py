from decimal import Decimal

import pytest

from orders.models import (
    APPROVED,
    AWAITING_LOGISTICS,
    COMPLETED,
    PENDING_APPROVAL,
    REJECTED,
)
from orders.services import (
    StatusTransitionError,
    TradeValidationError,
    assign_logistics,
    can_transition,
    change_status,
    finalize_order,
    place_trade_order,
)

pytestmark = pytest.mark.django_db


def _mk_provider(**overrides):
    from logistics.models import LogisticsProvider
    data = dict(
        company_name="Malwa Roadlines",
        contact_person="Vijay",
        mobile_number="9812345678",
        pickup_city="Indore",
        delivery_city="Bhopal",
        address="Transport Nagar, Indore",
    )
    data.update(overrides)
    return LogisticsProvider.objects.create(**data)


def test_transition_table():
    assert can_transition(PENDING_APPROVAL, APPROVED)
    assert can_transition(PENDING_APPROVAL, REJECTED)
    assert not can_transition(PENDING_APPROVAL, COMPLETED)
    assert can_transition(APPROVED, AWAITING_LOGISTICS)
    assert can_transition(AWAITING_LOGISTICS, COMPLETED)
    assert not can_transition(COMPLETED, APPROVED)
    assert not can_transition(REJECTED, PENDING_APPROVAL)


def test_place_trade_order_defaults_to_offer_price(offer, trader):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"))
    assert order.status == PENDING_APPROVAL
    assert order.final_price_per_quintal == Decimal("2500.00")
    assert order.gross_amount == Decimal("250000.00")
    assert order.net_amount == Decimal("250000.00")
    assert order.quantity_quintals == Decimal("100")


def test_place_trade_order_converts_units(offer, trader):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("80"), quantity_unit="Quintal")
    assert order.quantity_mt == Decimal("8")

    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("6000"), quantity_unit="KG")
    assert order.quantity_mt == Decimal("6")


def test_place_trade_order_copies_sauda_date(offer, trader):
    import datetime
    offer.sauda_confirmation_date = datetime.date(2024, 3, 1)
    offer.save()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"))
    assert order.sauda_confirmation_date == datetime.date(2024, 3, 1)


@pytest.mark.parametrize("quantity,price,message", [
    (Decimal("0"), None, "greater than zero"),
    (Decimal("60"), None, "exceed available"),
    (Decimal("2"), None, "minimum trade quantity"),
    (Decimal("10"), Decimal("0"), "Price per quintal"),
])
def test_place_trade_order_rejects_bad_trades(offer, trader, quantity, price, message):
    with pytest.raises(TradeValidationError, match=message):
        place_trade_order(offer=offer, buyer=trader, quantity=quantity, price_per_quintal=price)


def test_place_trade_order_rejects_kg_quantity_that_rounds_to_zero(offer, trader):
    offer.min_trade_quantity_mt = Decimal("0")
    offer.save()
    with pytest.raises(TradeValidationError, match="greater than zero"):
        place_trade_order(offer=offer, buyer=trader, quantity=Decimal("0.4"), quantity_unit="KG")
    assert not offer.orders.exists()


def test_place_trade_order_checks_the_stored_quantity(offer, trader):
    offer.min_trade_quantity_mt = Decimal("0")
    offer.save()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("5500.4"), quantity_unit="KG")
    order.refresh_from_db()
    assert order.quantity_mt == Decimal("5.500")
    assert order.gross_amount == Decimal("137500.00")

    with pytest.raises(TradeValidationError, match="Price per quintal"):
        place_trade_order(offer=offer, buyer=trader, quantity=Decimal("1"), price_per_quintal=Decimal("0.004"))


def test_place_trade_order_rejects_inactive_offer(offer, trader):
    offer.status = "Sold"
    offer.save()
    with pytest.raises(TradeValidationError, match="not active"):
        place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"))


def test_place_trade_order_deduction_cannot_exceed_gross(offer, trader):
    with pytest.raises(TradeValidationError, match="cannot exceed"):
        place_trade_order(
            offer=offer, buyer=trader, quantity=Decimal("10"), deduction_amount=Decimal("250000.01"),
        )


def test_change_status_rejects_skipping_review(offer, trader):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"))
    with pytest.raises(StatusTransitionError):
        change_status(order, COMPLETED)
    change_status(order, APPROVED)
    order.refresh_from_db()
    assert order.status == APPROVED


def test_finalize_requires_approval(offer, trader):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"))
    with pytest.raises(StatusTransitionError):
        finalize_order(order, Decimal("100"))

    change_status(order, APPROVED)
    finalize_order(order, Decimal("1500.50"))
    order.refresh_from_db()
    assert order.status == COMPLETED
    assert order.deduction_amount == Decimal("1500.50")
    assert order.net_amount == Decimal("248499.50")


def test_finalize_rejects_negative_deduction(offer, trader):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    with pytest.raises(TradeValidationError, match="negative"):
        finalize_order(order, Decimal("-1"))


def test_assign_logistics_moves_approved_order(offer, trader):
    provider = _mk_provider()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    assign_logistics(order, provider)
    order.refresh_from_db()
    assert order.status == AWAITING_LOGISTICS
    assert order.logistics_provider_id == provider.pk


def test_assign_logistics_rejects_inactive_provider(offer, trader):
    provider = _mk_provider(is_active=False)
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    with pytest.raises(TradeValidationError, match="inactive"):
        assign_logistics(order, provider)
