import datetime
from decimal import Decimal

import pytest

from confirmed_orders.models import ConfirmedPurchaseOrder, ConfirmedSalesOrder
from orders.models import PurchaseOrder, SaleOrder

pytestmark = pytest.mark.django_db

URL = "/api/admin/stats/"


def _mk_confirmed(model, customer, invoice, net, **extra):
    return model.objects.create(
        customer=customer,
        invoice_number=invoice,
        transaction_date=datetime.date(2024, 3, 5),
        commodity="Wheat",
        vehicle_no="PB10AB1234",
        net_weight_mt=Decimal("10"),
        rate_per_mt=Decimal("24000"),
        gross_amount=Decimal(net),
        net_amount=Decimal(net),
        **extra,
    )


def test_stats_count_users_and_orders(client_for, admin_user, farmer, trader, unverified_trader):
    PurchaseOrder.objects.create(
        buyer=trader, commodity="Maize", quantity_mt=Decimal("20"), delivery_location="Indore",
    )
    SaleOrder.objects.create(
        seller=farmer, commodity="Wheat", quantity_mt=Decimal("5"),
        price_per_quintal=Decimal("2400"), delivery_location="Indore",
    )
    _mk_confirmed(ConfirmedSalesOrder, farmer, "S-1", "100000.50")
    _mk_confirmed(ConfirmedSalesOrder, farmer, "S-2", "50000")
    _mk_confirmed(ConfirmedSalesOrder, farmer, "S-3", "99999", is_trashed=True)
    _mk_confirmed(ConfirmedPurchaseOrder, trader, "P-1", "75000")

    res = client_for(admin_user).get(URL)
    assert res.status_code == 200
    body = res.json()
    assert body["total_users"] == 4
    assert body["farmers"] == 1
    assert body["traders"] == 2
    assert body["kyc_verified"] == 2
    assert body["purchase_orders"] == 1
    assert body["sale_orders"] == 1
    assert body["confirmed_sales_orders"] == 2
    assert Decimal(str(body["confirmed_sales_net_amount"])) == Decimal("150000.50")
    assert body["confirmed_purchase_orders"] == 1
    assert Decimal(str(body["confirmed_purchase_net_amount"])) == Decimal("75000")


def test_stats_on_empty_db(client_for, admin_user):
    body = client_for(admin_user).get(URL).json()
    assert body["confirmed_sales_orders"] == 0
    assert body["confirmed_sales_net_amount"] == 0


def test_stats_are_console_only(client_for, farmer):
    assert client_for(farmer).get(URL).status_code == 403
