from decimal import Decimal

import pytest

from orders.models import APPROVED
from orders.services import place_trade_order
from quality.models import QualityParameter

pytestmark = pytest.mark.django_db


def _mk_params():
    QualityParameter.objects.create(commodity="Wheat", param_name="Moisture", unit="%", standard="12")
    QualityParameter.objects.create(commodity="Wheat", param_name="Damaged Grains", unit="%", standard="2")
    QualityParameter.objects.create(commodity="Maize", param_name="Aflatoxin", unit="ppb", standard="20")


def test_parameters_readable_by_customers(client_for, trader):
    _mk_params()
    res = client_for(trader).get("/api/quality/parameters/", {"commodity": "wheat"})
    assert res.status_code == 200
    assert [p["param_name"] for p in res.json()] == ["Damaged Grains", "Moisture"]


def test_parameters_write_is_admin_only(client_for, trader, admin_user):
    payload = {"commodity": "Wheat", "param_name": "Moisture", "unit": "%", "standard": "12"}
    assert client_for(trader).post("/api/quality/parameters/", payload, format="json").status_code == 403
    res = client_for(admin_user).post("/api/quality/parameters/", payload, format="json")
    assert res.status_code == 201
    assert res.json()["standard"] == "12"


def test_preview_does_not_save(client_for, admin_user, offer, trader):
    _mk_params()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    moisture = QualityParameter.objects.get(param_name="Moisture")
    res = client_for(admin_user).post(
        f"/api/orders/{order.id}/quality-deductions/preview/",
        {"measurements": [{"parameter_id": moisture.id, "measured_value": "12.6"}]},
        format="json",
    )
    assert res.status_code == 200, res.content
    body = res.json()
    assert Decimal(str(body["total_deduction"])) == Decimal("12500.00")
    assert Decimal(str(body["net_amount"])) == Decimal("237500.00")
    order.refresh_from_db()
    assert order.deduction_amount == Decimal("0")


def test_apply_and_list_deductions(client_for, admin_user, offer, trader):
    _mk_params()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    moisture = QualityParameter.objects.get(param_name="Moisture")
    client = client_for(admin_user)
    res = client.post(
        f"/api/orders/{order.id}/quality-deductions/",
        {"measurements": [{"parameter_id": moisture.id, "measured_value": "12.6"}]},
        format="json",
    )
    assert res.status_code == 201, res.content
    assert Decimal(str(res.json()["deduction_amount"])) == Decimal("12500.00")

    res = client.get(f"/api/orders/{order.id}/quality-deductions/")
    assert res.status_code == 200
    assert [row["param_name"] for row in res.json()["deductions"]] == ["Moisture"]


def test_mismatched_commodity_is_rejected(client_for, admin_user, offer, trader):
    _mk_params()
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    aflatoxin = QualityParameter.objects.get(param_name="Aflatoxin")
    res = client_for(admin_user).post(
        f"/api/orders/{order.id}/quality-deductions/",
        {"measurements": [{"parameter_id": aflatoxin.id, "measured_value": "25"}]},
        format="json",
    )
    assert res.status_code == 400


def test_customers_cannot_apply_deductions(client_for, trader, offer):
    order = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)
    res = client_for(trader).get(f"/api/orders/{order.id}/quality-deductions/")
    assert res.status_code == 403
