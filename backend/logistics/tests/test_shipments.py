from decimal import Decimal

import pytest
from django.utils import timezone

from logistics.models import LogisticsShipment
from orders.models import APPROVED
from orders.services import place_trade_order

pytestmark = pytest.mark.django_db

URL = "/api/logistics-shipments/"


@pytest.fixture
def order(offer, trader):
    return place_trade_order(offer=offer, buyer=trader, quantity=Decimal("10"), status=APPROVED)


def _payload(order, **overrides):
    data = {
        "order_id": order.id,
        "transporter_name": "Malwa Roadlines",
        "vehicle_number": "mp09 hh 4521",
        "driver_name": "Raju",
        "driver_contact": "9826012345",
        "pickup_location": "Indore Mandi",
        "delivery_location": "Bhopal Warehouse",
        "pickup_date": "2024-03-01",
        "expected_delivery_date": "2024-03-03",
    }
    data.update(overrides)
    return data


def _mk_shipment(order, **extra):
    return LogisticsShipment.objects.create(
        order=order, pickup_location="Indore Mandi", delivery_location="Bhopal Warehouse", **extra,
    )


def test_admin_books_shipment(client_for, admin_user, order):
    res = client_for(admin_user).post(URL, _payload(order), format="json")
    assert res.status_code == 201, res.content
    body = res.json()
    assert body["order_id"] == order.id
    assert body["status"] == LogisticsShipment.PENDING
    assert body["vehicle_number"] == "MP09HH4521"
    assert body["tracking_updates"] == []
    assert order.shipments.count() == 1


def test_shipment_requires_known_order_and_route(client_for, admin_user, order):
    client = client_for(admin_user)
    res = client.post(URL, _payload(order, order_id=99999), format="json")
    assert res.status_code == 400
    assert "order_id" in res.json()

    data = _payload(order)
    del data["pickup_location"]
    res = client.post(URL, data, format="json")
    assert res.status_code == 400
    assert "pickup_location" in res.json()


def test_expected_delivery_cannot_precede_pickup(client_for, admin_user, order):
    res = client_for(admin_user).post(
        URL, _payload(order, pickup_date="2024-03-05", expected_delivery_date="2024-03-03"), format="json",
    )
    assert res.status_code == 400
    assert "expected_delivery_date" in res.json()


def test_marking_delivered_fills_delivery_date(client_for, admin_user, order):
    shipment = _mk_shipment(order, status=LogisticsShipment.IN_TRANSIT)
    res = client_for(admin_user).patch(
        f"{URL}{shipment.id}/",
        {"status": LogisticsShipment.DELIVERED, "tracking_updates": [{"note": "Unloaded at Bhopal"}]},
        format="json",
    )
    assert res.status_code == 200, res.content
    shipment.refresh_from_db()
    assert shipment.status == LogisticsShipment.DELIVERED
    assert shipment.actual_delivery_date == timezone.localdate()
    assert shipment.tracking_updates == [{"note": "Unloaded at Bhopal"}]


def test_list_filters(client_for, admin_user, order, offer, trader):
    other = place_trade_order(offer=offer, buyer=trader, quantity=Decimal("5"), status=APPROVED)
    first = _mk_shipment(order)
    second = _mk_shipment(order, status=LogisticsShipment.IN_TRANSIT)
    third = _mk_shipment(other)
    client = client_for(admin_user)

    def ids(params):
        return [s["id"] for s in client.get(URL, params).json()]

    assert ids({}) == [third.id, second.id, first.id]
    assert ids({"order_id": order.id}) == [second.id, first.id]
    assert ids({"status": "in_transit"}) == [second.id]

    res = client.get(URL, {"order_id": "abc"})
    assert res.status_code == 400
    assert res.json() == {"detail": "order_id must be a number"}


def test_parties_read_their_shipments_only(client_for, order, trader, farmer, unverified_trader):
    shipment = _mk_shipment(order)

    for party in (trader, farmer):
        res = client_for(party).get(URL)
        assert [s["id"] for s in res.json()] == [shipment.id]

    outsider = client_for(unverified_trader)
    assert outsider.get(URL).json() == []
    assert outsider.get(f"{URL}{shipment.id}/").status_code == 404


def test_customers_cannot_write_shipments(client_for, trader, order):
    shipment = _mk_shipment(order)
    client = client_for(trader)
    assert client.post(URL, _payload(order), format="json").status_code == 403
    assert client.patch(f"{URL}{shipment.id}/", {"status": "delivered"}, format="json").status_code == 403
    assert client.delete(f"{URL}{shipment.id}/").status_code == 403


def test_admin_deletes_shipment(client_for, admin_user, order):
    shipment = _mk_shipment(order)
    res = client_for(admin_user).delete(f"{URL}{shipment.id}/")
    assert res.status_code == 200
    assert res.json() == {"detail": "Logistics shipment deleted successfully"}
    assert not LogisticsShipment.objects.filter(pk=shipment.pk).exists()
