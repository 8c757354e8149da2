import datetime
import json
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from confirmed_orders.models import ConfirmedPurchaseOrder, ConfirmedSalesOrder

pytestmark = pytest.mark.django_db

SALES_URL = "/api/confirmed-sales-orders/"
PURCHASES_URL = "/api/confirmed-purchase-orders/"

CSV_HEADER = (
    "Date of Transaction,State,Seller Name,Location,Warehouse Name,Commodity,Variety,"
    "Vehicle No.,Net Weight in MT,Rate Per MT,Gross Amount,Deduction Amount Rs. (HLW)\n"
)
CSV_ROW = '05/03/24,Punjab,Ramesh,Khanna,WH-1,Wheat,HD-2967,PB10AB1234,25.5,"24,500","6,24,750.00",1500\n'


def _mk_sale(customer, **overrides):
    data = dict(
        customer=customer,
        invoice_number="INV-001",
        transaction_date=datetime.date(2024, 3, 5),
        commodity="wheat",
        vehicle_no="PB10AB1234",
        net_weight_mt=Decimal("10"),
        rate_per_mt=Decimal("24000"),
        gross_amount=Decimal("240000"),
        net_amount=Decimal("240000"),
    )
    data.update(overrides)
    return ConfirmedSalesOrder.objects.create(**data)


def _payload(**overrides):
    data = {
        "invoice_number": "INV-100",
        "transaction_date": "2024-03-05",
        "commodity": "Wheat",
        "variety": "Sharbati",
        "state": "Madhya Pradesh",
        "vehicle_no": "MP09GH4321",
        "net_weight_mt": "20",
        "rate_per_mt": "25000",
        "gross_amount": "500000",
        "deduction_amount_hlw": "1200",
        "deduction_amount_moi_bdoi": "800",
        "other_deductions": [{"amount": 500, "remarks": "Unloading"}],
    }
    data.update(overrides)
    return data


def _csv(body, name="gate.csv"):
    return SimpleUploadedFile(name, (CSV_HEADER + body).encode("utf-8"), content_type="text/csv")


# ---- CRUD ----
def test_create_by_customer_id_computes_totals(client_for, admin_user, farmer):
    res = client_for(admin_user).post(SALES_URL, _payload(customer_id=farmer.id), format="json")
    assert res.status_code == 201, res.content
    body = res.json()
    assert body["customer"]["id"] == farmer.id
    assert body["commodity"] == "WHEAT"
    assert body["state"] == "MADHYA PRADESH"
    assert Decimal(str(body["total_deduction"])) == Decimal("2500.00")
    assert Decimal(str(body["net_amount"])) == Decimal("497500.00")
    assert body["approval_status"] == "pending"
    assert body["unique_id"].startswith("SO-")


def test_create_by_seller_name(client_for, admin_user, trader):
    res = client_for(admin_user).post(SALES_URL, _payload(seller_name="Suresh"), format="json")
    assert res.status_code == 201, res.content
    assert res.json()["customer"]["id"] == trader.id


def test_create_needs_a_customer(client_for, admin_user):
    client = client_for(admin_user)
    assert client.post(SALES_URL, _payload(), format="json").status_code == 400
    res = client.post(SALES_URL, _payload(seller_name="Nobody"), format="json")
    assert res.status_code == 404


def test_duplicate_invoice_number_rejected(client_for, admin_user, farmer):
    _mk_sale(farmer, invoice_number="INV-100")
    res = client_for(admin_user).post(SALES_URL, _payload(customer_id=farmer.id), format="json")
    assert res.status_code == 400
    assert "invoice_number" in res.json()


def test_update_recomputes_totals(client_for, admin_user, farmer):
    order = _mk_sale(farmer)
    res = client_for(admin_user).patch(
        f"{SALES_URL}{order.id}/", {"deduction_amount_hlw": "1000"}, format="json",
    )
    assert res.status_code == 200, res.content
    order.refresh_from_db()
    assert order.total_deduction == Decimal("1000.00")
    assert order.net_amount == Decimal("239000.00")


def test_soft_delete_hides_row(client_for, admin_user, farmer):
    order = _mk_sale(farmer)
    client = client_for(admin_user)
    res = client.delete(f"{SALES_URL}{order.id}/")
    assert res.status_code == 200
    assert res.json()["detail"] == "Confirmed sales order deleted successfully"
    assert ConfirmedSalesOrder.objects.filter(pk=order.pk, is_trashed=True).exists()
    assert client.get(SALES_URL).json() == []
    assert client.get(f"{SALES_URL}{order.id}/").status_code == 404


def test_list_is_admin_only(client_for, farmer):
    assert client_for(farmer).get(SALES_URL).status_code == 403


def test_customer_sees_only_own_approved_sales(client_for, farmer, trader, super_admin):
    approved = _mk_sale(farmer, invoice_number="A", approval_status="approved", approved_by=super_admin)
    _mk_sale(farmer, invoice_number="B")
    client = client_for(farmer)

    res = client.get(f"{SALES_URL}customer/{farmer.id}/")
    assert res.status_code == 200
    assert [o["id"] for o in res.json()] == [approved.id]

    assert client.get(f"{SALES_URL}customer/{trader.id}/").status_code == 403
    pending = ConfirmedSalesOrder.objects.get(invoice_number="B")
    assert client.get(f"{SALES_URL}{pending.id}/").status_code == 404
    assert client.get(f"{SALES_URL}{approved.id}/").status_code == 200
    assert client_for(trader).get(f"{SALES_URL}{approved.id}/").status_code == 403


def test_admin_sees_all_customer_sales(client_for, admin_user, farmer):
    _mk_sale(farmer, invoice_number="A")
    _mk_sale(farmer, invoice_number="B")
    res = client_for(admin_user).get(f"{SALES_URL}customer/{farmer.id}/")
    assert len(res.json()) == 2


# ---- approval workflow ----
def test_super_admin_approves(client_for, super_admin, farmer):
    order = _mk_sale(farmer)
    res = client_for(super_admin).patch(f"{SALES_URL}{order.id}/approval/", {"status": "approved"}, format="json")
    assert res.status_code == 200, res.content
    order.refresh_from_db()
    assert order.approval_status == "approved"
    assert order.approved_by == super_admin
    assert order.approved_at is not None

    res = client_for(super_admin).patch(f"{SALES_URL}{order.id}/approval/", {"status": "declined", "reason": "x"}, format="json")
    assert res.status_code == 400
    assert "already decided" in res.json()["detail"]


def test_admin_cannot_approve(client_for, admin_user, farmer):
    order = _mk_sale(farmer)
    res = client_for(admin_user).patch(f"{SALES_URL}{order.id}/approval/", {"status": "approved"}, format="json")
    assert res.status_code == 403


def test_decline_requires_reason(client_for, super_admin, farmer):
    order = _mk_sale(farmer)
    client = client_for(super_admin)
    res = client.patch(f"{SALES_URL}{order.id}/approval/", {"status": "declined"}, format="json")
    assert res.status_code == 400
    assert res.json()["detail"] == "Decline reason is required"

    res = client.patch(f"{SALES_URL}{order.id}/approval/", {"status": "declined", "reason": " Rate mismatch "}, format="json")
    assert res.status_code == 200
    order.refresh_from_db()
    assert order.approval_status == "declined"
    assert order.declined_reason == "Rate mismatch"


def test_invalid_decision(client_for, super_admin, farmer):
    order = _mk_sale(farmer)
    res = client_for(super_admin).patch(f"{SALES_URL}{order.id}/approval/", {"status": "maybe"}, format="json")
    assert res.status_code == 400


def test_admin_cannot_touch_approved_order(client_for, admin_user, super_admin, farmer):
    order = _mk_sale(farmer, approval_status="approved", approved_by=super_admin)
    client = client_for(admin_user)
    assert client.patch(f"{SALES_URL}{order.id}/", {"remarks": "edit"}, format="json").status_code == 403
    assert client.delete(f"{SALES_URL}{order.id}/").status_code == 403


def test_super_admin_may_edit_approved_order(client_for, super_admin, farmer):
    order = _mk_sale(farmer, approval_status="approved", approved_by=super_admin)
    res = client_for(super_admin).patch(f"{SALES_URL}{order.id}/", {"remarks": "corrected"}, format="json")
    assert res.status_code == 200
    order.refresh_from_db()
    assert order.approval_status == "approved"


def test_admin_edit_resets_declined_order(client_for, admin_user, farmer):
    order = _mk_sale(farmer, approval_status="declined", declined_reason="Wrong rate")
    res = client_for(admin_user).patch(f"{SALES_URL}{order.id}/", {"rate_per_mt": "24500"}, format="json")
    assert res.status_code == 200, res.content
    order.refresh_from_db()
    assert order.approval_status == "pending"
    assert order.declined_reason == ""


def test_admin_cannot_smuggle_approval_through_edit(client_for, admin_user, farmer):
    order = _mk_sale(farmer)
    res = client_for(admin_user).patch(f"{SALES_URL}{order.id}/", {"approval_status": "approved"}, format="json")
    assert res.status_code == 403


# ---- purchases ----
def test_purchase_crud(client_for, admin_user, trader):
    client = client_for(admin_user)
    res = client.post(PURCHASES_URL, _payload(supplier_name="Suresh"), format="json")
    assert res.status_code == 201, res.content
    body = res.json()
    assert body["customer"]["id"] == trader.id
    assert body["commodity"] == "Wheat"
    assert "approval_status" not in body

    res = client.delete(f"{PURCHASES_URL}{body['id']}/")
    assert res.json()["detail"] == "Confirmed purchase order deleted successfully"
    assert ConfirmedPurchaseOrder.objects.get().is_trashed


def test_purchase_customer_view(client_for, trader, admin_user):
    client_for(admin_user).post(PURCHASES_URL, _payload(customer_id=trader.id), format="json")
    res = client_for(trader).get(f"{PURCHASES_URL}customer/{trader.id}/")
    assert res.status_code == 200
    assert len(res.json()) == 1


# ---- bulk upload ----
def test_preview(client_for, admin_user):
    res = client_for(admin_user).post(
        f"{SALES_URL}bulk-upload/preview/", {"file": _csv(CSV_ROW * 7)}, format="multipart",
    )
    assert res.status_code == 200, res.content
    body = res.json()
    assert body["totalRows"] == 7
    assert len(body["previewRows"]) == 5
    assert body["columns"][0] == "Date of Transaction"
    assert body["suggestedMapping"]["seller_name"] == "Seller Name"
    assert {"key": "seller_name", "label": "Seller Name", "required": True} in body["fields"]


def test_upload_requires_file_and_known_format(client_for, admin_user):
    client = client_for(admin_user)
    assert client.post(f"{SALES_URL}bulk-upload/", {}, format="multipart").status_code == 400
    bad = SimpleUploadedFile("gate.pdf", b"%PDF", content_type="application/pdf")
    res = client.post(f"{SALES_URL}bulk-upload/", {"file": bad}, format="multipart")
    assert res.status_code == 400
    assert "Unsupported" in res.json()["detail"]
    res = client.post(f"{SALES_URL}bulk-upload/", {"file": _csv("")}, format="multipart")
    assert res.status_code == 400
    assert res.json()["detail"] == "File is empty or invalid"


def test_upload_is_admin_only(client_for, farmer):
    res = client_for(farmer).post(f"{SALES_URL}bulk-upload/", {"file": _csv(CSV_ROW)}, format="multipart")
    assert res.status_code == 403


def test_upload_with_duplicate_choice(client_for, admin_user, farmer):
    client = client_for(admin_user)
    res = client.post(f"{SALES_URL}bulk-upload/", {"file": _csv(CSV_ROW * 3)}, format="multipart")
    assert res.status_code == 200
    body = res.json()
    assert body["requiresDuplicateChoice"] is True
    assert body["duplicateRowNumbers"] == [3, 4]
    assert ConfirmedSalesOrder.objects.count() == 0

    res = client.post(
        f"{SALES_URL}bulk-upload/",
        {"file": _csv(CSV_ROW * 3), "skipDuplicates": "true"},
        format="multipart",
    )
    body = res.json()
    assert body["success"] is True
    assert body["count"] == 1
    assert body["duplicateSkipped"] == 2
    assert len(body["orders"]) == 1
    assert body["orders"][0]["customer"]["id"] == farmer.id


def test_upload_with_column_mapping(client_for, admin_user, farmer, trader):
    header = "Txn Date,Party,Item,Truck,Qty MT,Rate,Value\n"
    body = "2024-03-05,Suresh,Maize,MP09AA1111,12,\"18,000\",\"2,16,000\"\n"
    upload = SimpleUploadedFile("custom.csv", (header + body).encode("utf-8"), content_type="text/csv")
    mapping = {
        "transaction_date": "Txn Date", "supplier_name": "Party", "commodity": "Item", "vehicle_no": "Truck",
        "net_weight_mt": "Qty MT", "rate_per_mt": "Rate", "gross_amount": "Value",
    }
    res = client_for(admin_user).post(
        f"{PURCHASES_URL}bulk-upload/",
        {"file": upload, "columnMapping": json.dumps(mapping), "skipDuplicates": "false"},
        format="multipart",
    )
    assert res.status_code == 200, res.content
    order = ConfirmedPurchaseOrder.objects.get()
    assert order.customer == trader
    assert order.commodity == "Maize"
    assert order.gross_amount == Decimal("216000.00")
    assert order.net_amount == Decimal("216000.00")
    assert order.transaction_date == datetime.date(2024, 3, 5)


@pytest.mark.parametrize("mapping", ["", "{not json", "[1, 2]"])
def test_unreadable_column_mapping_falls_back_to_headers(client_for, admin_user, farmer, mapping):
    res = client_for(admin_user).post(
        f"{SALES_URL}bulk-upload/",
        {"file": _csv(CSV_ROW), "columnMapping": mapping},
        format="multipart",
    )
    assert res.status_code == 200, res.content
    assert res.json()["count"] == 1
    order = ConfirmedSalesOrder.objects.get()
    assert order.customer == farmer
    assert order.vehicle_no == "PB10AB1234"
