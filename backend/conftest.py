from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient


def _mk_user(username, role, **extra):
    User = get_user_model()
    extra.setdefault("name", username.replace("_", " ").title())
    return User.objects.create_user(username=username, password="pass12345", role=role, **extra)


@pytest.fixture
def super_admin(db):
    return _mk_user("root_admin", "super_admin")


@pytest.fixture
def admin_user(db):
    return _mk_user("desk_admin", "admin")


@pytest.fixture
def farmer(db):
    return _mk_user("ramesh", "farmer", mobile_number="9876500001", kyc_status="verified")


@pytest.fixture
def trader(db):
    return _mk_user("suresh", "trader", mobile_number="9876500002", kyc_status="verified")


@pytest.fixture
def unverified_trader(db):
    return _mk_user("mahesh", "trader", mobile_number="9876500003")


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def offer(farmer):
    from offers.models import Offer
    return Offer.objects.create(
        seller=farmer,
        commodity="Wheat",
        variety="Sharbati",
        quantity_mt=Decimal("50.000"),
        price_per_quintal=Decimal("2500.00"),
        location="Indore",
        delivery_location="Indore Mandi",
        min_trade_quantity_mt=Decimal("5.000"),
    )
