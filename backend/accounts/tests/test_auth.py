import pytest
from django.core.management import call_command
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from accounts.models import CustomUser

pytestmark = pytest.mark.django_db


def _register_payload(**overrides):
    data = {
        "username": "kisan1",
        "password": "secret123",
        "name": "Kisan One",
        "mobile_number": "9812345678",
        "role": "farmer",
        "state": "Punjab",
    }
    data.update(overrides)
    return data


def test_login_returns_token_and_role(farmer):
    res = APIClient().post("/api/auth/login/", {"username": "ramesh", "password": "pass12345"}, format="json")
    assert res.status_code == 200
    body = res.json()
    assert body["role"] == "farmer"
    assert body["name"] == "Ramesh"
    assert body["token"] == Token.objects.get(user=farmer).key


def test_login_errors(farmer):
    client = APIClient()
    assert client.post("/api/auth/login/", {"username": "ramesh"}, format="json").status_code == 400
    res = client.post("/api/auth/login/", {"username": "ramesh", "password": "nope"}, format="json")
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


def test_bearer_token_authenticates(farmer):
    token = Token.objects.create(user=farmer)
    client = APIClient()
    assert client.get("/api/orders/").status_code in (401, 403)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
    assert client.get("/api/orders/").status_code == 200


def test_register_customer():
    res = APIClient().post("/api/auth/register/", _register_payload(), format="json")
    assert res.status_code == 201, res.content
    user = CustomUser.objects.get(username="kisan1")
    assert user.role == "farmer"
    assert user.check_password("secret123")
    assert res.json()["token"] == Token.objects.get(user=user).key


def test_console_roles_cannot_self_register():
    res = APIClient().post("/api/auth/register/", _register_payload(role="super_admin"), format="json")
    assert res.status_code == 400
    assert not CustomUser.objects.filter(username="kisan1").exists()


@pytest.mark.parametrize(
    "overrides",
    [
        {"mobile_number": "98123"},
        {"mobile_number": "98123abcde"},
        {"username": "ramesh"},
        {"mobile_number": "9876500001"},
        {"password": "123"},
    ],
)
def test_register_rejects_bad_input(farmer, overrides):
    res = APIClient().post("/api/auth/register/", _register_payload(**overrides), format="json")
    assert res.status_code == 400


def test_create_test_users_is_idempotent():
    call_command("create_test_users")
    call_command("create_test_users")
    assert CustomUser.objects.count() == 5
    assert CustomUser.objects.get(username="super_admin").is_super_admin
