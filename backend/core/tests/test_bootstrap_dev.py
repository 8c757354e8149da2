from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from rest_framework.authtoken.models import Token

pytestmark = pytest.mark.django_db


def test_bootstrap_dev_creates_super_admin_once(monkeypatch):
    monkeypatch.setenv("DEV_ADMIN_USER", "ops")
    out = StringIO()
    call_command("bootstrap_dev", stdout=out)
    call_command("bootstrap_dev", stdout=out)

    user = get_user_model().objects.get(username="ops")
    assert user.is_super_admin
    assert Token.objects.filter(user=user).count() == 1
    assert f"TOKEN: {Token.objects.get(user=user).key}" in out.getvalue()
    assert "already exists" in out.getvalue()
