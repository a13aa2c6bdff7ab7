from decimal import Decimal
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.carts.snapshot import CartSnapshotter
from modules.carts.repositories.django_repository import CartDjangoRepository
from modules.catalog.models import Service

pytestmark = pytest.mark.integration

User = get_user_model()


class TestSeedData:
    def test_seeds_users_services_and_cart(self):
        out = StringIO()
        call_command("seed_data", stdout=out)

        assert User.objects.filter(username="admin", is_superuser=True).exists()
        assert Service.objects.count() == 4
        assert "Seed completed" in out.getvalue()

        customer = User.objects.get(username="customer")
        snapshot = CartSnapshotter(CartDjangoRepository()).snapshot(customer.pk)
        assert len(snapshot.services) == 3
        assert snapshot.total_amount == Decimal("460.00")

    def test_is_rerunnable(self):
        call_command("seed_data", stdout=StringIO())
        call_command("seed_data", stdout=StringIO())

        assert User.objects.filter(username="customer").count() == 1
        assert Service.objects.count() == 4
        customer = User.objects.get(username="customer")
        assert customer.cart.items.count() == 3
