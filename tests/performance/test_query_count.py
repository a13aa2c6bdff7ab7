"""Performance regression tests: constant query count (N+1 prevention).

Verifies that list and retrieve endpoints execute a bounded number of
SQL queries regardless of the number of records, proving that
``select_related`` / ``prefetch_related`` are correctly applied.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from modules.catalog.models import Service
from modules.orders.models import Order, OrderedService

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def services():
    return [Service.objects.create(name=f"Service {i}") for i in range(5)]


@pytest.fixture()
def orders_with_services(customer, services):
    """Create multiple orders each with several snapshot lines."""
    orders = []
    for i in range(10):
        order = Order.objects.create(
            user=customer,
            pickup_date=date(2025, 6, 16),
            pickup_time=time(10, 30),
            formatted_address=f"{i} MG Road, Bengaluru",
            latitude=12.9756,
            longitude=77.605,
            total_amount=Decimal("30.00"),
            order_person_name="Perf",
            phone_number="+91 98450 00000",
        )
        for position, service in enumerate(services[:3]):
            OrderedService.objects.create(
                order=order,
                service=service,
                position=position,
                items=[{"item": "Shirt", "quantity": 1}],
            )
        orders.append(order)
    return orders


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestOrderListQueryCount:
    """Verify the order list endpoint runs a constant number of queries."""

    def test_list_query_count_is_constant(
        self, staff_client, orders_with_services, django_assert_max_num_queries
    ):
        """GET /api/v1/orders/ should not increase queries with more records.

        Expected queries (bounded):
        1. COUNT for pagination
        2. SELECT orders with JOIN user (select_related)
        3. SELECT ordered services (prefetch_related)
        4. SELECT services (prefetch_related services__service)
        """
        with django_assert_max_num_queries(6):
            response = staff_client.get("/api/v1/orders/")

        assert response.status_code == 200
        assert response.data["count"] == 10


class TestOrderRetrieveQueryCount:
    """Verify the order retrieve endpoint runs a constant number of queries."""

    def test_retrieve_query_count_is_constant(
        self, customer_client, orders_with_services, django_assert_max_num_queries
    ):
        order = orders_with_services[0]

        with django_assert_max_num_queries(5):
            response = customer_client.get(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 200
        assert len(response.data["services"]) == 3
