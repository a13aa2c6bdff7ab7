"""Integration tests for order updates and deletion.

Covers:
- PATCH /orders/{id}/status/ persists the status and emails the owner once.
- PUT /orders/{id}/ applies partial changes, emails only on a status change.
- DELETE /orders/{id}/.
- 404 for unknown orders, 400 for invalid values, 403 for non-admins.
"""

from __future__ import annotations

import smtplib
from datetime import date, time
from decimal import Decimal
from unittest.mock import patch

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderedService

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"
MISSING_ID = "0190a1b2-0000-7000-8000-000000000000"


@pytest.fixture()
def order(customer, wash_fold):
    order = Order.objects.create(
        user=customer,
        pickup_date=date(2025, 6, 16),
        pickup_time=time(10, 30),
        formatted_address="MG Road, Bengaluru",
        latitude=12.9756,
        longitude=77.605,
        total_amount=Decimal("120.00"),
        order_person_name="Asha",
        phone_number="+91 98450 00000",
    )
    OrderedService.objects.create(
        order=order, service=wash_fold, items=[{"item": "Shirt", "quantity": 4}]
    )
    return order


class TestUpdateStatus:
    def test_pending_to_confirmed_sends_one_email(self, staff_client, order, mailoutbox):
        response = staff_client.patch(
            f"{URL}{order.id}/status/", {"status": "Confirmed"}, format="json"
        )

        assert response.status_code == 200, response.data
        body = response.json()
        assert body["detail"] == "Order status updated successfully."
        assert body["order"]["status"] == "Confirmed"

        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED

        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.subject == "Order Status Update"
        assert message.to == ["customer@example.com"]
        assert "Confirmed" in message.body
        assert str(order.id) in message.body

    def test_each_call_sends_an_email(self, staff_client, order, mailoutbox):
        for new_status in ("Confirmed", "Picked Up", "Picked Up"):
            staff_client.patch(
                f"{URL}{order.id}/status/", {"status": new_status}, format="json"
            )

        assert len(mailoutbox) == 3

    def test_unknown_status(self, staff_client, order, mailoutbox):
        response = staff_client.patch(
            f"{URL}{order.id}/status/", {"status": "Teleported"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "status"
        assert mailoutbox == []

    def test_unknown_order(self, staff_client, mailoutbox):
        response = staff_client.patch(
            f"{URL}{MISSING_ID}/status/", {"status": "Confirmed"}, format="json"
        )

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "order_not_found"
        assert mailoutbox == []

    def test_email_failure_is_reported(self, staff_client, order):
        with patch(
            "modules.orders.notifications.send_mail",
            side_effect=smtplib.SMTPConnectError(421, "unavailable"),
        ):
            response = staff_client.patch(
                f"{URL}{order.id}/status/", {"status": "Ready"}, format="json"
            )

        assert response.status_code == 500
        body = response.json()
        assert body["type"] == "server_error"
        assert body["errors"][0]["code"] == "notification_failed"

    def test_non_admin_forbidden(self, customer_client, order, mailoutbox):
        response = customer_client.patch(
            f"{URL}{order.id}/status/", {"status": "Confirmed"}, format="json"
        )

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING
        assert mailoutbox == []


class TestUpdateOrder:
    def test_partial_update_without_status(self, staff_client, order, mailoutbox):
        response = staff_client.put(
            f"{URL}{order.id}/",
            {"city": "Bengaluru", "pickup_time": "16:00"},
            format="json",
        )

        assert response.status_code == 200, response.data
        assert response.json()["city"] == "Bengaluru"
        order.refresh_from_db()
        assert order.pickup_time == time(16, 0)
        assert order.formatted_address == "MG Road, Bengaluru"
        assert mailoutbox == []

    def test_status_change_sends_email(self, staff_client, order, mailoutbox):
        response = staff_client.put(
            f"{URL}{order.id}/", {"status": "Cancelled"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"
        assert len(mailoutbox) == 1
        assert "Cancelled" in mailoutbox[0].body

    def test_snapshot_and_expiry_not_updatable(self, staff_client, order):
        original_expiry = order.expires_at

        response = staff_client.put(
            f"{URL}{order.id}/",
            {"expires_at": "2030-01-01T00:00:00Z", "services": []},
            format="json",
        )

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.expires_at == original_expiry
        assert order.services.count() == 1

    def test_invalid_value(self, staff_client, order):
        response = staff_client.put(
            f"{URL}{order.id}/", {"total_amount": "-5.00"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_unknown_order(self, staff_client):
        response = staff_client.put(f"{URL}{MISSING_ID}/", {"city": "X"}, format="json")

        assert response.status_code == 404


class TestDeleteOrder:
    def test_delete(self, staff_client, order):
        response = staff_client.delete(f"{URL}{order.id}/")

        assert response.status_code == 200
        assert response.json() == {"detail": "Order deleted successfully."}
        assert not Order.objects.filter(id=order.id).exists()
        assert OrderedService.objects.count() == 0

    def test_delete_unknown(self, staff_client):
        response = staff_client.delete(f"{URL}{MISSING_ID}/")

        assert response.status_code == 404

    def test_non_admin_forbidden(self, customer_client, order):
        response = customer_client.delete(f"{URL}{order.id}/")

        assert response.status_code == 403
        assert Order.objects.filter(id=order.id).exists()
