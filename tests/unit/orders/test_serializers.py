from __future__ import annotations

import pytest

from modules.orders.serializers import (
    CreateOrderSerializer,
    UpdateOrderSerializer,
    UpdateOrderStatusSerializer,
)

pytestmark = pytest.mark.unit


def _payload(**overrides):
    data = {
        "user": 1,
        "pickup_date": "2025-06-16",
        "pickup_time": "10:30",
        "formatted_address": "12/3, 4B, MG Road",
        "order_person_name": "Asha",
        "phone_number": "+91 98450 00000",
    }
    data.update(overrides)
    return data


class TestCreateOrderSerializer:
    def test_valid_payload(self):
        serializer = CreateOrderSerializer(data=_payload())
        assert serializer.is_valid(), serializer.errors

    @pytest.mark.parametrize(
        "field",
        ["user", "pickup_date", "pickup_time", "formatted_address",
         "order_person_name", "phone_number"],
    )
    def test_required_fields(self, field):
        data = _payload()
        del data[field]

        serializer = CreateOrderSerializer(data=data)

        assert not serializer.is_valid()
        assert field in serializer.errors

    def test_invalid_phone(self):
        serializer = CreateOrderSerializer(data=_payload(phone_number="call me"))
        assert not serializer.is_valid()
        assert "phone_number" in serializer.errors

    def test_invalid_date(self):
        serializer = CreateOrderSerializer(data=_payload(pickup_date="16/06/2025"))
        assert not serializer.is_valid()
        assert "pickup_date" in serializer.errors


class TestUpdateSerializers:
    def test_update_accepts_partial_payload(self):
        serializer = UpdateOrderSerializer(data={"city": "Mysuru"})
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {"city": "Mysuru"}

    def test_update_rejects_unknown_status(self):
        serializer = UpdateOrderSerializer(data={"status": "Lost"})
        assert not serializer.is_valid()

    def test_update_rejects_out_of_range_latitude(self):
        serializer = UpdateOrderSerializer(data={"latitude": 123.0})
        assert not serializer.is_valid()

    def test_status_serializer(self):
        serializer = UpdateOrderStatusSerializer(data={"status": "Picked Up"})
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["status"] == "Picked Up"

    def test_status_is_required(self):
        assert not UpdateOrderStatusSerializer(data={}).is_valid()
