"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).  Business
logic lives in the Service Layer, which receives Pydantic DTOs from
``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderedService

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order admission payload."""

    user = serializers.IntegerField(min_value=1)
    pickup_date = serializers.DateField()
    pickup_time = serializers.TimeField()
    formatted_address = serializers.CharField(max_length=500)
    order_person_name = serializers.CharField(max_length=255)
    phone_number = serializers.RegexField(
        regex=r"^\+?[0-9\s\-()]{6,20}$",
        max_length=32,
        error_messages={"invalid": "Enter a valid phone number."},
    )


class UpdateOrderSerializer(serializers.Serializer):
    """Validates an admin update; every field is optional."""

    pickup_date = serializers.DateField(required=False)
    pickup_time = serializers.TimeField(required=False)
    formatted_address = serializers.CharField(max_length=500, required=False)
    street = serializers.CharField(max_length=255, required=False, allow_blank=True)
    postal_code = serializers.CharField(max_length=32, required=False, allow_blank=True)
    city = serializers.CharField(max_length=255, required=False, allow_blank=True)
    country = serializers.CharField(max_length=255, required=False, allow_blank=True)
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False)
    total_amount = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    order_person_name = serializers.CharField(max_length=255, required=False)
    phone_number = serializers.CharField(max_length=32, required=False)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderedServiceSerializer(serializers.ModelSerializer):
    """Snapshot line with the service reference resolved."""

    service_name = serializers.CharField(source="service.name", read_only=True)

    class Meta:
        model = OrderedService
        fields = ["service_id", "service_name", "items"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with the snapshot and owner resolved."""

    user_email = serializers.EmailField(source="user.email", read_only=True)
    services = OrderedServiceSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "user_email",
            "services",
            "pickup_date",
            "pickup_time",
            "formatted_address",
            "street",
            "postal_code",
            "city",
            "country",
            "latitude",
            "longitude",
            "total_amount",
            "order_person_name",
            "phone_number",
            "status",
            "created_at",
            "updated_at",
            "expires_at",
        ]
        read_only_fields = fields
