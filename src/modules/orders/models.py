"""Order and OrderedService models.

Rules implemented here:
- ``expires_at`` is stamped once, on the first save, as
  ``created_at + ORDER_EXPIRY_WINDOW`` and never recomputed.
- ``OrderedService`` rows are the immutable snapshot of the cart taken
  at admission; saving an existing row is rejected.
- Orders are hard-deleted (explicitly, or by the expiry sweeper).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import ORDER_EXPIRY_WINDOW, OrderStatus

logger = structlog.get_logger(__name__)


class Order(BaseModel):
    """Pickup order aggregate root.

    ``status`` is the single canonical status field: the expiry sweeper
    filters on it and the status-update path writes it.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="orders",
    )
    pickup_date = models.DateField()
    pickup_time = models.TimeField()

    formatted_address = models.CharField(max_length=500)
    street = models.CharField(max_length=255, blank=True, default="")
    postal_code = models.CharField(max_length=32, blank=True, default="")
    city = models.CharField(max_length=255, blank=True, default="")
    country = models.CharField(max_length=255, blank=True, default="")
    latitude = models.FloatField()
    longitude = models.FloatField()

    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    order_person_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=32)

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    expires_at = models.DateTimeField(editable=False)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
            models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.expires_at is None:
            self.expires_at = self.created_at + ORDER_EXPIRY_WINDOW
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderedService(BaseModel):
    """One snapshotted cart line: a service plus ``[{"item", "quantity"}]``."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="services",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="ordered_services",
    )
    position = models.PositiveIntegerField(default=0)
    items = models.JSONField(default=list)

    class Meta:
        db_table = "ordered_services"
        ordering = ["position"]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            logger.warning("order.snapshot_mutation_rejected", ordered_service_id=str(self.id))
            raise ValidationError("Ordered services are immutable once created.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.service_id} {self.items}"
