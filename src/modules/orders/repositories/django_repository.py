"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  The order
row and its ``OrderedService`` snapshot rows are written inside one
``transaction.atomic()`` block, so a half-written order is never
visible.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.exceptions import ValidationFailed
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderedService
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _queryset(self):
        return Order.objects.select_related("user").prefetch_related(
            "services__service"
        )

    # ------------------------------------------------------------------
    # Create (aggregate root + snapshot)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its snapshot rows atomically.

        Returns the stored order with its user and snapshot loaded.
        """
        fields = dict(data)
        services = fields.pop("services", [])

        order = Order(**fields)
        order.save()

        OrderedService.objects.bulk_create(
            [
                OrderedService(
                    order=order,
                    service_id=entry["service_id"],
                    position=position,
                    items=list(entry["items"]),
                )
                for position, entry in enumerate(services)
            ]
        )

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            service_count=len(services),
        )
        return self._queryset().get(pk=order.pk)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with user and snapshot services eager-loaded.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_by_user(self, user_id: Any) -> List[Order]:
        try:
            return list(self._queryset().filter(user_id=user_id))
        except (ValueError, TypeError, ValidationError):
            return []

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: str, data: Dict[str, Any]) -> Optional[Order]:
        """Apply *data* and run model validation before writing.

        Raises:
            ValidationFailed: the updated order violates a field constraint.
        """
        order = self.get_by_id(id)
        if order is None:
            return None

        for field, value in data.items():
            setattr(order, field, value)

        try:
            order.full_clean()
        except ValidationError as exc:
            logger.warning("order.update_invalid", order_id=str(id), errors=exc.message_dict)
            raise ValidationFailed("Order validation failed.", exc.message_dict) from exc

        order.save()
        logger.info("order.updated", order_id=str(id), fields=sorted(data))
        return order

    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete(self, id: str) -> bool:
        try:
            deleted, _ = Order.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return bool(deleted)

    def delete_expired_pending(self, cutoff: datetime) -> int:
        """Delete every Pending order created strictly before *cutoff*.

        Returns the number of orders removed (snapshot rows cascade and
        are not counted).
        """
        queryset = Order.objects.filter(
            status=OrderStatus.PENDING,
            created_at__lt=cutoff,
        )
        _, per_model = queryset.delete()
        return per_model.get(Order._meta.label, 0)
