"""Cart-to-order snapshotting.

``CartSnapshotter.snapshot`` copies a user's cart into an immutable
structure the order pipeline persists.  Every cart line becomes its own
service grouping (lines for the same service are not merged), and the
total is the sum of each line's own ``price * quantity``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Tuple
from uuid import UUID

import structlog

from modules.carts.exceptions import CartEmpty

if TYPE_CHECKING:
    from modules.carts.repositories.interfaces import ICartRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ServiceSnapshot:
    service_id: UUID
    items: Tuple[Dict[str, Any], ...]

    def as_items_list(self) -> List[Dict[str, Any]]:
        return [dict(entry) for entry in self.items]


@dataclass(frozen=True)
class CartSnapshot:
    services: Tuple[ServiceSnapshot, ...]
    total_amount: Decimal = field(default=Decimal("0.00"))


class CartSnapshotter:
    def __init__(self, cart_repository: ICartRepository) -> None:
        self._cart_repo = cart_repository

    def snapshot(self, user_id: Any) -> CartSnapshot:
        """Snapshot the cart owned by *user_id*.

        Raises:
            CartEmpty: no cart, or a cart with zero lines.
        """
        cart = self._cart_repo.get_by_user(user_id)
        lines = list(cart.items.all()) if cart is not None else []
        if not lines:
            logger.info("cart.empty", user_id=str(user_id))
            raise CartEmpty("Cart is empty.")

        services = tuple(
            ServiceSnapshot(
                service_id=line.service_id,
                items=({"item": line.item, "quantity": line.quantity},),
            )
            for line in lines
        )
        total = sum(
            (Decimal(line.price) * line.quantity for line in lines),
            Decimal("0.00"),
        )
        logger.info(
            "cart.snapshotted",
            user_id=str(user_id),
            line_count=len(lines),
            total_amount=str(total),
        )
        return CartSnapshot(services=services, total_amount=total)
