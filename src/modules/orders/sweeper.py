"""Expiry sweep for orders left unconfirmed.

Each run deletes every ``Pending`` order created strictly before
``now - ORDER_EXPIRY_WINDOW``.  The same window stamps ``expires_at`` on
new orders, so an order is never swept before its own deadline.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Callable

import structlog
from django.utils import timezone

from modules.orders.constants import ORDER_EXPIRY_WINDOW

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class ExpirySweeper:
    def __init__(
        self,
        order_repository: IOrderRepository,
        clock: Callable[[], datetime] = timezone.now,
        window: timedelta = ORDER_EXPIRY_WINDOW,
    ) -> None:
        self._order_repo = order_repository
        self._clock = clock
        self._window = window

    def run(self) -> int:
        """Run one sweep and return the number of orders deleted."""
        cutoff = self._clock() - self._window
        deleted = self._order_repo.delete_expired_pending(cutoff)
        if deleted:
            logger.info(
                "order.expired_swept",
                deleted=deleted,
                cutoff=cutoff.isoformat(),
            )
        return deleted
