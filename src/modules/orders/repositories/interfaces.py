"""Order repository interface.

Extends ``IRepository[Order]`` with the operations the admission
pipeline, the status handler and the expiry sweeper need.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The aggregate includes its ``OrderedService`` snapshot rows, which
    are written together with the order and never afterwards.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its snapshot rows atomically.

        ``data`` holds the order fields plus ``services``: a list of
        dicts with ``service_id`` and ``items``.  The returned order has its user
        and snapshot rows loaded.
        """

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters, relations eager-loaded."""

    @abstractmethod
    def list_by_user(self, user_id: Any) -> List[Order]:
        """List a user's orders, newest first."""

    @abstractmethod
    def update(self, id: str, data: Dict[str, Any]) -> Optional[Order]:
        """Apply *data* to an order and re-validate it; ``None`` if absent."""

    @abstractmethod
    def save(self, entity: Order) -> Order:
        """Persist an existing order."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Hard-delete an order; ``False`` if it does not exist."""

    @abstractmethod
    def delete_expired_pending(self, cutoff: datetime) -> int:
        """Delete Pending orders created strictly before *cutoff*."""
