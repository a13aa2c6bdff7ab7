"""Cart repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.carts.models import Cart


class ICartRepository(IRepository["Cart"]):
    """Repository contract for the Cart aggregate (cart + lines)."""

    @abstractmethod
    def get_by_user(self, user_id: Any) -> Optional[Cart]:
        """Retrieve a user's cart with lines and their services prefetched."""
