"""Django ORM implementation of the Cart repository.

Methods return ``None`` for missing or malformed IDs; callers decide
how absence maps to a business error.
"""

from __future__ import annotations

from typing import Any, Optional

from django.core.exceptions import ValidationError

from modules.carts.models import Cart
from modules.carts.repositories.interfaces import ICartRepository


class CartDjangoRepository(ICartRepository):
    """Concrete Cart repository backed by Django ORM."""

    def _queryset(self):
        return Cart.objects.prefetch_related("items__service")

    def get_by_id(self, id: str) -> Optional[Cart]:
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_user(self, user_id: Any) -> Optional[Cart]:
        try:
            return self._queryset().filter(user_id=user_id).first()
        except (ValueError, TypeError, ValidationError):
            return None
