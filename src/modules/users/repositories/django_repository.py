"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from modules.users.repositories.interfaces import IUserRepository


class UserDjangoRepository(IUserRepository):
    """Looks users up through the configured auth user model."""

    def get_by_id(self, id: Any) -> Optional[Any]:
        """Return the user or ``None`` for unknown / malformed IDs."""
        User = get_user_model()
        try:
            return User.objects.filter(pk=id).first()
        except (ValueError, TypeError, ValidationError):
            return None
