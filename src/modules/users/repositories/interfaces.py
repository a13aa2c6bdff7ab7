"""User repository interface."""

from __future__ import annotations

from typing import Any

from modules.core.repositories.interfaces import IRepository


class IUserRepository(IRepository[Any]):
    """Read-only contract over ``settings.AUTH_USER_MODEL``."""
