"""User look-up exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class UserNotFound(DomainError):
    """The user referenced by an order request does not exist."""

    code = "user_not_found"
