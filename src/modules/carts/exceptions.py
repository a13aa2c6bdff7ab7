"""Cart exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class CartEmpty(DomainError):
    """The user has no cart, or the cart has no lines."""

    code = "cart_empty"
