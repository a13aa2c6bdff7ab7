"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.  The API
error boundary (``modules.core.exceptions``) maps each of them to an
HTTP status.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError


class OrderNotFound(DomainError):
    """The requested order does not exist."""

    code = "order_not_found"


class OutOfServiceArea(DomainError):
    """The resolved address lies outside the serviceable radius."""

    code = "out_of_service_area"


class NotificationFailed(DomainError):
    """The status-update email could not be sent."""

    code = "notification_failed"
