"""Customer notifications for order status changes.

Delivery goes through Django's mail framework with
``fail_silently=False``: a failed send surfaces as
``NotificationFailed`` and is never retried here.  The SMTP call is
bounded by ``EMAIL_TIMEOUT``.
"""

from __future__ import annotations

import smtplib
from typing import TYPE_CHECKING

import structlog
from django.conf import settings
from django.core.mail import send_mail

from modules.orders.constants import STATUS_UPDATE_SUBJECT
from modules.orders.exceptions import NotificationFailed

if TYPE_CHECKING:
    from modules.orders.models import Order

logger = structlog.get_logger(__name__)


def status_update_message(order: Order) -> str:
    return (
        f"Your order status has been updated to: {order.status}. "
        f"Order ID: {order.id}"
    )


class OrderNotifier:
    def send_status_update(self, order: Order) -> None:
        """Email the order's owner about its current status.

        Raises:
            NotificationFailed: the mail backend could not send the message.
        """
        log = logger.bind(order_id=str(order.id), status=order.status)
        recipient = order.user.email
        if not recipient:
            log.error("order.notification_failed", error="user has no email address")
            raise NotificationFailed("Order owner has no email address.")

        try:
            send_mail(
                subject=STATUS_UPDATE_SUBJECT,
                message=status_update_message(order),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[recipient],
                fail_silently=False,
            )
        except (smtplib.SMTPException, OSError) as exc:
            log.error("order.notification_failed", error=str(exc))
            raise NotificationFailed("Failed to send status update email.") from exc

        log.info("order.notification_sent")
