"""Celery tasks for the orders module.

``sweep_expired_orders`` is scheduled every minute by Celery beat
(``CELERY_BEAT_SCHEDULE``).  It is its own error boundary: a failing run
is logged and reported as zero deletions so the schedule keeps ticking.
"""

import structlog
from celery import shared_task

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.sweeper import ExpirySweeper

logger = structlog.get_logger(__name__)


@shared_task(name="orders.sweep_expired_orders", ignore_result=True)
def sweep_expired_orders() -> int:
    """Delete Pending orders older than the expiry window."""
    try:
        return ExpirySweeper(OrderDjangoRepository()).run()
    except Exception as exc:
        logger.exception("order.sweep_failed", error=str(exc))
        return 0
