"""Order domain constants.

``ORDER_EXPIRY_WINDOW`` drives both the expiry deadline stamped on new
orders and the sweeper's deletion cutoff; they must never diverge.
"""

from datetime import timedelta

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    CONFIRMED = "Confirmed", "Confirmed"
    PICKED_UP = "Picked Up", "Picked Up"
    IN_PROCESS = "In Process", "In Process"
    READY = "Ready", "Ready"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"


ORDER_EXPIRY_WINDOW = timedelta(hours=1)

STATUS_UPDATE_SUBJECT = "Order Status Update"
