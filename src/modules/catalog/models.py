"""Catalog of services offered for pickup (e.g. wash & fold, dry cleaning)."""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Service(BaseModel):
    """A service a cart line or an ordered snapshot refers to.

    Prices live on cart lines, not here: a cart line carries the price
    it was added with and the order total is computed from that.
    """

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "services"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
