"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  These are
the contracts between the API layer (DRF Serializers) and the Service
layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order admission.
- ``UpdateOrderDTO``: partial input for the admin bulk update.
"""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import OrderStatus


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order admission requests."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    pickup_date: date
    pickup_time: time
    address: str
    order_person_name: str
    phone_number: str

    @field_validator("address", "order_person_name", "phone_number")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("This field may not be blank.")
        return v


class UpdateOrderDTO(BaseModel):
    """Immutable DTO for admin updates.

    All fields are optional; only supplied fields will be updated.  The
    cart snapshot, ``user``, ``created_at`` and ``expires_at`` are not
    updatable.
    """

    model_config = ConfigDict(frozen=True)

    pickup_date: Optional[date] = None
    pickup_time: Optional[time] = None
    formatted_address: Optional[str] = None
    street: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    total_amount: Optional[Decimal] = None
    order_person_name: Optional[str] = None
    phone_number: Optional[str] = None
    status: Optional[OrderStatus] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields that were actually supplied."""
        return self.model_dump(exclude_none=True)
