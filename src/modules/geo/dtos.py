"""Geocoding DTOs.

``ResolvedAddress`` is the value object handed from the address resolver
to the order admission pipeline.  Coordinates are optional on the DTO so
the pipeline can tell a provider reply without geometry apart from a
usable one.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AddressComponents(BaseModel):
    """Structured address parts; any missing part defaults to ``""``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    road: str = ""
    postcode: str = ""
    city: str = ""
    country: str = ""

    @field_validator("road", "postcode", "city", "country", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)


class ResolvedAddress(BaseModel):
    """Immutable result of a successful geocoding lookup."""

    model_config = ConfigDict(frozen=True)

    formatted_address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    components: AddressComponents = AddressComponents()

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @classmethod
    def from_candidate(cls, candidate: Dict[str, Any]) -> ResolvedAddress:
        """Build from one OpenCage ``results[]`` entry."""
        geometry = candidate.get("geometry")
        if not isinstance(geometry, dict):
            geometry = {}
        components = candidate.get("components")
        if not isinstance(components, dict):
            components = {}
        return cls(
            formatted_address=candidate.get("formatted") or "",
            latitude=geometry.get("lat"),
            longitude=geometry.get("lng"),
            components=AddressComponents.model_validate(components),
        )
