"""Geocoding exceptions."""

from __future__ import annotations

from modules.core.exceptions import DomainError


class GeocodingFailed(DomainError):
    """No usable geocoding result after the retry, or a transport error."""

    code = "geocoding_failed"


class InvalidGeocodeResponse(DomainError):
    """The provider returned a result without coordinates."""

    code = "invalid_geocode_response"
