"""Free-text address resolution against the OpenCage geocoding API.

The resolver asks the provider for a single candidate.  When the first
lookup returns nothing it strips a leading ``unit/floor, number,``
prefix (``12/3, 4B, MG Road`` -> ``MG Road``) and retries exactly once.
Transport errors, timeouts and undecodable replies are logged and
surfaced uniformly as ``GeocodingFailed``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

import requests
import structlog
from django.conf import settings

from modules.geo.dtos import ResolvedAddress
from modules.geo.exceptions import GeocodingFailed

logger = structlog.get_logger(__name__)

UNIT_PREFIX_PATTERN = re.compile(r"^\d+/\d+,\s*\d+\w*,\s*", re.IGNORECASE)


def simplify_address(address: str) -> str:
    """Drop a leading ``<unit>/<floor>, <number>, `` prefix, if any."""
    return UNIT_PREFIX_PATTERN.sub("", address, count=1)


class AddressResolver:
    """Resolve addresses to coordinates with one simplified-address retry."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.GEOCODER_API_KEY
        self._base_url = base_url or settings.GEOCODER_URL
        self._timeout = timeout if timeout is not None else settings.GEOCODER_TIMEOUT
        self._session = session or requests.Session()

    def resolve(self, address: str) -> ResolvedAddress:
        """Return the best candidate for *address*.

        Raises:
            GeocodingFailed: no result after the retry, or the provider
                could not be reached / answered garbage.
        """
        log = logger.bind(address=address)
        try:
            results = self._lookup(address)
            if not results:
                simplified = simplify_address(address)
                log.warning("geocode.retry_simplified", simplified=simplified)
                results = self._lookup(simplified)
            if not results:
                log.error("geocode.failed", error="No geocoding results found")
                raise GeocodingFailed("Geocoding failed.")
            resolved = ResolvedAddress.from_candidate(results[0])
        except (requests.RequestException, ValueError) as exc:
            log.error("geocode.failed", error=str(exc))
            raise GeocodingFailed("Geocoding failed.") from exc

        log.info(
            "geocode.resolved",
            formatted_address=resolved.formatted_address,
            latitude=resolved.latitude,
            longitude=resolved.longitude,
        )
        return resolved

    def _lookup(self, query: str) -> List[Dict[str, Any]]:
        response = self._session.get(
            self._base_url,
            params={"q": query, "key": self._api_key, "limit": 1},
            timeout=self._timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            return []
        results = payload.get("results") or []
        if not isinstance(results, list):
            return []
        return [candidate for candidate in results if isinstance(candidate, dict)]
