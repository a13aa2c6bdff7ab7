"""Serviceable-area check.

``ServiceArea`` is an immutable value built once from settings and
injected into ``GeofenceValidator``.  Distances are great-circle
(haversine) meters on a sphere of the WGS-84 equatorial radius.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings

EARTH_RADIUS_M = 6378137.0


@dataclass(frozen=True)
class ServiceArea:
    latitude: float
    longitude: float
    radius_m: float

    @classmethod
    def from_settings(cls) -> ServiceArea:
        return cls(
            latitude=settings.SERVICE_AREA_LATITUDE,
            longitude=settings.SERVICE_AREA_LONGITUDE,
            radius_m=settings.SERVICE_AREA_RADIUS_M,
        )


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two lat/lng points."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


class GeofenceValidator:
    def __init__(self, area: ServiceArea) -> None:
        self._area = area

    @property
    def area(self) -> ServiceArea:
        return self._area

    def distance_to(self, latitude: float, longitude: float) -> float:
        return haversine_distance(
            latitude, longitude, self._area.latitude, self._area.longitude
        )

    def is_serviceable(self, latitude: float, longitude: float) -> bool:
        """``True`` iff the point lies within ``radius_m`` of the centre."""
        return self.distance_to(latitude, longitude) <= self._area.radius_m
