"""Great-circle distances between WGS84 positions (haversine formula)."""

import math
from collections.abc import Iterable
from typing import Protocol, TypeVar

EARTH_RADIUS_KM = 6371.0


class HasPosition(Protocol):
    """Anything with a latitude and a longitude."""

    @property
    def latitude(self) -> float: ...

    @property
    def longitude(self) -> float: ...


P = TypeVar("P", bound=HasPosition)


def distance(a: HasPosition, b: HasPosition) -> int:
    """Distance between two positions in meters, rounded to the nearest meter.

    Symmetric and zero for identical points. Ranges are not checked here; validate
    coordinates before calling.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return round(EARTH_RADIUS_KM * c * 1000)


def is_within_radius(a: HasPosition, b: HasPosition, radius_meters: float) -> bool:
    """Whether ``b`` lies within ``radius_meters`` of ``a``."""
    return distance(a, b) <= radius_meters


def sort_by_distance(points: Iterable[P], origin: HasPosition) -> list[P]:
    """Return a new list of ``points`` ordered by ascending distance from ``origin``.

    Ties keep their input order.
    """
    return sorted(points, key=lambda point: distance(origin, point))
