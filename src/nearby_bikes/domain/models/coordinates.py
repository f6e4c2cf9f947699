"""Coordinates domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 position in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular area delimited by latitudes and longitudes."""

    north: float
    south: float
    east: float
    west: float
