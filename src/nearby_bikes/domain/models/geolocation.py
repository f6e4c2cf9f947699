"""Geolocation domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from nearby_bikes.domain.models.coordinates import Coordinates


class GeolocationFailure(StrEnum):
    """Reasons a position could not be obtained."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class GeolocationReading:
    """A single position fix."""

    coordinates: Coordinates
    accuracy_meters: float
    timestamp: datetime
