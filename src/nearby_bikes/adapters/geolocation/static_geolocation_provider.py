"""Geolocation provider backed by fixed coordinates."""

import logging
from datetime import UTC, datetime

from nearby_bikes.application.validators import is_valid_coordinates
from nearby_bikes.domain.errors import GeolocationError
from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.geolocation import GeolocationFailure, GeolocationReading
from nearby_bikes.domain.ports.geolocation_provider import GeolocationProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_ACCURACY_METERS = 1000.0


class StaticGeolocationProvider(GeolocationProvider):
    """Returns a position supplied up front, e.g. from the command line."""

    def __init__(
        self,
        latitude: float | None,
        longitude: float | None,
        accuracy_meters: float = 0.0,
        max_accuracy_meters: float = DEFAULT_MAX_ACCURACY_METERS,
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy_meters = accuracy_meters
        self.max_accuracy_meters = max_accuracy_meters

    async def current_position(self) -> GeolocationReading:
        if self.latitude is None or self.longitude is None:
            raise GeolocationError(
                GeolocationFailure.POSITION_UNAVAILABLE, "No coordinates configured"
            )

        coordinates = Coordinates(latitude=self.latitude, longitude=self.longitude)
        if not is_valid_coordinates(coordinates):
            raise GeolocationError(
                GeolocationFailure.POSITION_UNAVAILABLE,
                f"Invalid coordinates: {self.latitude}, {self.longitude}",
                {"latitude": self.latitude, "longitude": self.longitude},
            )

        if self.accuracy_meters > self.max_accuracy_meters:
            logger.warning(
                f"Position accuracy {self.accuracy_meters}m exceeds {self.max_accuracy_meters}m"
            )
            raise GeolocationError(
                GeolocationFailure.POSITION_UNAVAILABLE,
                f"Position too inaccurate: {self.accuracy_meters}m",
                {"accuracy_meters": self.accuracy_meters},
            )

        return GeolocationReading(
            coordinates=coordinates,
            accuracy_meters=self.accuracy_meters,
            timestamp=datetime.now(UTC),
        )
