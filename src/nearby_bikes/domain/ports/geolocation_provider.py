"""Geolocation provider port."""

from typing import Protocol

from nearby_bikes.domain.models.geolocation import GeolocationReading


class GeolocationProvider(Protocol):
    """Port for obtaining the user's position."""

    async def current_position(self) -> GeolocationReading:
        """Return a position fix or raise ``GeolocationError``."""
        ...
