"""Geolocation adapters."""

from nearby_bikes.adapters.geolocation.static_geolocation_provider import (
    StaticGeolocationProvider,
)

__all__ = ["StaticGeolocationProvider"]
