"""Adapters layer - external system integrations."""

from nearby_bikes.adapters.citybikes_api import CityBikesNetworkDirectory
from nearby_bikes.adapters.config import AppConfig
from nearby_bikes.adapters.geolocation import StaticGeolocationProvider
from nearby_bikes.adapters.scheduling import AutoRefreshScheduler

__all__ = [
    "AppConfig",
    "AutoRefreshScheduler",
    "CityBikesNetworkDirectory",
    "StaticGeolocationProvider",
]
