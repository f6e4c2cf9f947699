"""CityBikes v2 API adapter."""

from nearby_bikes.adapters.citybikes_api.citybikes_network_directory import (
    CityBikesNetworkDirectory,
)

__all__ = ["CityBikesNetworkDirectory"]
