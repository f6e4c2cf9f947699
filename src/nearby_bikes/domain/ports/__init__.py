"""Ports (interfaces) for the ports-and-adapters architecture."""

from nearby_bikes.domain.ports.geolocation_provider import GeolocationProvider
from nearby_bikes.domain.ports.network_directory import NetworkDirectory

__all__ = [
    "GeolocationProvider",
    "NetworkDirectory",
]
