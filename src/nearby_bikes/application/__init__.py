"""Application layer - algorithms and use cases."""

from nearby_bikes.application.manual_refresh_gate import ManualRefreshGate
from nearby_bikes.application.nearby_stations_tracker import NearbyStationsTracker
from nearby_bikes.application.network_locator import NetworkLocator
from nearby_bikes.application.station_search_service import StationSearchService

__all__ = [
    "ManualRefreshGate",
    "NearbyStationsTracker",
    "NetworkLocator",
    "StationSearchService",
]
