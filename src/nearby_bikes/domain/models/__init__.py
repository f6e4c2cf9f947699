"""Domain models for nearby bike stations."""

from nearby_bikes.domain.models.coordinates import BoundingBox, Coordinates
from nearby_bikes.domain.models.error_details import ErrorDetails
from nearby_bikes.domain.models.geolocation import GeolocationFailure, GeolocationReading
from nearby_bikes.domain.models.nearby_stations_result import (
    NearbyStationsResult,
    StationSearchResult,
)
from nearby_bikes.domain.models.network import (
    Network,
    NetworkDetails,
    NetworkLocation,
    NetworkWithDistance,
)
from nearby_bikes.domain.models.priority_config import (
    DEFAULT_PRIORITY_CONFIG,
    PRIORITY_PRESETS,
    SUBURBAN_PRIORITY_CONFIG,
    URBAN_PRIORITY_CONFIG,
    BikeAvailabilityThresholds,
    DistanceThresholds,
    PriorityConfig,
    ScoreBand,
)
from nearby_bikes.domain.models.refresh_state import DataFreshness, RefreshState, RefreshStatus
from nearby_bikes.domain.models.search_options import SearchOptions, SortKey, SortOrder
from nearby_bikes.domain.models.station import Station, StationWithDistance
from nearby_bikes.domain.models.station_priority import (
    BikeAvailability,
    PriorityLevel,
    StationPriority,
    StationWithPriority,
)

__all__ = [
    "DEFAULT_PRIORITY_CONFIG",
    "PRIORITY_PRESETS",
    "SUBURBAN_PRIORITY_CONFIG",
    "URBAN_PRIORITY_CONFIG",
    "BikeAvailability",
    "BikeAvailabilityThresholds",
    "BoundingBox",
    "Coordinates",
    "DataFreshness",
    "DistanceThresholds",
    "ErrorDetails",
    "GeolocationFailure",
    "GeolocationReading",
    "NearbyStationsResult",
    "Network",
    "NetworkDetails",
    "NetworkLocation",
    "NetworkWithDistance",
    "PriorityConfig",
    "PriorityLevel",
    "RefreshState",
    "RefreshStatus",
    "ScoreBand",
    "SearchOptions",
    "SortKey",
    "SortOrder",
    "Station",
    "StationPriority",
    "StationSearchResult",
    "StationWithDistance",
    "StationWithPriority",
]
