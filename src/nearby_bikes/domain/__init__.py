"""Domain layer - core business models, errors and ports."""

from nearby_bikes.domain.errors import (
    BikeFinderError,
    ErrorKind,
    GeolocationError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    UnknownError,
    ValidationError,
)
from nearby_bikes.domain.models import (
    Coordinates,
    Network,
    NearbyStationsResult,
    RefreshState,
    Station,
    StationPriority,
    StationWithDistance,
)
from nearby_bikes.domain.ports import GeolocationProvider, NetworkDirectory

__all__ = [
    "BikeFinderError",
    "Coordinates",
    "ErrorKind",
    "GeolocationError",
    "GeolocationProvider",
    "NearbyStationsResult",
    "Network",
    "NetworkDirectory",
    "NetworkError",
    "NotFoundError",
    "RefreshState",
    "RequestTimeoutError",
    "Station",
    "StationPriority",
    "StationWithDistance",
    "UnknownError",
    "ValidationError",
]
