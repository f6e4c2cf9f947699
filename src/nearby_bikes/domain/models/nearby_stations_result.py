"""Search result domain models."""

from dataclasses import dataclass

from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.station import StationWithDistance


@dataclass(frozen=True)
class NearbyStationsResult:
    """Outcome of one nearby-stations search.

    ``total_stations`` counts the network's stations before filtering,
    ``filtered_stations`` the stations that survived filtering and limiting.
    """

    stations: tuple[StationWithDistance, ...]
    network_id: str
    network_name: str
    user_location: Coordinates
    timestamp: str  # ISO-8601 generation time (UTC)
    total_stations: int
    filtered_stations: int


@dataclass(frozen=True)
class StationSearchResult(NearbyStationsResult):
    """Search result with timing information."""

    search_duration_ms: int = 0
