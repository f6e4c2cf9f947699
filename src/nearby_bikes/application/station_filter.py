"""Narrows a network's stations to the ones worth showing.

Stages run in a fixed order, each one narrowing the previous result:

1. distance: enrich with the distance from the user, drop stations beyond ``max_distance``
2. bikes: drop stations without a positive bike count (optional)
3. status: drop stations reported ``closed`` or ``inactive`` (optional)

Input order is preserved; sorting is a separate step.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from nearby_bikes.application.geodesy import distance
from nearby_bikes.application.validators import is_number, validate_positive
from nearby_bikes.domain.errors import ValidationError
from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.station import Station, StationWithDistance

logger = logging.getLogger(__name__)

DEFAULT_MAX_DISTANCE = 200
INACTIVE_STATUSES = frozenset({"closed", "inactive"})

S = TypeVar("S", bound=Station)


@dataclass(frozen=True)
class FilterStats:
    """Counts describing one filtering pass."""

    total: int
    filtered: int
    with_bikes: int
    empty: int
    percentage_filtered: int


def _require_sequence(stations: Any) -> None:
    if not isinstance(stations, list | tuple):
        raise ValidationError(
            "Invalid stations: must be a list",
            "The station data is invalid.",
            {"type": type(stations).__name__},
        )


def _validate_user_location(user_location: Any) -> None:
    if user_location is None or not is_number(getattr(user_location, "latitude", None)):
        raise ValidationError(
            "Invalid user location: latitude is required",
            "Your GPS position is invalid.",
        )
    if not is_number(getattr(user_location, "longitude", None)):
        raise ValidationError(
            "Invalid user location: longitude is required",
            "Your GPS position is invalid.",
        )


def enrich_station_with_distance(
    station: Station, user_location: Coordinates
) -> StationWithDistance:
    """Attach the distance from ``user_location`` to ``station``."""
    return StationWithDistance.from_station(station, distance(user_location, station))


def filter_stations_by_distance(
    stations: Sequence[Station],
    user_location: Coordinates,
    max_distance: float = DEFAULT_MAX_DISTANCE,
) -> list[StationWithDistance]:
    """Stations within ``max_distance`` meters of the user, with their distance."""
    _require_sequence(stations)
    _validate_user_location(user_location)
    validate_positive(max_distance, "max_distance")

    enriched = [enrich_station_with_distance(station, user_location) for station in stations]
    return [station for station in enriched if station.distance <= max_distance]


def filter_stations_with_bikes(stations: Sequence[S]) -> list[S]:
    """Stations reporting at least one free bike."""
    _require_sequence(stations)
    return [
        station
        for station in stations
        if is_number(station.free_bikes) and station.free_bikes > 0
    ]


def filter_active_stations(stations: Sequence[S]) -> list[S]:
    """Stations not reported closed or inactive; a missing status counts as active."""
    _require_sequence(stations)
    return [
        station
        for station in stations
        if not station.status or station.status.lower() not in INACTIVE_STATUSES
    ]


def filter_stations(
    stations: Sequence[Station],
    user_location: Coordinates,
    *,
    max_distance: float = DEFAULT_MAX_DISTANCE,
    require_bikes: bool = True,
    only_active: bool = True,
) -> list[StationWithDistance]:
    """Run the full filtering pipeline."""
    _require_sequence(stations)
    if not stations:
        return []

    filtered = filter_stations_by_distance(stations, user_location, max_distance)
    logger.debug(f"{len(filtered)}/{len(stations)} stations within {max_distance}m")

    if require_bikes:
        filtered = filter_stations_with_bikes(filtered)
        logger.debug(f"{len(filtered)} stations with bikes")

    if only_active:
        filtered = filter_active_stations(filtered)
        logger.debug(f"{len(filtered)} active stations")

    return filtered


def get_filter_stats(
    all_stations: Sequence[Station], filtered_stations: Sequence[StationWithDistance]
) -> FilterStats:
    """Summarise a filtering pass."""
    total = len(all_stations)
    return FilterStats(
        total=total,
        filtered=len(filtered_stations),
        with_bikes=sum(1 for s in filtered_stations if (s.free_bikes or 0) > 0),
        empty=sum(1 for s in filtered_stations if s.free_bikes == 0),
        percentage_filtered=round(len(filtered_stations) / total * 100) if total else 0,
    )
