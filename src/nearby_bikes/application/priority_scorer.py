"""Recommendation scoring for stations.

The score (0-100) adds a distance sub-score and a bike sub-score, both read from the
threshold tables of a :class:`PriorityConfig`. The priority level uses its own rules,
applied in order:

1. few bikes (at most ``bikes.low``) -> WARNING, however close the station is
2. very close and more than ``bikes.medium`` bikes -> OPTIMAL
3. close, or more than ``bikes.medium`` bikes -> GOOD
4. anything else -> NORMAL
"""

from collections.abc import Sequence

from nearby_bikes.domain.models.priority_config import (
    DEFAULT_PRIORITY_CONFIG,
    BikeAvailabilityThresholds,
    PriorityConfig,
    ScoreBand,
)
from nearby_bikes.domain.models.station import StationWithDistance
from nearby_bikes.domain.models.station_priority import (
    BikeAvailability,
    PriorityLevel,
    StationPriority,
    StationWithPriority,
)


def calculate_distance_score(
    distance: float, bands: Sequence[ScoreBand] = DEFAULT_PRIORITY_CONFIG.distance_scoring
) -> int:
    """Score of the first band whose threshold is above ``distance``."""
    for band in bands:
        if distance < band.threshold:
            return band.score
    return bands[-1].score


def calculate_bike_score(
    free_bikes: int, bands: Sequence[ScoreBand] = DEFAULT_PRIORITY_CONFIG.bike_scoring
) -> int:
    """Score of the last band whose threshold ``free_bikes`` reaches."""
    score = bands[0].score
    for band in bands:
        if free_bikes >= band.threshold:
            score = band.score
        else:
            break
    return score


def classify_bike_availability(
    free_bikes: int, thresholds: BikeAvailabilityThresholds = DEFAULT_PRIORITY_CONFIG.bikes
) -> BikeAvailability:
    if free_bikes <= thresholds.critical:
        return BikeAvailability.CRITICAL
    if free_bikes <= thresholds.low:
        return BikeAvailability.LOW
    if free_bikes <= thresholds.medium:
        return BikeAvailability.MEDIUM
    if free_bikes <= thresholds.high:
        return BikeAvailability.HIGH
    return BikeAvailability.ABUNDANT


def score_station(
    distance: float,
    free_bikes: int | None,
    config: PriorityConfig = DEFAULT_PRIORITY_CONFIG,
) -> StationPriority:
    """Compute the priority of a station from its distance and bike count.

    A missing bike count is scored as zero bikes.
    """
    bikes = free_bikes or 0
    is_very_close = distance < config.distance.very_close
    is_close = distance < config.distance.close
    has_good_bikes = bikes > config.bikes.medium

    if bikes <= config.bikes.low:
        level = PriorityLevel.WARNING
    elif is_very_close and has_good_bikes:
        level = PriorityLevel.OPTIMAL
    elif is_close or has_good_bikes:
        level = PriorityLevel.GOOD
    else:
        level = PriorityLevel.NORMAL

    return StationPriority(
        level=level,
        bike_availability=classify_bike_availability(bikes, config.bikes),
        is_very_close=is_very_close,
        has_good_availability=has_good_bikes,
        recommendation_score=calculate_distance_score(distance, config.distance_scoring)
        + calculate_bike_score(bikes, config.bike_scoring),
    )


def prioritize_stations(
    stations: Sequence[StationWithDistance], config: PriorityConfig = DEFAULT_PRIORITY_CONFIG
) -> list[StationWithPriority]:
    """Pair every station with its priority, keeping the input order."""
    return [
        StationWithPriority(
            station=station, priority=score_station(station.distance, station.free_bikes, config)
        )
        for station in stations
    ]


def sort_by_recommendation(
    stations: Sequence[StationWithDistance], config: PriorityConfig = DEFAULT_PRIORITY_CONFIG
) -> list[StationWithPriority]:
    """Stations by descending recommendation score; equal scores keep their order."""
    return sorted(
        prioritize_stations(stations, config),
        key=lambda item: item.priority.recommendation_score,
        reverse=True,
    )


def find_optimal_station(
    stations: Sequence[StationWithDistance], config: PriorityConfig = DEFAULT_PRIORITY_CONFIG
) -> StationWithPriority | None:
    """The single best choice: highest score, first one on ties."""
    best: StationWithPriority | None = None
    for item in prioritize_stations(stations, config):
        if best is None or item.priority.recommendation_score > best.priority.recommendation_score:
            best = item
    return best
