"""Threshold tables used to score and classify stations.

Tables are plain data: the scoring algorithm stays the same whichever preset is used.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class DistanceThresholds:
    """Distance limits in meters."""

    very_close: float
    close: float
    search_radius: float


@dataclass(frozen=True)
class BikeAvailabilityThresholds:
    """Upper bounds (inclusive) of the bike availability tiers."""

    critical: int
    low: int
    medium: int
    high: int


@dataclass(frozen=True)
class ScoreBand:
    """One row of a score table."""

    threshold: float
    score: int


@dataclass(frozen=True)
class PriorityConfig:
    """Complete set of thresholds for station prioritisation.

    ``distance_scoring`` bands are matched with ``distance < threshold`` (first match wins),
    ``bike_scoring`` bands with ``bikes >= threshold`` (last match wins).
    """

    distance: DistanceThresholds
    bikes: BikeAvailabilityThresholds
    distance_scoring: tuple[ScoreBand, ...]
    bike_scoring: tuple[ScoreBand, ...]


DEFAULT_PRIORITY_CONFIG = PriorityConfig(
    distance=DistanceThresholds(very_close=50, close=100, search_radius=200),
    bikes=BikeAvailabilityThresholds(critical=1, low=2, medium=5, high=10),
    distance_scoring=(
        ScoreBand(threshold=50, score=50),
        ScoreBand(threshold=100, score=40),
        ScoreBand(threshold=150, score=30),
        ScoreBand(threshold=200, score=20),
        ScoreBand(threshold=math.inf, score=10),
    ),
    bike_scoring=(
        ScoreBand(threshold=0, score=10),
        ScoreBand(threshold=2, score=20),
        ScoreBand(threshold=3, score=30),
        ScoreBand(threshold=6, score=40),
        ScoreBand(threshold=11, score=50),
    ),
)

# Dense city centres: shorter walks expected, more bikes required.
URBAN_PRIORITY_CONFIG = PriorityConfig(
    distance=DistanceThresholds(very_close=30, close=75, search_radius=150),
    bikes=BikeAvailabilityThresholds(critical=2, low=3, medium=7, high=12),
    distance_scoring=(
        ScoreBand(threshold=30, score=50),
        ScoreBand(threshold=75, score=40),
        ScoreBand(threshold=100, score=30),
        ScoreBand(threshold=150, score=20),
        ScoreBand(threshold=math.inf, score=10),
    ),
    bike_scoring=(
        ScoreBand(threshold=0, score=10),
        ScoreBand(threshold=3, score=20),
        ScoreBand(threshold=5, score=30),
        ScoreBand(threshold=8, score=40),
        ScoreBand(threshold=13, score=50),
    ),
)

SUBURBAN_PRIORITY_CONFIG = PriorityConfig(
    distance=DistanceThresholds(very_close=100, close=200, search_radius=500),
    bikes=BikeAvailabilityThresholds(critical=1, low=2, medium=4, high=8),
    distance_scoring=(
        ScoreBand(threshold=100, score=50),
        ScoreBand(threshold=200, score=40),
        ScoreBand(threshold=300, score=30),
        ScoreBand(threshold=500, score=20),
        ScoreBand(threshold=math.inf, score=10),
    ),
    bike_scoring=(
        ScoreBand(threshold=0, score=10),
        ScoreBand(threshold=2, score=20),
        ScoreBand(threshold=3, score=30),
        ScoreBand(threshold=5, score=40),
        ScoreBand(threshold=9, score=50),
    ),
)

PRIORITY_PRESETS: dict[str, PriorityConfig] = {
    "default": DEFAULT_PRIORITY_CONFIG,
    "urban": URBAN_PRIORITY_CONFIG,
    "suburban": SUBURBAN_PRIORITY_CONFIG,
}
