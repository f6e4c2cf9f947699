"""Station priority domain model."""

from dataclasses import dataclass
from enum import StrEnum

from nearby_bikes.domain.models.station import StationWithDistance


class PriorityLevel(StrEnum):
    """How strongly a station should be highlighted."""

    OPTIMAL = "optimal"
    GOOD = "good"
    WARNING = "warning"
    NORMAL = "normal"


class BikeAvailability(StrEnum):
    """Bike count tier, used for display only."""

    CRITICAL = "critical"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ABUNDANT = "abundant"


@dataclass(frozen=True)
class StationPriority:
    """Recommendation derived from a station's distance and bike count."""

    level: PriorityLevel
    bike_availability: BikeAvailability
    is_very_close: bool
    has_good_availability: bool
    recommendation_score: int

    def __post_init__(self) -> None:
        if not 0 <= self.recommendation_score <= 100:
            raise ValueError(
                f"recommendation_score must be between 0 and 100, got {self.recommendation_score}"
            )

    def is_optimal(self) -> bool:
        """Whether this station is the kind of pick to put forward."""
        return self.level == PriorityLevel.OPTIMAL

    def needs_warning(self) -> bool:
        """Whether the user should be warned about low availability."""
        return self.level == PriorityLevel.WARNING


@dataclass(frozen=True)
class StationWithPriority:
    """A station paired with its priority."""

    station: StationWithDistance
    priority: StationPriority
