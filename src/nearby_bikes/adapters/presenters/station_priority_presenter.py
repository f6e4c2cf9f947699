"""Presenter for station priorities."""

from pydantic import BaseModel, ConfigDict

from nearby_bikes.adapters.presenters.formatters import format_distance
from nearby_bikes.domain.models.station_priority import (
    BikeAvailability,
    PriorityLevel,
    StationWithPriority,
)

_BADGE_TEXT = {
    PriorityLevel.OPTIMAL: "Best choice",
    PriorityLevel.WARNING: "Few bikes",
}

_BADGE_COLOR = {
    PriorityLevel.OPTIMAL: "green",
    PriorityLevel.GOOD: "blue",
    PriorityLevel.WARNING: "yellow",
    PriorityLevel.NORMAL: "gray",
}

_BIKE_COUNT_COLOR = {
    BikeAvailability.CRITICAL: "red",
    BikeAvailability.LOW: "yellow",
    BikeAvailability.MEDIUM: "gray",
    BikeAvailability.HIGH: "green",
    BikeAvailability.ABUNDANT: "bold green",
}


class StationPriorityViewModel(BaseModel):
    """Display values for one ranked station."""

    model_config = ConfigDict(frozen=True)

    station_id: str
    station_name: str
    distance_text: str
    free_bikes: int
    empty_slots: int | None
    badge_text: str | None
    badge_color: str
    bike_count_color: str
    recommendation_score: int
    level: PriorityLevel


class StationPriorityPresenter:
    """Formats a :class:`StationWithPriority` for display."""

    def __init__(self, item: StationWithPriority) -> None:
        self.item = item

    def badge_text(self) -> str | None:
        """Only optimal and warning stations carry a badge."""
        return _BADGE_TEXT.get(self.item.priority.level)

    def badge_color(self) -> str:
        return _BADGE_COLOR[self.item.priority.level]

    def bike_count_color(self) -> str:
        return _BIKE_COUNT_COLOR[self.item.priority.bike_availability]

    def to_view_model(self) -> StationPriorityViewModel:
        station = self.item.station
        return StationPriorityViewModel(
            station_id=station.id,
            station_name=station.name,
            distance_text=format_distance(station.distance),
            free_bikes=station.free_bikes or 0,
            empty_slots=station.empty_slots,
            badge_text=self.badge_text(),
            badge_color=self.badge_color(),
            bike_count_color=self.bike_count_color(),
            recommendation_score=self.item.priority.recommendation_score,
            level=self.item.priority.level,
        )
