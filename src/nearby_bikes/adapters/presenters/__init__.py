"""Presenters producing display-ready view models."""

from nearby_bikes.adapters.presenters.formatters import (
    format_distance,
    format_clock_time,
    format_distance_verbose,
    format_time_ago,
)
from nearby_bikes.adapters.presenters.refresh_state_presenter import (
    RefreshStatePresenter,
    RefreshViewModel,
)
from nearby_bikes.adapters.presenters.station_priority_presenter import (
    StationPriorityPresenter,
    StationPriorityViewModel,
)

__all__ = [
    "RefreshStatePresenter",
    "RefreshViewModel",
    "StationPriorityPresenter",
    "StationPriorityViewModel",
    "format_clock_time",
    "format_distance",
    "format_distance_verbose",
    "format_time_ago",
]
