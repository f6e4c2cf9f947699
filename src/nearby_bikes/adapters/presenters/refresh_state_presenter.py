"""Presenter turning a RefreshState into display-ready values."""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict

from nearby_bikes.domain.models.refresh_state import (
    DEFAULT_AUTO_REFRESH_INTERVAL_MS,
    DataFreshness,
    RefreshState,
    RefreshStatus,
)

StatusIcon = Literal["spinner", "check", "warning", "clock"]

_FRESHNESS_TEXT = {
    DataFreshness.FRESH: "Data is up to date",
    DataFreshness.RECENT: "Data is recent",
    DataFreshness.STALE: "Data is outdated",
    DataFreshness.UNKNOWN: "No data",
}

_FRESHNESS_COLOR = {
    DataFreshness.FRESH: "green",
    DataFreshness.RECENT: "gray",
    DataFreshness.STALE: "yellow",
    DataFreshness.UNKNOWN: "bright_black",
}

STALE_ENCOURAGEMENT = "Data is outdated. Refresh to avoid surprises at the station."


class FreshnessBadge(BaseModel):
    """Badge shown next to outdated data."""

    model_config = ConfigDict(frozen=True)

    text: str
    color: str


class RefreshViewModel(BaseModel):
    """Everything a view needs to render the refresh indicator."""

    model_config = ConfigDict(frozen=True)

    is_refreshing: bool
    can_refresh: bool
    has_error: bool

    freshness_text: str
    freshness_color: str
    freshness_badge: FreshnessBadge | None

    relative_time: str | None
    time_until_refresh: str | None
    refresh_progress: float

    status_icon: StatusIcon
    encouragement_message: str | None

    status: RefreshStatus
    freshness: DataFreshness


class RefreshStatePresenter:
    """Formats a :class:`RefreshState` for display."""

    def __init__(
        self,
        state: RefreshState,
        auto_refresh_interval_ms: int = DEFAULT_AUTO_REFRESH_INTERVAL_MS,
    ) -> None:
        self.state = state
        self.auto_refresh_interval_ms = auto_refresh_interval_ms

    def freshness_text(self) -> str:
        return _FRESHNESS_TEXT[self.state.freshness]

    def freshness_color(self) -> str:
        return _FRESHNESS_COLOR[self.state.freshness]

    def freshness_badge(self) -> FreshnessBadge | None:
        """Only outdated data gets a badge."""
        if self.state.freshness == DataFreshness.STALE:
            return FreshnessBadge(text="Outdated", color="yellow")
        return None

    def relative_time(self) -> str | None:
        """Age of the data: 'a few seconds ago', 'N minute(s) ago' or 'N hour(s) ago'."""
        if self.state.last_update is None or self.state.time_since_last_update is None:
            return None

        seconds = self.state.time_since_last_update // 1000
        minutes = seconds // 60
        hours = minutes // 60

        if seconds < 60:
            return "a few seconds ago"
        if minutes < 60:
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
        return f"{hours} hour{'s' if hours > 1 else ''} ago"

    def time_until_refresh(self) -> str | None:
        if self.state.next_auto_refresh is None:
            return None
        seconds = math.ceil(self.state.next_auto_refresh / 1000)
        if seconds <= 0:
            return "Refreshing now..."
        return f"Next refresh in {seconds}s"

    def refresh_progress(self) -> float:
        """Percentage of the auto-refresh interval already elapsed, clamped to 0-100."""
        if self.state.next_auto_refresh is None or self.state.time_since_last_update is None:
            return 0.0
        progress = self.state.time_since_last_update / self.auto_refresh_interval_ms * 100
        return min(100.0, max(0.0, progress))

    def status_icon(self) -> StatusIcon:
        if self.state.is_refreshing:
            return "spinner"
        if self.state.freshness == DataFreshness.FRESH:
            return "check"
        if self.state.freshness == DataFreshness.STALE:
            return "warning"
        return "clock"

    def encouragement_message(self) -> str | None:
        if self.state.should_encourage_refresh():
            return STALE_ENCOURAGEMENT
        return None

    def to_view_model(self) -> RefreshViewModel:
        return RefreshViewModel(
            is_refreshing=self.state.is_refreshing,
            can_refresh=self.state.can_refresh,
            has_error=self.state.has_error(),
            freshness_text=self.freshness_text(),
            freshness_color=self.freshness_color(),
            freshness_badge=self.freshness_badge(),
            relative_time=self.relative_time(),
            time_until_refresh=self.time_until_refresh(),
            refresh_progress=self.refresh_progress(),
            status_icon=self.status_icon(),
            encouragement_message=self.encouragement_message(),
            status=self.state.status,
            freshness=self.state.freshness,
        )
