"""Consumer-side controller for nearby-station searches.

Holds the latest result, the latest error and the refresh bookkeeping for one consumer
(a screen, a CLI session). Searches may overlap: only the most recently started one is
allowed to publish its outcome, older responses are dropped when they arrive.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from nearby_bikes.application.manual_refresh_gate import ManualRefreshGate
from nearby_bikes.application.priority_scorer import find_optimal_station, prioritize_stations
from nearby_bikes.domain.errors import BikeFinderError, UnknownError
from nearby_bikes.domain.models.priority_config import DEFAULT_PRIORITY_CONFIG, PriorityConfig
from nearby_bikes.domain.models.refresh_state import (
    DEFAULT_AUTO_REFRESH_INTERVAL_MS,
    DEFAULT_MIN_REFRESH_INTERVAL_MS,
    RefreshState,
    RefreshStatus,
    to_utc_datetime,
)

if TYPE_CHECKING:
    from nearby_bikes.application.station_search_service import StationSearchService
    from nearby_bikes.domain.models.coordinates import Coordinates
    from nearby_bikes.domain.models.nearby_stations_result import StationSearchResult
    from nearby_bikes.domain.models.search_options import SearchOptions
    from nearby_bikes.domain.models.station_priority import StationWithPriority

logger = logging.getLogger(__name__)


class NearbyStationsTracker:
    """Tracks searches for one consumer with last-write-wins semantics."""

    def __init__(
        self,
        service: StationSearchService,
        options: SearchOptions | None = None,
        *,
        priority_config: PriorityConfig = DEFAULT_PRIORITY_CONFIG,
        auto_refresh_interval_ms: int = DEFAULT_AUTO_REFRESH_INTERVAL_MS,
        min_refresh_interval_ms: int = DEFAULT_MIN_REFRESH_INTERVAL_MS,
    ) -> None:
        self._service = service
        self._options = options
        self._priority_config = priority_config
        self.auto_refresh_interval_ms = auto_refresh_interval_ms
        self._gate = ManualRefreshGate(min_refresh_interval_ms)

        self._generation = 0
        self._is_loading = False
        self._status = RefreshStatus.IDLE
        self._user_location: Coordinates | None = None
        self._result: StationSearchResult | None = None
        self._error: BikeFinderError | None = None
        self._last_update: datetime | None = None

    @property
    def result(self) -> StationSearchResult | None:
        return self._result

    @property
    def error(self) -> BikeFinderError | None:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def last_update(self) -> datetime | None:
        return self._last_update

    @property
    def user_location(self) -> Coordinates | None:
        return self._user_location

    async def search(self, user_location: Coordinates) -> StationSearchResult | None:
        """Search around ``user_location`` and publish the outcome if still current.

        Failures are recorded in :attr:`error`; the previous result and last update are
        left untouched. Unexpected exceptions are recorded as ``UnknownError``. When the
        search is cancelled the loading flag is still cleared before the cancellation
        propagates. Returns the published result, or None.
        """
        self._generation += 1
        generation = self._generation
        self._user_location = user_location
        self._is_loading = True
        self._status = RefreshStatus.REFRESHING

        try:
            result = await self._service.search(user_location, self._options)
        except BikeFinderError as e:
            self._record_failure(generation, e)
            return None
        except Exception as e:
            error = UnknownError(f"Search failed: {e}", context={"operation": "search"})
            error.__cause__ = e
            self._record_failure(generation, error)
            return None
        else:
            return self._publish(generation, result)
        finally:
            if generation == self._generation and self._is_loading:
                logger.warning(f"Search #{generation} ended without an outcome")
                self._is_loading = False
                self._status = self._settled_status()

    def _settled_status(self) -> RefreshStatus:
        if self._error is not None:
            return RefreshStatus.ERROR
        if self._last_update is not None:
            return RefreshStatus.SUCCESS
        return RefreshStatus.IDLE

    def _record_failure(self, generation: int, error: BikeFinderError) -> None:
        if generation != self._generation:
            logger.warning(f"Discarding failure of superseded search #{generation}")
            return
        logger.error(f"Search #{generation} failed: {error.kind} - {error.message}")
        self._error = error
        self._status = RefreshStatus.ERROR
        self._is_loading = False

    def _publish(self, generation: int, result: StationSearchResult) -> StationSearchResult | None:
        if generation != self._generation:
            logger.warning(f"Discarding result of superseded search #{generation}")
            return None
        self._result = result
        self._error = None
        self._last_update = to_utc_datetime(result.timestamp)
        self._status = RefreshStatus.SUCCESS
        self._is_loading = False
        return result

    async def refresh(self) -> StationSearchResult | None:
        """Repeat the last search at the same position."""
        if self._user_location is None:
            logger.warning("Refresh requested before any search, ignoring")
            return None
        return await self.search(self._user_location)

    def can_refresh(self, now: datetime | None = None) -> bool:
        """Whether a manual refresh would currently be admitted."""
        return not self._is_loading and self._gate.is_open(now)

    async def request_manual_refresh(self, now: datetime | None = None) -> bool:
        """Refresh on user request; returns False when rejected by the debounce rule."""
        if self._is_loading or self._user_location is None:
            return False
        if not self._gate.try_acquire(now):
            return False
        await self.refresh()
        return True

    def refresh_state(self, now: datetime | None = None) -> RefreshState:
        """Current refresh state, recomputed against the clock."""
        if self._is_loading:
            return RefreshState.refreshing(self._last_update, now)
        if self._status == RefreshStatus.ERROR:
            return RefreshState.error(self._last_update, now)
        if self._last_update is None:
            return RefreshState.initial()
        return RefreshState.from_timestamp(
            self._last_update,
            status=self._status,
            auto_refresh_interval_ms=self.auto_refresh_interval_ms,
            min_refresh_interval_ms=self._gate.min_refresh_interval_ms,
            last_manual_refresh=self._gate.last_attempt,
            now=now,
        )

    def prioritized_stations(self) -> list[StationWithPriority]:
        """Displayed stations with their priority, in result order."""
        if self._result is None:
            return []
        return prioritize_stations(self._result.stations, self._priority_config)

    def best_choice(self) -> StationWithPriority | None:
        """The recommended station of the current result."""
        if self._result is None:
            return None
        return find_optimal_station(self._result.stations, self._priority_config)

    def reset(self) -> None:
        """Forget everything; searches still in flight will be discarded."""
        self._generation += 1
        self._is_loading = False
        self._status = RefreshStatus.IDLE
        self._user_location = None
        self._result = None
        self._error = None
        self._last_update = None
        self._gate.reset()
        logger.debug("Nearby stations state reset")
