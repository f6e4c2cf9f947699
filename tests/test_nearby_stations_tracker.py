"""Tests for the nearby stations tracker."""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from nearby_bikes.application.nearby_stations_tracker import NearbyStationsTracker
from nearby_bikes.application.station_search_service import StationSearchService
from nearby_bikes.domain.errors import NetworkError, UnknownError, ValidationError
from nearby_bikes.domain.models import (
    Coordinates,
    DataFreshness,
    PriorityLevel,
    RefreshStatus,
)
from tests.fakes import (
    PARIS,
    UnreachableDirectory,
    make_result,
    make_station_with_distance,
    north_of,
)


def make_service(*outcomes: object) -> MagicMock:
    """A search service returning (or raising) ``outcomes`` in order."""
    service = MagicMock()
    service.search = AsyncMock(side_effect=list(outcomes))
    return service


class GatedService:
    """Search service whose calls complete only when released, in any order."""

    def __init__(self) -> None:
        self.gates: dict[Coordinates, asyncio.Event] = {}

    async def search(self, location: Coordinates, options: object = None) -> object:
        gate = self.gates.setdefault(location, asyncio.Event())
        await gate.wait()
        return make_result(network_id=f"net-{location.latitude}", user_location=location)

    def release(self, location: Coordinates) -> None:
        self.gates.setdefault(location, asyncio.Event()).set()


@pytest.mark.asyncio
async def test_successful_search_publishes_result() -> None:
    """Given a successful search, when tracking, then result and last update are published."""
    result = make_result()
    tracker = NearbyStationsTracker(make_service(result))

    published = await tracker.search(PARIS)

    assert published is result
    assert tracker.result is result
    assert tracker.error is None
    assert tracker.is_loading is False
    assert tracker.last_update == datetime.fromisoformat(result.timestamp)
    assert tracker.refresh_state().status == RefreshStatus.SUCCESS


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_result() -> None:
    """Given a previous result, when the next refresh fails, then the result and last update are kept."""
    result = make_result()
    error = NetworkError("down", context={"status_code": 503})
    tracker = NearbyStationsTracker(make_service(result, error))
    await tracker.search(PARIS)
    last_update = tracker.last_update

    published = await tracker.refresh()

    assert published is None
    assert tracker.result is result
    assert tracker.last_update == last_update
    assert tracker.error is error
    state = tracker.refresh_state()
    assert state.has_error() is True
    assert state.last_update == last_update
    assert state.next_auto_refresh is None


@pytest.mark.asyncio
async def test_success_after_error_clears_error() -> None:
    """Given a failed search, when the next one succeeds, then the error is cleared."""
    tracker = NearbyStationsTracker(make_service(ValidationError("bad"), make_result()))

    await tracker.search(PARIS)
    assert isinstance(tracker.error, ValidationError)

    await tracker.search(PARIS)
    assert tracker.error is None


@pytest.mark.asyncio
async def test_last_started_search_wins() -> None:
    """Given two overlapping searches, when the older one finishes last, then its result is discarded."""
    service = GatedService()
    tracker = NearbyStationsTracker(service)  # type: ignore[arg-type]
    first_location = north_of(PARIS, 0.01)

    first = asyncio.create_task(tracker.search(first_location))
    await asyncio.sleep(0)
    second = asyncio.create_task(tracker.search(PARIS))
    await asyncio.sleep(0)

    service.release(PARIS)
    assert (await second) is not None
    service.release(first_location)
    assert (await first) is None

    assert tracker.result is not None
    assert tracker.result.user_location == PARIS
    assert tracker.user_location == PARIS
    assert tracker.is_loading is False


@pytest.mark.asyncio
async def test_refresh_before_search_does_nothing() -> None:
    """Given no previous search, when refreshing, then nothing is requested."""
    service = make_service()
    tracker = NearbyStationsTracker(service)

    assert await tracker.refresh() is None
    service.search.assert_not_awaited()


@pytest.mark.asyncio
async def test_manual_refresh_is_debounced() -> None:
    """Given a manual refresh, when another is requested inside the window, then it is rejected."""
    now = datetime.now(UTC)
    service = make_service(make_result(), make_result(), make_result())
    tracker = NearbyStationsTracker(service, min_refresh_interval_ms=1000)
    await tracker.search(PARIS)

    assert await tracker.request_manual_refresh(now) is True
    assert await tracker.request_manual_refresh(now + timedelta(milliseconds=200)) is False
    assert tracker.can_refresh(now + timedelta(milliseconds=200)) is False
    assert await tracker.request_manual_refresh(now + timedelta(milliseconds=1000)) is True
    assert service.search.await_count == 3


@pytest.mark.asyncio
async def test_refresh_state_is_recomputed_against_clock() -> None:
    """Given a result, when asking for the state later, then freshness follows the elapsed time."""
    fetched_at = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
    tracker = NearbyStationsTracker(make_service(make_result(timestamp=fetched_at)))
    await tracker.search(PARIS)

    assert tracker.refresh_state(fetched_at + timedelta(seconds=30)).freshness == DataFreshness.FRESH
    assert tracker.refresh_state(fetched_at + timedelta(minutes=11)).freshness == DataFreshness.STALE


def test_initial_refresh_state() -> None:
    """Given a new tracker, when asking for the state, then it is the initial state."""
    state = NearbyStationsTracker(make_service()).refresh_state()

    assert state.freshness == DataFreshness.UNKNOWN
    assert state.can_refresh is True


@pytest.mark.asyncio
async def test_prioritized_stations_and_best_choice() -> None:
    """Given a result, when prioritizing, then every station is scored and the best one is chosen."""
    stations = [
        make_station_with_distance("far", 180, 3),
        make_station_with_distance("close", 30, 8),
    ]
    tracker = NearbyStationsTracker(make_service(make_result(stations)))
    await tracker.search(PARIS)

    prioritized = tracker.prioritized_stations()
    best = tracker.best_choice()

    assert [item.station.id for item in prioritized] == ["far", "close"]
    assert best is not None
    assert best.station.id == "close"
    assert best.priority.level == PriorityLevel.OPTIMAL


@pytest.mark.asyncio
async def test_reset_forgets_everything() -> None:
    """Given a tracked result, when resetting, then result, error and location are cleared."""
    tracker = NearbyStationsTracker(make_service(make_result()))
    await tracker.search(PARIS)

    tracker.reset()

    assert tracker.result is None
    assert tracker.user_location is None
    assert tracker.last_update is None
    assert tracker.prioritized_stations() == []
    assert tracker.best_choice() is None


@pytest.mark.asyncio
async def test_missing_location_is_recorded_without_reaching_directory() -> None:
    """Given no position, when searching, then a ValidationError is recorded and loading ends."""
    tracker = NearbyStationsTracker(StationSearchService(UnreachableDirectory()))

    published = await tracker.search(None)  # type: ignore[arg-type]

    assert published is None
    assert isinstance(tracker.error, ValidationError)
    assert tracker.is_loading is False
    assert tracker.refresh_state().status == RefreshStatus.ERROR


@pytest.mark.asyncio
async def test_unexpected_failure_is_recorded_as_unknown_error() -> None:
    """Given a search raising an untyped exception, when tracking, then it becomes an UnknownError."""
    cause = TypeError("bad station payload")
    tracker = NearbyStationsTracker(make_service(cause))

    published = await tracker.search(PARIS)

    assert published is None
    assert isinstance(tracker.error, UnknownError)
    assert tracker.error.__cause__ is cause
    assert tracker.is_loading is False
    assert tracker.can_refresh() is True
    assert tracker.refresh_state().status == RefreshStatus.ERROR


@pytest.mark.asyncio
async def test_cancelled_search_clears_loading() -> None:
    """Given a search in flight, when it is cancelled, then loading ends and the state is settled."""
    service = GatedService()
    tracker = NearbyStationsTracker(service)  # type: ignore[arg-type]
    task = asyncio.create_task(tracker.search(PARIS))
    await asyncio.sleep(0)
    assert tracker.is_loading is True

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert tracker.is_loading is False
    assert tracker.error is None
    assert tracker.refresh_state().status == RefreshStatus.IDLE


@pytest.mark.asyncio
async def test_cancelled_refresh_keeps_previous_result() -> None:
    """Given a published result, when the following refresh is cancelled, then the result remains current."""
    result = make_result()
    tracker = NearbyStationsTracker(make_service(result, asyncio.CancelledError()))
    await tracker.search(PARIS)

    with pytest.raises(asyncio.CancelledError):
        await tracker.refresh()

    assert tracker.is_loading is False
    assert tracker.result is result
    assert tracker.refresh_state().status == RefreshStatus.SUCCESS
