"""Tests for the RefreshState domain model."""

from datetime import UTC, datetime, timedelta

import pytest

from nearby_bikes.domain.models import DataFreshness, RefreshState, RefreshStatus
from nearby_bikes.domain.models.refresh_state import (
    can_perform_refresh,
    classify_freshness,
    elapsed_ms,
    to_utc_datetime,
)

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def ago(**kwargs: float) -> datetime:
    return NOW - timedelta(**kwargs)


def test_initial_state() -> None:
    """Given no data, when creating the initial state, then freshness is UNKNOWN and refresh allowed."""
    state = RefreshState.initial()

    assert state.status == RefreshStatus.IDLE
    assert state.freshness == DataFreshness.UNKNOWN
    assert state.last_update is None
    assert state.can_refresh is True
    assert state.next_auto_refresh is None
    assert state.should_auto_refresh() is False


@pytest.mark.parametrize(
    ("age_ms", "expected"),
    [
        (None, DataFreshness.UNKNOWN),
        (0, DataFreshness.FRESH),
        (119_999, DataFreshness.FRESH),
        (120_000, DataFreshness.RECENT),
        (599_999, DataFreshness.RECENT),
        (600_000, DataFreshness.STALE),
    ],
)
def test_classify_freshness_boundaries(age_ms: int | None, expected: DataFreshness) -> None:
    """Given an age, when classifying, then the bucket respects the 2 and 10 minute bounds."""
    assert classify_freshness(age_ms) == expected


def test_from_timestamp_fresh_data_counts_down() -> None:
    """Given data 30 s old, when computing state, then it is fresh with 30 s until auto-refresh."""
    state = RefreshState.from_timestamp(ago(seconds=30), now=NOW)

    assert state.freshness == DataFreshness.FRESH
    assert state.time_since_last_update == 30_000
    assert state.next_auto_refresh == 30_000
    assert state.is_fresh() is True
    assert state.should_auto_refresh() is False


def test_from_timestamp_overdue_data_should_auto_refresh() -> None:
    """Given data 5 min old, when computing state, then the countdown is 0 and auto-refresh is due."""
    state = RefreshState.from_timestamp(ago(minutes=5), now=NOW)

    assert state.freshness == DataFreshness.RECENT
    assert state.next_auto_refresh == 0
    assert state.should_auto_refresh() is True


def test_from_timestamp_stale_data_encourages_refresh() -> None:
    """Given data 15 min old, when computing state, then it is stale and a refresh is encouraged."""
    state = RefreshState.from_timestamp(ago(minutes=15), now=NOW)

    assert state.is_stale() is True
    assert state.should_encourage_refresh() is True


def test_from_timestamp_accepts_iso_strings() -> None:
    """Given an ISO-8601 timestamp string, when computing state, then it is parsed as UTC."""
    state = RefreshState.from_timestamp("2024-06-01T11:59:00+00:00", now=NOW)

    assert state.last_update == ago(minutes=1)
    assert state.time_since_last_update == 60_000


def test_future_timestamp_counts_as_zero_age() -> None:
    """Given a timestamp in the future, when computing state, then the age is clamped to 0."""
    state = RefreshState.from_timestamp(NOW + timedelta(minutes=1), now=NOW)

    assert state.time_since_last_update == 0
    assert state.freshness == DataFreshness.FRESH


def test_refreshing_state_blocks_refresh_and_countdown() -> None:
    """Given a refresh in flight, when computing state, then no manual refresh and no countdown."""
    state = RefreshState.refreshing(ago(minutes=15), now=NOW)

    assert state.is_refreshing is True
    assert state.can_refresh is False
    assert state.next_auto_refresh is None
    assert state.should_auto_refresh() is False
    assert state.should_encourage_refresh() is False


def test_from_timestamp_with_refreshing_status_has_no_countdown() -> None:
    """Given status REFRESHING, when computing from a timestamp, then next auto-refresh is None."""
    state = RefreshState.from_timestamp(ago(minutes=5), status=RefreshStatus.REFRESHING, now=NOW)

    assert state.is_refreshing is True
    assert state.next_auto_refresh is None
    assert state.can_refresh is False


def test_success_defaults_to_now() -> None:
    """Given a completed refresh, when creating the success state, then the data is brand new."""
    state = RefreshState.success(now=NOW)

    assert state.status == RefreshStatus.SUCCESS
    assert state.last_update == NOW
    assert state.time_since_last_update == 0
    assert state.next_auto_refresh == 60_000


def test_error_keeps_last_update_and_allows_retry() -> None:
    """Given a failed refresh, when creating the error state, then the old timestamp is kept."""
    state = RefreshState.error(ago(minutes=3), now=NOW)

    assert state.has_error() is True
    assert state.last_update == ago(minutes=3)
    assert state.can_refresh is True
    assert state.next_auto_refresh is None


def test_with_status_and_with_timestamp() -> None:
    """Given a state, when changing status or timestamp, then the other value is kept."""
    state = RefreshState.from_timestamp(ago(minutes=1), now=NOW)

    assert state.with_status(RefreshStatus.SUCCESS, now=NOW).last_update == ago(minutes=1)
    moved = state.with_timestamp(ago(minutes=20), now=NOW)
    assert moved.status == RefreshStatus.IDLE
    assert moved.is_stale() is True
    assert RefreshState.initial().with_status(RefreshStatus.SUCCESS) == RefreshState.initial()


def test_invariants_are_enforced() -> None:
    """Given negative durations or an inconsistent refreshing flag, when building, then ValueError is raised."""
    valid = RefreshState.initial()
    with pytest.raises(ValueError):
        RefreshState(**{**valid.__dict__, "time_since_last_update": -1})
    with pytest.raises(ValueError):
        RefreshState(**{**valid.__dict__, "next_auto_refresh": -5})
    with pytest.raises(ValueError):
        RefreshState(**{**valid.__dict__, "is_refreshing": True})


class TestCanPerformRefresh:
    """Tests for the manual refresh debounce rule."""

    def test_when_never_refreshed_then_allowed(self) -> None:
        """Given no previous manual refresh, when checking, then it is allowed."""
        assert can_perform_refresh(None, 1000, RefreshStatus.IDLE, now=NOW) is True

    def test_when_refreshing_then_refused(self) -> None:
        """Given a refresh in flight, when checking, then it is refused."""
        assert can_perform_refresh(None, 1000, RefreshStatus.REFRESHING, now=NOW) is False

    def test_when_inside_window_then_refused(self) -> None:
        """Given a manual refresh 500 ms ago, when checking with a 1 s window, then it is refused."""
        assert can_perform_refresh(ago(milliseconds=500), 1000, RefreshStatus.IDLE, now=NOW) is False

    def test_when_window_elapsed_then_allowed(self) -> None:
        """Given a manual refresh exactly 1 s ago, when checking, then it is allowed."""
        assert can_perform_refresh(ago(seconds=1), 1000, RefreshStatus.SUCCESS, now=NOW) is True


def test_to_utc_datetime_treats_naive_as_utc() -> None:
    """Given a naive datetime, when converting, then it is interpreted as UTC."""
    assert to_utc_datetime(datetime(2024, 6, 1, 12, 0, 0)) == NOW
    assert elapsed_ms(ago(seconds=2), NOW) == 2000
