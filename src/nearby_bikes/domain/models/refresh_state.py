"""Refresh state domain model.

Freshness buckets: FRESH below 2 minutes, RECENT below 10 minutes, STALE from
10 minutes on, UNKNOWN when nothing was ever fetched. Every transition returns a new
instance computed from the wall clock and the recorded last update.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

FRESH_THRESHOLD_MS = 2 * 60 * 1000
RECENT_THRESHOLD_MS = 10 * 60 * 1000
DEFAULT_AUTO_REFRESH_INTERVAL_MS = 60_000
DEFAULT_MIN_REFRESH_INTERVAL_MS = 1_000


class RefreshStatus(StrEnum):
    """Lifecycle of a data refresh."""

    IDLE = "IDLE"
    REFRESHING = "REFRESHING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class DataFreshness(StrEnum):
    """Staleness bucket of the displayed data."""

    FRESH = "FRESH"
    RECENT = "RECENT"
    STALE = "STALE"
    UNKNOWN = "UNKNOWN"


def to_utc_datetime(value: datetime | str) -> datetime:
    """Parse an ISO-8601 string or datetime; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value) if isinstance(value, str) else value
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def elapsed_ms(since: datetime, now: datetime | None = None) -> int:
    """Milliseconds elapsed since ``since``; a timestamp in the future counts as 0."""
    current = now if now is not None else datetime.now(UTC)
    delta = to_utc_datetime(current) - to_utc_datetime(since)
    return max(0, int(delta.total_seconds() * 1000))


def classify_freshness(age_ms: int | None) -> DataFreshness:
    """Map a data age to its freshness bucket."""
    if age_ms is None:
        return DataFreshness.UNKNOWN
    if age_ms < FRESH_THRESHOLD_MS:
        return DataFreshness.FRESH
    if age_ms < RECENT_THRESHOLD_MS:
        return DataFreshness.RECENT
    return DataFreshness.STALE


@dataclass(frozen=True)
class RefreshState:
    """Immutable snapshot of how stale the data is and what refreshes are allowed."""

    status: RefreshStatus
    last_update: datetime | None
    freshness: DataFreshness
    is_refreshing: bool
    can_refresh: bool
    time_since_last_update: int | None  # ms
    next_auto_refresh: int | None  # ms until the next auto-refresh

    def __post_init__(self) -> None:
        if self.time_since_last_update is not None and self.time_since_last_update < 0:
            raise ValueError("time_since_last_update cannot be negative")
        if self.next_auto_refresh is not None and self.next_auto_refresh < 0:
            raise ValueError("next_auto_refresh cannot be negative")
        if self.is_refreshing and self.status != RefreshStatus.REFRESHING:
            raise ValueError("is_refreshing requires status REFRESHING")

    @classmethod
    def initial(cls) -> RefreshState:
        """State before any data was fetched."""
        return cls(
            status=RefreshStatus.IDLE,
            last_update=None,
            freshness=DataFreshness.UNKNOWN,
            is_refreshing=False,
            can_refresh=True,
            time_since_last_update=None,
            next_auto_refresh=None,
        )

    @classmethod
    def from_timestamp(
        cls,
        last_update: datetime | str,
        *,
        status: RefreshStatus = RefreshStatus.IDLE,
        auto_refresh_interval_ms: int = DEFAULT_AUTO_REFRESH_INTERVAL_MS,
        min_refresh_interval_ms: int = DEFAULT_MIN_REFRESH_INTERVAL_MS,
        last_manual_refresh: datetime | None = None,
        now: datetime | None = None,
    ) -> RefreshState:
        """Recompute the state for ``last_update`` relative to the current time.

        Must be called again whenever the state is displayed since the age keeps growing.
        """
        current = to_utc_datetime(now) if now is not None else datetime.now(UTC)
        update_time = to_utc_datetime(last_update)
        age = elapsed_ms(update_time, current)
        refreshing = status == RefreshStatus.REFRESHING

        return cls(
            status=status,
            last_update=update_time,
            freshness=classify_freshness(age),
            is_refreshing=refreshing,
            can_refresh=can_perform_refresh(
                last_manual_refresh, min_refresh_interval_ms, status, now=current
            ),
            time_since_last_update=age,
            next_auto_refresh=None if refreshing else max(0, auto_refresh_interval_ms - age),
        )

    @classmethod
    def refreshing(cls, last_update: datetime | None, now: datetime | None = None) -> RefreshState:
        """A refresh is in flight: no manual refresh, no auto-refresh countdown."""
        age = elapsed_ms(last_update, now) if last_update is not None else None
        return cls(
            status=RefreshStatus.REFRESHING,
            last_update=to_utc_datetime(last_update) if last_update is not None else None,
            freshness=classify_freshness(age),
            is_refreshing=True,
            can_refresh=False,
            time_since_last_update=age,
            next_auto_refresh=None,
        )

    @classmethod
    def success(
        cls,
        timestamp: datetime | str | None = None,
        *,
        auto_refresh_interval_ms: int = DEFAULT_AUTO_REFRESH_INTERVAL_MS,
        now: datetime | None = None,
    ) -> RefreshState:
        """A refresh completed; ``timestamp`` defaults to now."""
        current = to_utc_datetime(now) if now is not None else datetime.now(UTC)
        return cls.from_timestamp(
            timestamp if timestamp is not None else current,
            status=RefreshStatus.SUCCESS,
            auto_refresh_interval_ms=auto_refresh_interval_ms,
            now=current,
        )

    @classmethod
    def error(cls, last_update: datetime | None, now: datetime | None = None) -> RefreshState:
        """A refresh failed; the last known-good timestamp is kept and a retry is allowed."""
        age = elapsed_ms(last_update, now) if last_update is not None else None
        return cls(
            status=RefreshStatus.ERROR,
            last_update=to_utc_datetime(last_update) if last_update is not None else None,
            freshness=classify_freshness(age),
            is_refreshing=False,
            can_refresh=True,
            time_since_last_update=age,
            next_auto_refresh=None,
        )

    def is_fresh(self) -> bool:
        return self.freshness == DataFreshness.FRESH

    def is_stale(self) -> bool:
        return self.freshness == DataFreshness.STALE

    def should_encourage_refresh(self) -> bool:
        """Stale data and nothing in flight."""
        return self.is_stale() and not self.is_refreshing

    def should_auto_refresh(self) -> bool:
        """The auto-refresh countdown has run out and nothing is in flight."""
        return (
            not self.is_refreshing
            and self.next_auto_refresh is not None
            and self.next_auto_refresh <= 0
        )

    def has_error(self) -> bool:
        return self.status == RefreshStatus.ERROR

    def with_status(self, status: RefreshStatus, now: datetime | None = None) -> RefreshState:
        """Same timestamp, new status."""
        if self.last_update is None:
            return RefreshState.initial()
        return RefreshState.from_timestamp(self.last_update, status=status, now=now)

    def with_timestamp(self, timestamp: datetime | str, now: datetime | None = None) -> RefreshState:
        """Same status, new timestamp."""
        return RefreshState.from_timestamp(timestamp, status=self.status, now=now)


def can_perform_refresh(
    last_manual_refresh: datetime | None,
    min_refresh_interval_ms: int,
    status: RefreshStatus,
    now: datetime | None = None,
) -> bool:
    """Debounce rule for manual refreshes."""
    if status == RefreshStatus.REFRESHING:
        return False
    if last_manual_refresh is None:
        return True
    return elapsed_ms(last_manual_refresh, now) >= min_refresh_interval_ms
