"""Debounce for manual refresh requests."""

import logging
from datetime import UTC, datetime

from nearby_bikes.domain.models.refresh_state import (
    DEFAULT_MIN_REFRESH_INTERVAL_MS,
    elapsed_ms,
)

logger = logging.getLogger(__name__)


class ManualRefreshGate:
    """Admits a manual refresh at most once per ``min_refresh_interval_ms``.

    Rejected requests are neither queued nor recorded; the caller decides how to tell
    the user to wait.
    """

    def __init__(self, min_refresh_interval_ms: int = DEFAULT_MIN_REFRESH_INTERVAL_MS) -> None:
        self.min_refresh_interval_ms = min_refresh_interval_ms
        self._last_attempt: datetime | None = None

    @property
    def last_attempt(self) -> datetime | None:
        return self._last_attempt

    def is_open(self, now: datetime | None = None) -> bool:
        """Whether a request made at ``now`` would be admitted."""
        if self._last_attempt is None:
            return True
        return elapsed_ms(self._last_attempt, now) >= self.min_refresh_interval_ms

    def try_acquire(self, now: datetime | None = None) -> bool:
        """Admit and record the request, or reject it inside the debounce window."""
        current = now or datetime.now(UTC)
        if not self.is_open(current):
            logger.debug("Manual refresh rejected (debounce window)")
            return False
        self._last_attempt = current
        return True

    def reset(self) -> None:
        self._last_attempt = None
