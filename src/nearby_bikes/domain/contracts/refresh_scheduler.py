"""Protocols for auto-refresh scheduling."""

from datetime import datetime
from typing import Protocol


class RefreshSource(Protocol):
    """What an auto-refresh schedule observes."""

    @property
    def last_update(self) -> datetime | None:
        """Time of the last successful fetch, or None."""
        ...

    @property
    def is_loading(self) -> bool:
        """Whether a fetch is currently in flight."""
        ...


class RefreshSchedulerProtocol(Protocol):
    """Protocol for a schedule that triggers refreshes."""

    async def start(self) -> None:
        """Start the schedule."""
        ...

    async def stop(self) -> None:
        """Stop the schedule; no callback runs afterwards."""
        ...

    async def restart(self) -> None:
        """Stop then start again."""
        ...
