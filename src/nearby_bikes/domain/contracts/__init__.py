"""Domain contracts."""

from nearby_bikes.domain.contracts.refresh_scheduler import (
    RefreshSchedulerProtocol,
    RefreshSource,
)

__all__ = ["RefreshSchedulerProtocol", "RefreshSource"]
