"""Refresh scheduling adapters."""

from nearby_bikes.adapters.scheduling.auto_refresh_scheduler import AutoRefreshScheduler

__all__ = ["AutoRefreshScheduler"]
