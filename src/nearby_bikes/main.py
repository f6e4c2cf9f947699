"""Application wiring and logging setup for nearby bikes."""

import logging
import sys

import aiohttp

from nearby_bikes.adapters.citybikes_api import CityBikesNetworkDirectory
from nearby_bikes.adapters.config import AppConfig
from nearby_bikes.application.nearby_stations_tracker import NearbyStationsTracker
from nearby_bikes.application.network_locator import NetworkLocator
from nearby_bikes.application.station_search_service import StationSearchService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging to stderr so stdout stays free for command output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def load_config() -> AppConfig:
    """Read settings from the environment, then apply the optional TOML file."""
    config = AppConfig()
    config.load_toml()
    return config


def create_directory(config: AppConfig, session: aiohttp.ClientSession) -> CityBikesNetworkDirectory:
    return CityBikesNetworkDirectory(
        session,
        base_url=config.citybikes_api_url,
        timeout_seconds=config.api_timeout_seconds,
    )


def create_locator(config: AppConfig, session: aiohttp.ClientSession) -> NetworkLocator:
    return NetworkLocator(create_directory(config, session), config.api_timeout_seconds)


def create_search_service(
    config: AppConfig, session: aiohttp.ClientSession
) -> StationSearchService:
    """Build the search use case on top of the CityBikes directory."""
    directory = create_directory(config, session)
    logger.debug(f"Using CityBikes API at {config.citybikes_api_url}")
    return StationSearchService(
        directory,
        options=config.search_options(),
        timeout_seconds=config.api_timeout_seconds,
    )


def create_tracker(config: AppConfig, session: aiohttp.ClientSession) -> NearbyStationsTracker:
    """Build a tracker with the configured refresh intervals and priority thresholds."""
    return NearbyStationsTracker(
        create_search_service(config, session),
        config.search_options(),
        priority_config=config.priority_config(),
        auto_refresh_interval_ms=config.auto_refresh_interval_ms,
        min_refresh_interval_ms=config.min_refresh_interval_ms,
    )
