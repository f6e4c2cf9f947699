"""Use case: find the stations worth walking to from a user position."""

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from nearby_bikes.application.collaborators import DEFAULT_TIMEOUT_SECONDS, call_collaborator
from nearby_bikes.application.network_locator import NetworkLocator
from nearby_bikes.application.station_filter import filter_stations
from nearby_bikes.application.station_ranker import sort_and_limit
from nearby_bikes.application.validators import (
    validate_coordinates,
    validate_network_id,
    validate_positive,
)
from nearby_bikes.domain.errors import ValidationError
from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.nearby_stations_result import StationSearchResult
from nearby_bikes.domain.models.network import NetworkDetails
from nearby_bikes.domain.models.search_options import SearchOptions

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from nearby_bikes.domain.ports import NetworkDirectory


def _validate_options(options: SearchOptions) -> None:
    validate_positive(options.max_distance, "max_distance")
    if (
        isinstance(options.max_stations, bool)
        or not isinstance(options.max_stations, int)
        or options.max_stations <= 0
    ):
        raise ValidationError(
            "Invalid max_stations: must be a positive integer",
            "The search settings are invalid.",
            {"max_stations": options.max_stations},
        )


class StationSearchService:
    """Runs one search: closest network, its stations, filtering, then ranking.

    The service keeps no state between searches; build one at start-up and share it.
    """

    def __init__(
        self,
        directory: "NetworkDirectory",
        options: SearchOptions | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        locator: NetworkLocator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            directory: Source of networks and stations.
            options: Default search options.
            timeout_seconds: Timeout applied to each directory call.
            locator: Network locator; built from ``directory`` when omitted.
        """
        self._directory = directory
        self._options = options or SearchOptions()
        self._timeout_seconds = timeout_seconds
        self._locator = locator or NetworkLocator(directory, timeout_seconds)

    @property
    def options(self) -> SearchOptions:
        return self._options

    async def _fetch_network_details(self, network_id: str) -> NetworkDetails:
        validate_network_id(network_id)
        return await call_collaborator(
            self._directory.fetch_network_details(network_id),
            f"fetch_network_details({network_id})",
            self._timeout_seconds,
        )

    async def search(
        self, user_location: Coordinates, options: SearchOptions | None = None
    ) -> StationSearchResult:
        """Search stations around ``user_location``.

        Raises:
            ValidationError: invalid position or options, before any network call.
            NotFoundError: no network available.
            NetworkError, RequestTimeoutError, UnknownError: directory failures.
        """
        opts = options or self._options
        validate_coordinates(user_location)
        _validate_options(opts)

        start = time.perf_counter()
        logger.info(
            f"Starting station search at ({user_location.latitude}, {user_location.longitude}), "
            f"max distance {opts.max_distance}m, max stations {opts.max_stations}"
        )

        logger.debug("Step 1/4: finding closest network")
        network = await self._locator.find_closest_network(user_location)

        logger.debug(f"Step 2/4: fetching stations of {network.id}")
        details = await self._fetch_network_details(network.id)
        total = len(details.stations)
        logger.info(f"Fetched {total} stations from {network.name}")

        logger.debug("Step 3/4: filtering stations")
        filtered = filter_stations(
            details.stations,
            user_location,
            max_distance=opts.max_distance,
            require_bikes=opts.require_bikes,
            only_active=opts.only_active,
        )
        logger.info(f"Stations filtered: {total} -> {len(filtered)}")

        logger.debug(f"Step 4/4: sorting by {opts.sort_by} and limiting to {opts.max_stations}")
        ranked = sort_and_limit(
            filtered, sort_by=opts.sort_by, order=opts.order, limit=opts.max_stations
        )

        duration_ms = round((time.perf_counter() - start) * 1000)
        result = StationSearchResult(
            stations=tuple(ranked),
            network_id=network.id,
            network_name=network.name,
            user_location=user_location,
            timestamp=datetime.now(UTC).isoformat(),
            total_stations=total,
            filtered_stations=len(ranked),
            search_duration_ms=duration_ms,
        )
        logger.info(
            f"Search completed: {len(ranked)} station(s) in {network.name} ({duration_ms}ms)"
        )
        return result
