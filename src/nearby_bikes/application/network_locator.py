"""Finds the bike-share network closest to a user."""

import logging
import time
from typing import TYPE_CHECKING

from nearby_bikes.application.collaborators import DEFAULT_TIMEOUT_SECONDS, call_collaborator
from nearby_bikes.application.geodesy import distance
from nearby_bikes.application.validators import validate_coordinates, validate_positive
from nearby_bikes.domain.errors import BikeFinderError, NotFoundError, ValidationError
from nearby_bikes.domain.models.coordinates import Coordinates
from nearby_bikes.domain.models.network import Network, NetworkWithDistance

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from nearby_bikes.domain.ports import NetworkDirectory


class NetworkLocator:
    """Locates networks by distance from a user position."""

    def __init__(
        self,
        directory: "NetworkDirectory",
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with a network directory.

        Args:
            directory: Source of the network list.
            timeout_seconds: Timeout applied to each directory call.
        """
        self._directory = directory
        self._timeout_seconds = timeout_seconds

    async def _fetch_networks(self) -> list[Network]:
        return await call_collaborator(
            self._directory.fetch_all_networks(), "fetch_all_networks", self._timeout_seconds
        )

    @staticmethod
    def _with_distances(
        networks: list[Network], user_location: Coordinates
    ) -> list[NetworkWithDistance]:
        return [
            NetworkWithDistance.from_network(network, distance(user_location, network.location))
            for network in networks
        ]

    async def find_closest_network(
        self, user_location: Coordinates, max_distance: float | None = None
    ) -> NetworkWithDistance:
        """Return the network closest to ``user_location``.

        Ties go to the network listed first. Raises ``NotFoundError`` when the directory is
        empty or when no network lies within ``max_distance`` meters.
        """
        validate_coordinates(user_location)
        if max_distance is not None:
            validate_positive(max_distance, "max_distance")

        logger.info(
            f"Finding closest bike network for ({user_location.latitude}, "
            f"{user_location.longitude}), max distance: {max_distance}"
        )
        start = time.perf_counter()

        networks = await self._fetch_networks()
        if not networks:
            raise NotFoundError(
                "No bike networks available from the directory",
                "No bike-share network is available right now.",
            )

        logger.debug(f"Calculating distances to {len(networks)} networks")
        networks_with_distance = self._with_distances(networks, user_location)

        candidates = networks_with_distance
        if max_distance is not None:
            candidates = [n for n in networks_with_distance if n.distance <= max_distance]
            if not candidates:
                closest_distance = min(n.distance for n in networks_with_distance)
                logger.warning(
                    f"No networks within {max_distance}m, closest is {closest_distance}m away"
                )
                raise NotFoundError(
                    f"No bike networks within {max_distance}m (closest is {closest_distance}m away)",
                    f"No bike-share network found within {max_distance}m of your location.",
                    {"max_distance": max_distance, "closest_distance": closest_distance},
                )

        closest = min(candidates, key=lambda n: n.distance)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Closest network: {closest.name} ({closest.id}) in {closest.location.city}, "
            f"{closest.location.country}, {closest.distance}m away ({duration_ms:.0f}ms)"
        )
        return closest

    async def find_nearest_networks(
        self,
        user_location: Coordinates,
        count: int = 5,
        max_distance: float | None = None,
    ) -> list[NetworkWithDistance]:
        """Return up to ``count`` networks sorted by ascending distance."""
        validate_coordinates(user_location)
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValidationError(
                "Invalid count: must be a positive integer",
                "The search settings are invalid.",
                {"count": count},
            )
        if max_distance is not None:
            validate_positive(max_distance, "max_distance")

        logger.info(f"Finding {count} nearest bike networks")
        networks_with_distance = self._with_distances(await self._fetch_networks(), user_location)

        if max_distance is not None:
            networks_with_distance = [
                n for n in networks_with_distance if n.distance <= max_distance
            ]

        nearest = sorted(networks_with_distance, key=lambda n: n.distance)[:count]
        logger.info(
            "Nearest networks: "
            + ", ".join(f"{n.name} ({n.distance}m)" for n in nearest)
        )
        return nearest

    async def network_exists(self, network_id: str) -> bool:
        """Whether ``network_id`` is listed by the directory; lookup failures count as absent."""
        try:
            networks = await self._fetch_networks()
        except BikeFinderError as e:
            logger.error(f"Failed to check network existence for {network_id}: {e.message}")
            return False
        return any(network.id == network_id for network in networks)
