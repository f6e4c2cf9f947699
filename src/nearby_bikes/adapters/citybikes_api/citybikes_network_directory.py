"""CityBikes network directory adapter."""

import logging
import time
from typing import TYPE_CHECKING, Any

import aiohttp

from nearby_bikes.adapters.api_request_logger import log_api_request, log_api_response
from nearby_bikes.adapters.citybikes_api.constants import (
    CITYBIKES_API_URL,
    DEFAULT_HEADERS,
    NETWORKS_PATH,
)
from nearby_bikes.adapters.citybikes_api.payload_parser import (
    parse_network_details,
    parse_networks,
)
from nearby_bikes.application.validators import validate_network_id
from nearby_bikes.domain.errors import NetworkError, RequestTimeoutError
from nearby_bikes.domain.models.network import Network, NetworkDetails
from nearby_bikes.domain.ports.network_directory import NetworkDirectory

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


def _status_user_message(status: int) -> str:
    if status == 404:
        return "This bike-share network could not be found."
    if status == 429:
        return "Too many requests. Please wait a moment and try again."
    if status >= 500:
        return "The bike-share service is unavailable. Please try again later."
    return f"The bike-share service returned an error ({status}). Please try again later."


class CityBikesNetworkDirectory(NetworkDirectory):
    """Reads networks and stations from the CityBikes v2 API."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = CITYBIKES_API_URL,
        timeout_seconds: float = 5.0,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: Shared aiohttp session.
            base_url: API root, without trailing slash.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _raise_for_status(self, response: "ClientResponse", url: str) -> None:
        if response.status == 200:
            return
        body = await response.text()
        logger.error(f"CityBikes API returned status {response.status} for {url}: {body[:200]}")
        raise NetworkError(
            f"API error {response.status} on {url}",
            _status_user_message(response.status),
            {"status_code": response.status, "url": url},
        )

    async def _get_json(self, url: str) -> Any:
        log_api_request("GET", url)
        start = time.perf_counter()
        try:
            async with self._session.get(
                url, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                log_api_response(url, response.status, (time.perf_counter() - start) * 1000)
                await self._raise_for_status(response, url)
                return await response.json(content_type=None)
        except TimeoutError as e:
            raise RequestTimeoutError(
                f"API request timeout: {url}",
                context={"url": url, "timeout_seconds": self._timeout.total},
            ) from e
        except aiohttp.ContentTypeError as e:
            raise NetworkError(
                f"Invalid JSON from {url}: {e}",
                "The bike-share service returned unexpected data. Please try again later.",
                {"url": url},
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"Network error on {url}: {e}")
            raise NetworkError(f"Network error on {url}: {e}", context={"url": url}) from e

    async def fetch_all_networks(self) -> list[Network]:
        """Fetch every network listed by CityBikes."""
        logger.info("Fetching all bike networks")
        networks = parse_networks(await self._get_json(f"{self._base_url}{NETWORKS_PATH}"))
        logger.info(f"Fetched {len(networks)} networks")
        return networks

    async def fetch_network_details(self, network_id: str) -> NetworkDetails:
        """Fetch one network and its stations; the id is checked before any request."""
        validate_network_id(network_id)
        logger.info(f"Fetching network details for {network_id}")
        details = parse_network_details(
            await self._get_json(f"{self._base_url}{NETWORKS_PATH}/{network_id}"), network_id
        )
        logger.info(f"Fetched {len(details.stations)} stations for {network_id}")
        return details

    async def check_health(self) -> bool:
        """Whether the API answers at all."""
        url = f"{self._base_url}{NETWORKS_PATH}"
        try:
            async with self._session.head(url, timeout=self._timeout) as response:
                return response.status < 400
        except (TimeoutError, aiohttp.ClientError) as e:
            logger.warning(f"CityBikes API health check failed: {e}")
            return False

