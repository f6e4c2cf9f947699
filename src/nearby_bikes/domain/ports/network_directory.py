"""Network directory port."""

from typing import Protocol

from nearby_bikes.domain.models.network import Network, NetworkDetails


class NetworkDirectory(Protocol):
    """Port for reading bike-share networks and their stations."""

    async def fetch_all_networks(self) -> list[Network]:
        """Return every known network."""
        ...

    async def fetch_network_details(self, network_id: str) -> NetworkDetails:
        """Return one network with its current stations."""
        ...
