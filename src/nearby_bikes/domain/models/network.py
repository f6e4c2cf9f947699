"""Bike-share network domain models."""

from dataclasses import dataclass, field, fields

from nearby_bikes.domain.models.station import Station


@dataclass(frozen=True)
class NetworkLocation:
    """Where a network operates."""

    city: str
    country: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Network:
    """A bike-share operator or region as listed by the network directory."""

    id: str
    name: str
    location: NetworkLocation
    company: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NetworkWithDistance(Network):
    """A network together with its distance (meters) from one user position."""

    distance: float = field(kw_only=True)

    @classmethod
    def from_network(cls, network: Network, distance: float) -> "NetworkWithDistance":
        """Attach a distance to an existing network."""
        values = {f.name: getattr(network, f.name) for f in fields(Network)}
        return cls(**values, distance=distance)


@dataclass(frozen=True)
class NetworkDetails:
    """A network and its current station snapshot."""

    id: str
    name: str
    location: NetworkLocation
    stations: list[Station] = field(default_factory=list)
