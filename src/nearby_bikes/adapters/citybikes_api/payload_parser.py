"""Parsing of CityBikes JSON payloads into domain models."""

import logging
from typing import Any

from nearby_bikes.domain.errors import NetworkError
from nearby_bikes.domain.models.network import Network, NetworkDetails, NetworkLocation
from nearby_bikes.domain.models.station import Station

logger = logging.getLogger(__name__)


def _invalid_payload(reason: str) -> NetworkError:
    return NetworkError(
        f"Invalid API response format: {reason}",
        "The bike-share service returned unexpected data. Please try again later.",
    )


def _count(value: Any) -> int | None:
    """Bike and dock counts; anything that is not an integer is unknown."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def parse_location(data: Any) -> NetworkLocation:
    if not isinstance(data, dict):
        raise _invalid_payload("missing network location")
    try:
        return NetworkLocation(
            city=str(data.get("city", "")),
            country=str(data.get("country", "")),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise _invalid_payload(f"bad network location ({e})") from e


def parse_network(data: Any) -> Network:
    if not isinstance(data, dict) or "id" not in data:
        raise _invalid_payload("network without id")
    company = data.get("company") or []
    if isinstance(company, str):
        company = [company]
    return Network(
        id=str(data["id"]),
        name=str(data.get("name", data["id"])),
        location=parse_location(data.get("location")),
        company=[str(c) for c in company],
    )


def parse_networks(payload: Any) -> list[Network]:
    """Parse the ``GET /networks`` payload."""
    if not isinstance(payload, dict) or not isinstance(payload.get("networks"), list):
        raise _invalid_payload("missing networks array")
    return [parse_network(item) for item in payload["networks"]]


def parse_station(data: Any) -> Station:
    if not isinstance(data, dict):
        raise _invalid_payload("station is not an object")
    try:
        latitude = float(data["latitude"])
        longitude = float(data["longitude"])
    except (KeyError, TypeError, ValueError) as e:
        raise _invalid_payload(f"bad station coordinates ({e})") from e
    extra = data.get("extra")
    return Station(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        latitude=latitude,
        longitude=longitude,
        free_bikes=_count(data.get("free_bikes")),
        empty_slots=_count(data.get("empty_slots")),
        timestamp=str(data.get("timestamp", "")),
        extra=dict(extra) if isinstance(extra, dict) else {},
    )


def parse_network_details(payload: Any, network_id: str) -> NetworkDetails:
    """Parse the ``GET /networks/{id}`` payload; a missing station list is empty."""
    if not isinstance(payload, dict) or not isinstance(payload.get("network"), dict):
        raise _invalid_payload("missing network object")
    network = payload["network"]

    stations = network.get("stations")
    if not isinstance(stations, list):
        logger.warning(f"Network {network_id} has no stations")
        stations = []

    return NetworkDetails(
        id=str(network.get("id", network_id)),
        name=str(network.get("name", network_id)),
        location=parse_location(network.get("location")),
        stations=[parse_station(item) for item in stations],
    )
