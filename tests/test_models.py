"""Tests for domain models."""

from dataclasses import FrozenInstanceError

import pytest

from nearby_bikes.domain.models import (
    Coordinates,
    NetworkWithDistance,
    SearchOptions,
    SortKey,
    SortOrder,
    StationWithDistance,
)
from tests.fakes import make_network, make_station


def test_coordinates_are_immutable() -> None:
    """Given coordinates, when assigning a field, then FrozenInstanceError is raised."""
    coords = Coordinates(latitude=48.8566, longitude=2.3522)

    with pytest.raises(FrozenInstanceError):
        coords.latitude = 0.0  # type: ignore[misc]


def test_station_status_comes_from_extra() -> None:
    """Given stations with and without a status, when reading it, then only strings are returned."""
    assert make_station(status="closed").status == "closed"
    assert make_station().status is None


def test_station_with_distance_copies_station_fields() -> None:
    """Given a station, when attaching a distance, then all fields are kept."""
    station = make_station("abc", name="Louvre - Rivoli", free_bikes=7, status="active")

    enriched = StationWithDistance.from_station(station, 120)

    assert enriched.id == "abc"
    assert enriched.name == "Louvre - Rivoli"
    assert enriched.free_bikes == 7
    assert enriched.status == "active"
    assert enriched.distance == 120


def test_network_with_distance_copies_network_fields() -> None:
    """Given a network, when attaching a distance, then all fields are kept."""
    network = make_network("velib")

    enriched = NetworkWithDistance.from_network(network, 500)

    assert enriched.id == "velib"
    assert enriched.location == network.location
    assert enriched.company == ["Smovengo"]
    assert enriched.distance == 500


def test_search_options_defaults() -> None:
    """Given no arguments, when creating SearchOptions, then defaults match the walking use case."""
    options = SearchOptions()

    assert options.max_distance == 200
    assert options.max_stations == 10
    assert options.require_bikes is True
    assert options.only_active is True
    assert options.sort_by == SortKey.DISTANCE
    assert options.order == SortOrder.ASC
