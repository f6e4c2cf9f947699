"""Tests for the station filtering pipeline."""

import pytest

from nearby_bikes.application.station_filter import (
    enrich_station_with_distance,
    filter_active_stations,
    filter_stations,
    filter_stations_by_distance,
    filter_stations_with_bikes,
    get_filter_stats,
)
from nearby_bikes.domain.errors import ValidationError
from nearby_bikes.domain.models import Coordinates
from tests.fakes import PARIS, make_station, make_station_with_distance, north_of


@pytest.fixture
def stations() -> list:
    """Stations north of central Paris at about 44 m, 100 m, 156 m and 300 m."""
    return [
        make_station("a", at=north_of(PARIS, 0.0004), free_bikes=5),
        make_station("b", at=north_of(PARIS, 0.0009), free_bikes=0),
        make_station("c", at=north_of(PARIS, 0.0014), free_bikes=3, status="closed"),
        make_station("d", at=north_of(PARIS, 0.0027), free_bikes=8),
    ]


def test_enrich_station_with_distance_keeps_fields() -> None:
    """Given a station, when enriching, then every field is kept and the distance is added."""
    station = make_station("a", at=north_of(PARIS, 0.0004), status="active")

    enriched = enrich_station_with_distance(station, PARIS)

    assert enriched.id == "a"
    assert enriched.free_bikes == station.free_bikes
    assert enriched.extra == {"status": "active"}
    assert enriched.distance == 44


def test_filter_by_distance_keeps_stations_within_radius(stations: list) -> None:
    """Given stations at several distances, when filtering at 200 m, then farther ones are dropped."""
    result = filter_stations_by_distance(stations, PARIS, 200)

    assert [s.id for s in result] == ["a", "b", "c"]
    assert [s.distance for s in result] == [44, 100, 156]


def test_filter_by_distance_includes_boundary(stations: list) -> None:
    """Given a station exactly at max distance, when filtering, then it is kept."""
    result = filter_stations_by_distance(stations, PARIS, 100)

    assert [s.id for s in result] == ["a", "b"]


def test_filter_by_distance_rejects_invalid_inputs(stations: list) -> None:
    """Given a non-positive radius, a missing location or a non-list, when filtering, then ValidationError is raised."""
    with pytest.raises(ValidationError):
        filter_stations_by_distance(stations, PARIS, 0)
    with pytest.raises(ValidationError):
        filter_stations_by_distance(stations, None, 200)  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        filter_stations_by_distance("stations", PARIS, 200)  # type: ignore[arg-type]


def test_filter_with_bikes_drops_zero_and_unknown_counts() -> None:
    """Given stations with 0, None and 2 bikes, when filtering, then only the positive count remains."""
    items = [
        make_station_with_distance("zero", free_bikes=0),
        make_station_with_distance("unknown", free_bikes=None),
        make_station_with_distance("two", free_bikes=2),
    ]

    assert [s.id for s in filter_stations_with_bikes(items)] == ["two"]


def test_filter_active_drops_closed_and_inactive_case_insensitive() -> None:
    """Given statuses closed, INACTIVE, active and none, when filtering, then closed/inactive are dropped."""
    items = [
        make_station("closed", status="closed"),
        make_station("inactive", status="INACTIVE"),
        make_station("active", status="active"),
        make_station("none"),
    ]

    assert [s.id for s in filter_active_stations(items)] == ["active", "none"]


def test_filter_stations_runs_all_stages(stations: list) -> None:
    """Given default options, when filtering, then distance, bikes and status filters all apply."""
    result = filter_stations(stations, PARIS, max_distance=200)

    assert [s.id for s in result] == ["a"]


def test_filter_stations_with_stages_disabled(stations: list) -> None:
    """Given bikes and status filters disabled, when filtering, then only distance applies."""
    result = filter_stations(
        stations, PARIS, max_distance=200, require_bikes=False, only_active=False
    )

    assert [s.id for s in result] == ["a", "b", "c"]


def test_filter_stations_of_empty_list_is_empty() -> None:
    """Given no stations, when filtering, then an empty list is returned without validation."""
    assert filter_stations([], Coordinates(latitude=0.0, longitude=0.0)) == []


def test_get_filter_stats(stations: list) -> None:
    """Given a filtering pass, when summarising, then the counts and percentage are reported."""
    filtered = filter_stations(
        stations, PARIS, max_distance=200, require_bikes=False, only_active=False
    )

    stats = get_filter_stats(stations, filtered)

    assert stats.total == 4
    assert stats.filtered == 3
    assert stats.with_bikes == 2
    assert stats.empty == 1
    assert stats.percentage_filtered == 75


def test_get_filter_stats_of_empty_input() -> None:
    """Given no stations, when summarising, then the percentage is 0."""
    assert get_filter_stats([], []).percentage_filtered == 0
