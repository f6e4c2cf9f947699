"""Orders and truncates station lists."""

import locale
from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import Any

from nearby_bikes.domain.errors import ValidationError
from nearby_bikes.domain.models.search_options import SortKey, SortOrder
from nearby_bikes.domain.models.station import StationWithDistance

DEFAULT_LIMIT = 10
# Distance differences below this are not noticeable on foot; bike count decides instead.
PRIORITY_DISTANCE_THRESHOLD = 10


def _name_key(station: StationWithDistance) -> str:
    return locale.strxfrm(station.name.casefold())


_SORT_KEYS: dict[SortKey, Callable[[StationWithDistance], Any]] = {
    SortKey.DISTANCE: lambda s: s.distance,
    SortKey.BIKES: lambda s: s.free_bikes or 0,
    SortKey.SLOTS: lambda s: s.empty_slots or 0,
    SortKey.NAME: _name_key,
}


def _parse_key(key: SortKey | str) -> SortKey:
    error = ValidationError(f"Unknown sort key: {key}", "Unknown sort option.", {"sort_by": str(key)})
    try:
        parsed = SortKey(key)
    except ValueError as e:
        raise error from e
    if parsed not in _SORT_KEYS:
        raise error
    return parsed


def _parse_order(order: SortOrder | str) -> SortOrder:
    try:
        return SortOrder(order)
    except ValueError as e:
        raise ValidationError(
            f"Unknown sort order: {order}",
            "Unknown sort option.",
            {"order": str(order)},
        ) from e


def _require_sequence(stations: Any) -> None:
    if not isinstance(stations, list | tuple):
        raise ValidationError(
            "Invalid stations: must be a list",
            "The station data is invalid.",
            {"type": type(stations).__name__},
        )


def sort_stations(
    stations: Sequence[StationWithDistance],
    key: SortKey | str = SortKey.DISTANCE,
    order: SortOrder | str = SortOrder.ASC,
) -> list[StationWithDistance]:
    """Return a new list sorted by ``key``; equal keys keep their input order."""
    _require_sequence(stations)
    sort_key = _SORT_KEYS[_parse_key(key)]
    if _parse_order(order) == SortOrder.ASC:
        return sorted(stations, key=sort_key)
    # reverse=True keeps ties in input order
    return sorted(stations, key=sort_key, reverse=True)


def limit_stations(
    stations: Sequence[StationWithDistance], limit: int = DEFAULT_LIMIT
) -> list[StationWithDistance]:
    """First ``limit`` stations."""
    _require_sequence(stations)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValidationError(
            "Invalid limit: must be a positive integer",
            "The search settings are invalid.",
            {"limit": limit},
        )
    return list(stations[:limit])


def sort_and_limit(
    stations: Sequence[StationWithDistance],
    *,
    sort_by: SortKey | str = SortKey.DISTANCE,
    order: SortOrder | str = SortOrder.ASC,
    limit: int = DEFAULT_LIMIT,
) -> list[StationWithDistance]:
    """Sort then truncate; ``sort_by="priority"`` uses :func:`sort_stations_by_priority`."""
    _require_sequence(stations)
    if not stations:
        return []
    if sort_by == SortKey.PRIORITY:
        return limit_stations(sort_stations_by_priority(stations), limit)
    return limit_stations(sort_stations(stations, sort_by, order), limit)


def _compare_priority(a: StationWithDistance, b: StationWithDistance) -> int:
    distance_diff = a.distance - b.distance
    if abs(distance_diff) >= PRIORITY_DISTANCE_THRESHOLD:
        return -1 if distance_diff < 0 else 1
    return (b.free_bikes or 0) - (a.free_bikes or 0)


def sort_stations_by_priority(
    stations: Sequence[StationWithDistance],
) -> list[StationWithDistance]:
    """Closest first, but stations less than 10 m apart are ordered by most bikes."""
    _require_sequence(stations)
    return sorted(stations, key=cmp_to_key(_compare_priority))
