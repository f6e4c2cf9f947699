"""Search options domain model."""

from dataclasses import dataclass
from enum import StrEnum


class SortKey(StrEnum):
    """Keys a station list can be sorted by."""

    DISTANCE = "distance"
    BIKES = "bikes"
    SLOTS = "slots"
    NAME = "name"
    PRIORITY = "priority"  # distance with bike-count tie-break, search only


class SortOrder(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SearchOptions:
    """Criteria applied to a network's stations during one search."""

    max_distance: float = 200
    max_stations: int = 10
    require_bikes: bool = True
    only_active: bool = True
    sort_by: SortKey = SortKey.DISTANCE
    order: SortOrder = SortOrder.ASC
