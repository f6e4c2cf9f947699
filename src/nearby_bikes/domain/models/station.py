"""Station domain models."""

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class Station:
    """A docking point with a live count of bikes and free docks."""

    id: str
    name: str
    latitude: float
    longitude: float
    free_bikes: int | None
    empty_slots: int | None
    timestamp: str
    extra: dict[str, Any] = field(default_factory=dict)  # status, address, ... (operator-specific)

    @property
    def status(self) -> str | None:
        """Operational status reported by the operator, if any."""
        status = self.extra.get("status")
        return status if isinstance(status, str) else None


@dataclass(frozen=True)
class StationWithDistance(Station):
    """A station seen from one user position.

    The distance is only meaningful for the position it was computed from and is
    recomputed whenever that position changes.
    """

    distance: float = field(kw_only=True)

    @classmethod
    def from_station(cls, station: Station, distance: float) -> "StationWithDistance":
        """Attach a distance to an existing station."""
        values = {f.name: getattr(station, f.name) for f in fields(Station)}
        return cls(**values, distance=distance)
