"""Input validation run before any computation or network call."""

import math
import re
from typing import Any

from nearby_bikes.domain.errors import ValidationError
from nearby_bikes.domain.models.coordinates import BoundingBox, Coordinates

NETWORK_ID_PATTERN = re.compile(r"[A-Za-z0-9-]+")


def is_number(value: Any) -> bool:
    """True for real, non-NaN numbers (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not math.isnan(value)


def validate_coordinates(coords: Any) -> None:
    """Raise ``ValidationError`` unless ``coords`` is a valid WGS84 position."""
    if coords is None:
        raise ValidationError(
            "Coordinates object is missing",
            "Your GPS position is missing.",
        )

    latitude = getattr(coords, "latitude", None)
    if not is_number(latitude):
        raise ValidationError(
            "Invalid latitude: not a number",
            "Invalid latitude.",
            {"latitude": latitude},
        )
    if not -90 <= latitude <= 90:
        raise ValidationError(
            f"Invalid latitude: {latitude} (must be between -90 and 90)",
            "Latitude out of range (-90 to 90).",
            {"latitude": latitude},
        )

    longitude = getattr(coords, "longitude", None)
    if not is_number(longitude):
        raise ValidationError(
            "Invalid longitude: not a number",
            "Invalid longitude.",
            {"longitude": longitude},
        )
    if not -180 <= longitude <= 180:
        raise ValidationError(
            f"Invalid longitude: {longitude} (must be between -180 and 180)",
            "Longitude out of range (-180 to 180).",
            {"longitude": longitude},
        )


def is_valid_coordinates(coords: Any) -> bool:
    """Non-raising variant of :func:`validate_coordinates`."""
    try:
        validate_coordinates(coords)
    except ValidationError:
        return False
    return True


def are_coordinates_equal(a: Coordinates, b: Coordinates, epsilon: float = 0.0001) -> bool:
    """Whether two positions match within ``epsilon`` degrees (0.0001 is about 11 m)."""
    return abs(a.latitude - b.latitude) < epsilon and abs(a.longitude - b.longitude) < epsilon


def normalize_longitude(longitude: float) -> float:
    """Wrap a longitude into [-180, 180], e.g. when crossing the antimeridian."""
    while longitude > 180:
        longitude -= 360
    while longitude < -180:
        longitude += 360
    return longitude


def is_within_bounds(coords: Coordinates, bounds: BoundingBox) -> bool:
    """Whether a (validated) position lies inside ``bounds``."""
    validate_coordinates(coords)
    return (
        bounds.south <= coords.latitude <= bounds.north
        and bounds.west <= coords.longitude <= bounds.east
    )


def validate_network_id(network_id: Any) -> str:
    """Return ``network_id`` if it is safe to use as a URL path segment."""
    if not isinstance(network_id, str) or not network_id:
        raise ValidationError(
            "Invalid network id: must be a non-empty string",
            "Invalid bike network.",
            {"network_id": network_id},
        )
    if not NETWORK_ID_PATTERN.fullmatch(network_id):
        raise ValidationError(
            "Invalid network id format: only alphanumeric characters and hyphens allowed",
            "Invalid bike network.",
            {"network_id": network_id},
        )
    return network_id


def validate_positive(value: Any, name: str) -> None:
    """Raise ``ValidationError`` unless ``value`` is a number greater than zero."""
    if not is_number(value) or value <= 0:
        raise ValidationError(
            f"Invalid {name}: must be positive",
            "The search settings are invalid.",
            {name: value},
        )
