"""Formatting helpers for distances and timestamps."""

from datetime import UTC, datetime

from nearby_bikes.domain.models.refresh_state import elapsed_ms, to_utc_datetime


def format_distance(meters: float) -> str:
    """Format a distance compactly (e.g., '150m', '1.2km')."""
    if meters < 1000:
        return f"{round(meters)}m"
    return f"{meters / 1000:.1f}km"


def format_distance_verbose(meters: float) -> str:
    """Format a distance as words (e.g., '150 meters away')."""
    if meters < 1000:
        return f"{round(meters)} meters away"
    return f"{meters / 1000:.1f} kilometers away"


def format_time_ago(timestamp: datetime | str, now: datetime | None = None) -> str:
    """Format a timestamp relative to now (e.g., 'just now', '5 min ago', '2h ago', '3d ago')."""
    seconds = elapsed_ms(to_utc_datetime(timestamp), now or datetime.now(UTC)) // 1000
    minutes = seconds // 60
    hours = minutes // 60

    if seconds < 60:
        return "just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_clock_time(timestamp: datetime | str) -> str:
    """Format a timestamp as local wall-clock time (HH:MM)."""
    return to_utc_datetime(timestamp).astimezone().strftime("%H:%M")
