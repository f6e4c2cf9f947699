"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nearby_bikes.domain.models.priority_config import PRIORITY_PRESETS, PriorityConfig
from nearby_bikes.domain.models.search_options import SearchOptions, SortKey

# TOML section -> settings it may override
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "search": ("max_distance", "max_stations", "require_bikes", "only_active", "sort_by"),
    "refresh": ("auto_refresh_interval_ms", "min_refresh_interval_ms"),
    "api": ("citybikes_api_url", "api_timeout_seconds"),
    "priority": ("priority_preset",),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Network directory
    citybikes_api_url: str = Field(
        default="https://api.citybik.es/v2", description="Base URL of the CityBikes v2 API"
    )
    api_timeout_seconds: float = Field(
        default=5.0, description="Timeout for each network directory request in seconds"
    )

    # Search
    max_distance: float = Field(default=200, description="Search radius in meters")
    max_stations: int = Field(default=10, description="Maximum number of stations returned")
    require_bikes: bool = Field(default=True, description="Only keep stations with free bikes")
    only_active: bool = Field(default=True, description="Drop closed or inactive stations")
    sort_by: str = Field(
        default="distance", description="Sort key: distance, bikes, slots, name or priority"
    )
    priority_preset: str = Field(
        default="default", description="Priority thresholds: default, urban or suburban"
    )

    # Refresh
    auto_refresh_interval_ms: int = Field(
        default=60_000, description="Interval between automatic refreshes in milliseconds"
    )
    min_refresh_interval_ms: int = Field(
        default=1_000, description="Minimum gap between manual refreshes in milliseconds"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    config_file: str | None = Field(
        default=None, description="Optional TOML file overriding search/refresh/api settings"
    )

    @field_validator("sort_by")
    @classmethod
    def validate_sort_by(cls, v: str) -> str:
        """Validate the sort key is known."""
        if v.lower() not in {key.value for key in SortKey}:
            raise ValueError("sort_by must be one of: distance, bikes, slots, name, priority")
        return v.lower()

    @field_validator("priority_preset")
    @classmethod
    def validate_priority_preset(cls, v: str) -> str:
        """Validate the preset name is known."""
        if v.lower() not in PRIORITY_PRESETS:
            raise ValueError(
                f"priority_preset must be one of: {', '.join(sorted(PRIORITY_PRESETS))}"
            )
        return v.lower()

    @field_validator(
        "api_timeout_seconds",
        "max_distance",
        "max_stations",
        "auto_refresh_interval_ms",
        "min_refresh_interval_ms",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate distances, counts and intervals are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the logging level name."""
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v.upper()

    def load_toml(self) -> dict[str, Any]:
        """Apply overrides from ``config_file`` and return the parsed TOML data."""
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, keys in _TOML_SECTIONS.items():
            values = toml_data.get(section, {})
            if not isinstance(values, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for key in keys:
                if key in values:
                    setattr(self, key, values[key])

        return toml_data

    def search_options(self) -> SearchOptions:
        """Search options built from the current settings."""
        return SearchOptions(
            max_distance=self.max_distance,
            max_stations=self.max_stations,
            require_bikes=self.require_bikes,
            only_active=self.only_active,
            sort_by=SortKey(self.sort_by),
        )

    def priority_config(self) -> PriorityConfig:
        """Threshold table selected by ``priority_preset``."""
        return PRIORITY_PRESETS[self.priority_preset]
