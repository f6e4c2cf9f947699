"""Configuration adapters."""

from nearby_bikes.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
