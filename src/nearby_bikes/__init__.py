"""Nearby bike-share station finder."""

__version__ = "0.1.0"
