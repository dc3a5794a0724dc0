"""Configuration package."""

from networth.config.settings import (
    StorageBackend,
    TrackerSettings,
    get_settings,
)

__all__ = [
    "StorageBackend",
    "TrackerSettings",
    "get_settings",
]
