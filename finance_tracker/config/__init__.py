"""Configuration package."""

from finance_tracker.config.settings import (
    DEFAULT_QUOTA_BYTES,
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_QUOTA_BYTES",
    "AppSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
