"""Services package."""

from finance_tracker.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    QuotaExceededError,
    StorageError,
    StoragePort,
    StorageUnavailableError,
)

__all__ = [
    "InMemoryStorage",
    "LocalFileStorage",
    "QuotaExceededError",
    "StorageError",
    "StoragePort",
    "StorageUnavailableError",
]
