"""
Storage Services Package

Provides the storage port and its implementations. The entry store
only depends on StoragePort, so backends are swappable.
"""

from finance_tracker.services.storage.interface import (
    QuotaExceededError,
    StorageError,
    StoragePort,
    StorageUnavailableError,
)
from finance_tracker.services.storage.local_file import LocalFileStorage
from finance_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "StoragePort",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
]
