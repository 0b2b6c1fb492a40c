"""
Abstract Storage Interface

DESIGN DECISION: The tracker persists exactly one opaque text blob
under one key, the way a browser's local storage does. The port is
therefore a tiny key-value contract: load, save, delete.

Implementations:
1. InMemoryStorage for tests and as a fallback
2. LocalFileStorage for a single-user desktop install

The entry store owns serialization; storage never sees Entry objects.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StoragePort(ABC):
    """
    Abstract key-value storage for serialized blobs.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if nothing is stored

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """
        Overwrite the blob stored under a key.

        Args:
            key: Storage key
            blob: Serialized text to store

        Raises:
            QuotaExceededError: If the blob is larger than allowed
            StorageUnavailableError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove the blob stored under a key.

        Returns:
            True if something was removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """The blob does not fit in the storage quota."""

    def __init__(self, key: str, size: int, quota: int):
        super().__init__(
            f"Blob for '{key}' is {size} bytes, quota is {quota} bytes"
        )
        self.key = key
        self.size = size
        self.quota = quota


class StorageUnavailableError(StorageError):
    """The storage backend could not be read or written."""
    pass
