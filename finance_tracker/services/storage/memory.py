"""
In-Memory Storage Implementation

Keeps blobs in a dict. Used by the test-suite and as the fallback
when the configured backend cannot be opened; nothing survives a
restart.
"""

from typing import Optional

from finance_tracker.services.storage.interface import (
    QuotaExceededError,
    StoragePort,
)


class InMemoryStorage(StoragePort):
    """
    Dict-backed storage.

    An optional quota makes it possible to exercise the
    quota-exceeded path without touching the filesystem.
    """

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._blobs: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def load(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        size = len(blob.encode("utf-8"))
        if self._quota_bytes is not None and size > self._quota_bytes:
            raise QuotaExceededError(key, size, self._quota_bytes)
        self._blobs[key] = blob

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._blobs)
