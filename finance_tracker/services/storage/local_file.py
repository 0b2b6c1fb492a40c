"""
Local File Storage Implementation

Stores each key as its own JSON file inside a data directory. This
is the desktop stand-in for browser local storage:
- One file per key, overwritten in full on every save
- Writes go to a temp file first and are swapped in with os.replace,
  so a crash mid-write never leaves a half-written blob
- A byte quota mirrors the browser's per-origin limit

TRADEOFFS:
- No locking; two processes writing the same key race and the last
  write wins
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.config import DEFAULT_QUOTA_BYTES, get_settings
from finance_tracker.services.storage.interface import (
    QuotaExceededError,
    StoragePort,
    StorageUnavailableError,
)


logger = structlog.get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class LocalFileStorage(StoragePort):
    """
    File-per-key storage under a data directory.

    Transient OS errors on write are retried before they surface as
    StorageUnavailableError.
    """

    def __init__(
        self,
        data_dir: Optional[str] = None,
        quota_bytes: Optional[int] = None,
    ):
        """
        Initialize file storage.

        Args:
            data_dir: Directory for the blob files.
                     Defaults to the configured storage data_dir.
            quota_bytes: Maximum blob size.
                     Defaults to the configured quota.
        """
        if data_dir is None or quota_bytes is None:
            settings = get_settings().storage
            data_dir = data_dir if data_dir is not None else settings.data_dir
            quota_bytes = quota_bytes if quota_bytes is not None else settings.quota_bytes

        self._data_dir = Path(data_dir)
        self._quota_bytes = quota_bytes or DEFAULT_QUOTA_BYTES

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File a key is stored in."""
        return self._data_dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Could not read {path}: {e}") from e

    def save(self, key: str, blob: str) -> None:
        data = blob.encode("utf-8")
        if len(data) > self._quota_bytes:
            raise QuotaExceededError(key, len(data), self._quota_bytes)

        path = self.path_for(key)
        try:
            self._write_atomic(path, data)
        except OSError as e:
            raise StorageUnavailableError(f"Could not write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageUnavailableError(f"Could not delete {path}: {e}") from e
        return True

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError:
            logger.debug("blob_write_attempt_failed", path=str(path))
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
