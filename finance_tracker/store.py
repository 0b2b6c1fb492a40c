"""
Entry Store

Holds the flat, order-preserving list of entries and mirrors it to a
single blob behind the storage port.

DESIGN DECISION: The whole list is rewritten on every mutation.
There are no transactions. If a write fails, the failure is logged
and the in-memory list stays ahead of storage until the next save
succeeds.

Read failures (absent, invalid JSON, not a list) give an empty list
plus a warning; they never raise. Invalid elements of a stored list
are skipped with a warning and the valid ones are kept.
"""

import json
import time
from typing import Callable, Iterable, Optional

from pydantic import ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.models.entry import ENTRY_LIST_ADAPTER, Entry
from finance_tracker.services.storage import StorageError, StoragePort


class EntryIdGenerator:
    """
    Millisecond-timestamp ids.

    Ids are strictly increasing for one generator: two entries created
    in the same millisecond get consecutive values.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0

    def __call__(self) -> str:
        candidate = int(self._clock() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


def serialize_entries(entries: Iterable[Entry], indent: Optional[int] = None) -> str:
    """Serialize entries to the persisted JSON array layout."""
    return json.dumps(
        [entry.to_record() for entry in entries],
        indent=indent,
        ensure_ascii=False,
    )


def parse_entries(blob: str) -> list[Entry]:
    """
    Parse a persisted JSON array into entries.

    Raises:
        ValueError: If the text is not JSON or is not a list
        ValidationError: If any element is not a valid entry
    """
    data = json.loads(blob)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return ENTRY_LIST_ADAPTER.validate_python(data)


def parse_stored_entries(blob: str) -> tuple[list[Entry], list[str]]:
    """
    Parse a persisted JSON array, skipping elements that are not valid entries.

    Returns:
        (entries, errors): the valid entries in order, and one message
        per skipped element

    Raises:
        ValueError: If the text is not JSON or is not a list
    """
    data = json.loads(blob)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")

    entries: list[Entry] = []
    errors: list[str] = []
    for position, record in enumerate(data):
        try:
            entries.append(Entry.model_validate(record))
        except ValidationError as e:
            errors.append(f"element {position}: {e.error_count()} invalid field(s)")
    return entries, errors


class EntryStore:
    """
    In-memory entry list backed by one storage key.

    Usage:
        store = EntryStore(InMemoryStorage(), key="entries")
        store.load()
        store.add(entry)
        store.remove(entry.id)
    """

    def __init__(
        self,
        storage: StoragePort,
        key: str,
        audit_logger: Optional[AuditLogger] = None,
        id_generator: Optional[Callable[[], str]] = None,
    ):
        self._storage = storage
        self._key = key
        self._audit_logger = audit_logger or AuditLogger()
        self._next_id = id_generator or EntryIdGenerator()
        self._entries: list[Entry] = []
        self._loaded = False
        self._in_sync = True

    @property
    def key(self) -> str:
        return self._key

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Snapshot of the entries in insertion order."""
        return tuple(self._entries)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def in_sync(self) -> bool:
        """False while the last save attempt failed."""
        return self._in_sync

    def __len__(self) -> int:
        return len(self._entries)

    def next_entry_id(self) -> str:
        return self._next_id()

    def load(self) -> tuple[Entry, ...]:
        """
        Read the persisted list into memory.

        Returns:
            The loaded entries (empty when nothing valid is stored)
        """
        self._entries = []
        self._loaded = True

        try:
            blob = self._storage.load(self._key)
        except StorageError as e:
            self._audit_logger.log_storage_load_failed(self._key, str(e))
            return self.entries

        if blob is None:
            self._audit_logger.log_storage_loaded(self._key, 0)
            return self.entries

        try:
            self._entries, errors = parse_stored_entries(blob)
        except ValueError as e:
            self._audit_logger.log_storage_load_failed(self._key, str(e))
            return self.entries

        if errors:
            self._audit_logger.log_entries_skipped(
                self._key,
                skipped=len(errors),
                kept=len(self._entries),
                errors=errors,
            )

        self._audit_logger.log_storage_loaded(self._key, len(self._entries))
        return self.entries

    def save(self, entries: Optional[Iterable[Entry]] = None) -> bool:
        """
        Overwrite the persisted blob with the full list.

        Args:
            entries: List to persist. Defaults to the in-memory list.

        Returns:
            True if the write succeeded
        """
        to_save = list(self._entries if entries is None else entries)

        try:
            blob = serialize_entries(to_save)
            self._storage.save(self._key, blob)
        except (StorageError, TypeError, ValueError) as e:
            self._in_sync = False
            self._audit_logger.log_storage_save_failed(
                key=self._key,
                error=e,
                pending_count=len(to_save),
            )
            return False

        self._in_sync = True
        return True

    def add(self, entry: Entry) -> bool:
        """
        Append an entry and persist.

        Returns:
            Whether the save succeeded (the entry is kept in memory either way)
        """
        self._entries.append(entry)
        self._audit_logger.log_entry_added(entry)
        return self.save()

    def remove(self, entry_id: str) -> int:
        """
        Drop every entry with this id and persist.

        Ids are not guaranteed unique; use discard() to remove one
        specific entry among several sharing an id.

        Returns:
            Number of entries removed (0 for an unknown id)
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        removed = before - len(self._entries)

        self._audit_logger.log_entry_deleted(entry_id, found=removed > 0)
        self.save()
        return removed

    def discard(self, entry: Entry) -> int:
        """
        Drop the first entry equal to this one and persist.

        Returns:
            Number of entries removed (0 when no entry matches)
        """
        index = next(
            (i for i, e in enumerate(self._entries) if e == entry),
            None,
        )
        if index is not None:
            del self._entries[index]

        self._audit_logger.log_entry_deleted(entry.id, found=index is not None)
        self.save()
        return 0 if index is None else 1

    def get(self, entry_id: str) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def replace_all(self, entries: Iterable[Entry]) -> bool:
        """Replace the whole list (used by import) and persist."""
        self._entries = list(entries)
        return self.save()

    def clear(self) -> bool:
        """Empty the list and persist an empty array."""
        count = len(self._entries)
        self._entries = []
        self._audit_logger.log_entries_cleared(count)
        return self.save()
