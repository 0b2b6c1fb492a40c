"""
Main Orchestrator for Personal Finance Tracker

This module ties together the entry store, the aggregations and the
audit log, and builds the view models the two screens render:
1. Dashboard (totals, add form, recent / categories / analytics tabs)
2. Calendar (month grid, monthly totals, day detail)

Data flow is one-way:
    user input -> store mutation -> save -> aggregates rebuilt -> render

DESIGN DECISION: View models are rebuilt from the full entry list on
every call. There is no incremental cache.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from finance_tracker.aggregation import (
    category_shares,
    recent_entries,
    totals_by_category,
    totals_by_date,
    totals_by_type,
    totals_for_month,
)
from finance_tracker.analytics import compute_analytics
from finance_tracker.audit import AuditLogger
from finance_tracker.calendar import (
    CalendarCursor,
    day_detail,
    month_grid,
    month_label,
)
from finance_tracker.config import AppSettings, get_settings
from finance_tracker.export import (
    ImportFormatError,
    export_entries,
    export_filename,
    import_entries,
)
from finance_tracker.models.aggregates import (
    Analytics,
    CalendarCell,
    CategoryShare,
    DayDetail,
    TypeTotals,
)
from finance_tracker.models.entry import Entry, EntryDraft
from finance_tracker.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StoragePort,
)
from finance_tracker.store import EntryStore


# =============================================================================
# VIEW MODELS
# =============================================================================

class DashboardModel(BaseModel):
    """Everything the dashboard renders."""

    totals: TypeTotals
    expense_categories: list[CategoryShare] = Field(default_factory=list)
    income_categories: list[CategoryShare] = Field(default_factory=list)
    recent: list[Entry] = Field(default_factory=list)
    analytics: Analytics
    entry_count: int = 0
    in_sync: bool = True


class CalendarModel(BaseModel):
    """Everything the calendar renders."""

    cursor: CalendarCursor
    month_label: str
    month_totals: TypeTotals
    cells: list[CalendarCell]
    selected: Optional[DayDetail] = None


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class FinanceTracker:
    """
    Application facade used by the Streamlit app.

    All mutations go through the entry store; every read rebuilds its
    aggregates from the store's current list.
    """

    def __init__(
        self,
        store: EntryStore,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[AppSettings] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._settings = settings or get_settings().app

    @property
    def store(self) -> EntryStore:
        return self._store

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def entries(self) -> tuple[Entry, ...]:
        self.ensure_loaded()
        return self._store.entries

    def ensure_loaded(self) -> None:
        """Load from storage on first use."""
        if not self._store.is_loaded:
            self._store.load()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_from_draft(self, draft: EntryDraft) -> Optional[Entry]:
        """
        Create an entry from the add-entry form.

        Returns:
            The new entry, or None when the form was incomplete
            (empty category or amount, or an unusable amount)
        """
        self.ensure_loaded()

        entry = draft.to_entry(self._store.next_entry_id())
        if entry is None:
            reason = "incomplete" if not draft.is_complete() else "invalid_amount"
            self._audit_logger.log_entry_rejected(reason)
            return None

        self._store.add(entry)
        return entry

    def delete(self, entry_id: str) -> bool:
        """Delete every entry with this id. Unknown ids are a no-op."""
        self.ensure_loaded()
        return self._store.remove(entry_id) > 0

    def delete_entry(self, entry: Entry) -> bool:
        """Delete this exact entry, even when other entries share its id."""
        self.ensure_loaded()
        return self._store.discard(entry) > 0

    def clear(self) -> bool:
        self.ensure_loaded()
        return self._store.clear()

    def export(self, today: Optional[date] = None) -> tuple[str, str]:
        """
        Export all entries. Does not modify the stored entries.

        Returns:
            (filename, json_text)
        """
        entries = self.entries
        filename = export_filename(today, prefix=self._settings.export_filename_prefix)
        return filename, export_entries(entries)

    def record_export(self, filename: str) -> None:
        """Audit a completed download of an export."""
        self._audit_logger.log_exported(filename, len(self.entries))

    def import_json(self, text: str) -> int:
        """
        Replace all entries with the contents of an export file.

        Returns:
            Number of entries imported

        Raises:
            ImportFormatError: If the file is not a valid export
        """
        self.ensure_loaded()
        try:
            imported = import_entries(text)
        except ImportFormatError as e:
            self._audit_logger.log_import_failed(str(e))
            raise

        replaced = len(self._store)
        self._store.replace_all(imported)
        self._audit_logger.log_imported(len(imported), replaced)
        return len(imported)

    # -------------------------------------------------------------------------
    # View models
    # -------------------------------------------------------------------------

    def dashboard(self) -> DashboardModel:
        entries = self.entries
        totals = totals_by_type(entries)
        by_category = totals_by_category(entries)

        return DashboardModel(
            totals=totals,
            expense_categories=category_shares(by_category.expense, totals.expense_total),
            income_categories=category_shares(by_category.income, totals.income_total),
            recent=recent_entries(entries, limit=self._settings.recent_entries_limit),
            analytics=compute_analytics(entries),
            entry_count=len(entries),
            in_sync=self._store.in_sync,
        )

    def calendar(self, cursor: CalendarCursor) -> CalendarModel:
        daily = totals_by_date(self.entries)

        return CalendarModel(
            cursor=cursor,
            month_label=month_label(cursor.month),
            month_totals=totals_for_month(daily, cursor.month.year, cursor.month.month),
            cells=month_grid(cursor.month, daily),
            selected=day_detail(cursor.selected, daily) if cursor.selected else None,
        )


def build_storage(backend: str, data_dir: str, quota_bytes: int) -> StoragePort:
    if backend == "memory":
        return InMemoryStorage(quota_bytes=quota_bytes)
    return LocalFileStorage(data_dir=data_dir, quota_bytes=quota_bytes)


def create_app_components(use_storage: bool = True) -> FinanceTracker:
    """
    Factory function to create the tracker.

    Args:
        use_storage: Whether to use the configured storage backend.
                    Set to False for in-memory storage.

    Returns:
        A FinanceTracker with its entries loaded
    """
    settings = get_settings()
    audit_logger = AuditLogger()
    storage_settings = settings.storage

    storage: StoragePort
    if use_storage:
        try:
            storage = build_storage(
                storage_settings.backend,
                storage_settings.data_dir,
                storage_settings.quota_bytes,
            )
        except Exception as e:
            # Backend not usable - continue in memory
            audit_logger.log_error(
                error_type="storage_unavailable",
                error_message=str(e),
                details={"backend": storage_settings.backend},
            )
            storage = InMemoryStorage()
    else:
        storage = InMemoryStorage()

    store = EntryStore(storage, key=storage_settings.key, audit_logger=audit_logger)
    tracker = FinanceTracker(store, audit_logger=audit_logger, settings=settings.app)
    tracker.ensure_loaded()
    return tracker
