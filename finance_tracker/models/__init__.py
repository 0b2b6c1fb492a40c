"""
Data Models Package

This package contains all Pydantic models used in the Personal Finance Tracker.
Only Entry is persisted; the remaining models are derived views.
"""

from finance_tracker.models.entry import (
    ENTRY_LIST_ADAPTER,
    SUGGESTED_CATEGORIES,
    Entry,
    EntryDraft,
    EntryKind,
)
from finance_tracker.models.aggregates import (
    Analytics,
    CalendarCell,
    CategoryShare,
    CategoryTotals,
    DayDetail,
    DayTone,
    DayTotals,
    TypeTotals,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Entry models
    "ENTRY_LIST_ADAPTER",
    "SUGGESTED_CATEGORIES",
    "Entry",
    "EntryDraft",
    "EntryKind",
    # Derived models
    "Analytics",
    "CalendarCell",
    "CategoryShare",
    "CategoryTotals",
    "DayDetail",
    "DayTone",
    "DayTotals",
    "TypeTotals",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
