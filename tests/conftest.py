"""Shared fixtures for the Personal Finance Tracker tests."""

from datetime import date
from typing import Optional

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import AppSettings
from finance_tracker.models.entry import Entry, EntryKind
from finance_tracker.services.storage import InMemoryStorage
from finance_tracker.store import EntryStore
from finance_tracker.tracker import FinanceTracker


STORAGE_KEY = "gestionGastosIngresos"


@pytest.fixture
def make_entry():
    """Build entries with short positional arguments."""
    def _make(
        entry_id: str,
        kind: EntryKind,
        category: str,
        amount: float,
        day: date,
        description: Optional[str] = None,
    ) -> Entry:
        return Entry(
            id=entry_id,
            kind=kind,
            category=category,
            amount=amount,
            date=day,
            description=description,
        )
    return _make


@pytest.fixture
def scenario_entries(make_entry) -> list[Entry]:
    """Two expenses and one income over two days."""
    return [
        make_entry("1", EntryKind.EXPENSE, "Food", 50, date(2024, 1, 5)),
        make_entry("2", EntryKind.INCOME, "Sales", 200, date(2024, 1, 5)),
        make_entry("3", EntryKind.EXPENSE, "Gas", 30, date(2024, 1, 6)),
    ]


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage, audit_logger) -> EntryStore:
    return EntryStore(storage, key=STORAGE_KEY, audit_logger=audit_logger)


@pytest.fixture
def tracker(store, audit_logger) -> FinanceTracker:
    return FinanceTracker(store, audit_logger=audit_logger, settings=AppSettings())
