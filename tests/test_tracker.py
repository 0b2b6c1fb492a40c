"""Flow tests for the tracker facade."""

from datetime import date

import pytest

from finance_tracker.calendar import CalendarCursor
from finance_tracker.config import AppSettings
from finance_tracker.export import ImportFormatError, export_entries
from finance_tracker.models.audit import AuditEventType
from finance_tracker.models.aggregates import DayTone
from finance_tracker.models.entry import EntryDraft, EntryKind
from finance_tracker.services.storage import InMemoryStorage
from finance_tracker.store import EntryStore, parse_entries
from finance_tracker.tracker import FinanceTracker, build_storage, create_app_components


KEY = "gestionGastosIngresos"


def add(tracker, kind, category, amount, day):
    return tracker.add_from_draft(EntryDraft(
        kind=kind,
        category=category,
        amount=str(amount),
        date=day,
    ))


@pytest.fixture
def filled_tracker(tracker):
    add(tracker, EntryKind.EXPENSE, "Food", 50, date(2024, 1, 5))
    add(tracker, EntryKind.INCOME, "Sales", 200, date(2024, 1, 5))
    add(tracker, EntryKind.EXPENSE, "Gas", 30, date(2024, 1, 6))
    return tracker


class TestAddEntry:
    """Tests for the add-entry flow."""

    def test_add_persists_entry(self, tracker, storage):
        entry = add(tracker, EntryKind.EXPENSE, "Carne", "12.5", date(2024, 2, 3))
        assert entry is not None
        assert entry.amount == 12.5
        assert tracker.entries == (entry,)
        assert parse_entries(storage.load(KEY)) == [entry]

    def test_ids_are_unique(self, tracker):
        ids = {add(tracker, EntryKind.EXPENSE, "Pan", 1, date(2024, 2, 3)).id for _ in range(20)}
        assert len(ids) == 20

    @pytest.mark.parametrize("category,amount", [("", "10"), ("Pan", ""), ("Pan", "abc")])
    def test_unusable_form_is_noop(self, tracker, audit_logger, category, amount):
        result = tracker.add_from_draft(EntryDraft(category=category, amount=amount))
        assert result is None
        assert tracker.entries == ()
        assert audit_logger.history[-1].event_type == AuditEventType.ENTRY_REJECTED

    def test_rejection_reason(self, tracker, audit_logger):
        tracker.add_from_draft(EntryDraft(category="", amount="10"))
        tracker.add_from_draft(EntryDraft(category="Pan", amount="nan"))
        reasons = [e.details["reason"] for e in audit_logger.history
                   if e.event_type == AuditEventType.ENTRY_REJECTED]
        assert reasons == ["incomplete", "invalid_amount"]


class TestDeleteAndClear:
    """Tests for removing entries."""

    def test_delete(self, filled_tracker):
        target = filled_tracker.entries[1]
        assert filled_tracker.delete(target.id) is True
        assert target not in filled_tracker.entries
        assert len(filled_tracker.entries) == 2

    def test_delete_unknown_id(self, filled_tracker):
        assert filled_tracker.delete("missing") is False
        assert len(filled_tracker.entries) == 3

    def test_delete_entry_with_shared_id(self, tracker, make_entry):
        """Test that entries sharing an id can be deleted one at a time."""
        first = make_entry("1", EntryKind.EXPENSE, "Gas", 30, date(2024, 1, 6))
        second = make_entry("1", EntryKind.INCOME, "Ventas", 90, date(2024, 1, 7))
        tracker.import_json(export_entries([first, second]))

        assert tracker.delete_entry(second) is True
        assert tracker.entries == (first,)
        assert tracker.dashboard().entry_count == 1

    def test_clear(self, filled_tracker, storage):
        assert filled_tracker.clear() is True
        assert filled_tracker.entries == ()
        assert storage.load(KEY) == "[]"


class TestDashboard:
    """Tests for the dashboard view model."""

    def test_scenario_dashboard(self, filled_tracker):
        dashboard = filled_tracker.dashboard()
        assert dashboard.totals.income_total == 200
        assert dashboard.totals.expense_total == 80
        assert dashboard.totals.balance == 120
        assert dashboard.entry_count == 3
        assert dashboard.in_sync

        expense = {s.category: s.percent for s in dashboard.expense_categories}
        assert expense == {"Food": pytest.approx(62.5), "Gas": pytest.approx(37.5)}
        assert [s.category for s in dashboard.income_categories] == ["Sales"]

        assert [e.category for e in dashboard.recent] == ["Gas", "Sales", "Food"]
        assert dashboard.analytics.savings_rate == pytest.approx(60.0)

    def test_empty_dashboard(self, tracker):
        dashboard = tracker.dashboard()
        assert dashboard.totals.balance == 0
        assert dashboard.recent == []
        assert dashboard.analytics.income_expense_ratio is None

    def test_recent_limit_from_settings(self, store, audit_logger):
        tracker = FinanceTracker(
            store,
            audit_logger=audit_logger,
            settings=AppSettings(recent_entries_limit=1),
        )
        add(tracker, EntryKind.EXPENSE, "Pan", 1, date(2024, 2, 3))
        add(tracker, EntryKind.EXPENSE, "Agua", 1, date(2024, 2, 3))
        assert [e.category for e in tracker.dashboard().recent] == ["Agua"]

    def test_save_failure_is_reported(self, audit_logger):
        store = EntryStore(InMemoryStorage(quota_bytes=10), KEY, audit_logger=audit_logger)
        tracker = FinanceTracker(store, audit_logger=audit_logger, settings=AppSettings())
        add(tracker, EntryKind.EXPENSE, "Pan", 1, date(2024, 2, 3))

        dashboard = tracker.dashboard()
        assert dashboard.entry_count == 1
        assert not dashboard.in_sync


class TestCalendarView:
    """Tests for the calendar view model."""

    def test_month_view(self, filled_tracker):
        view = filled_tracker.calendar(CalendarCursor(month=date(2024, 1, 1)))
        assert view.month_label == "enero 2024"
        assert view.month_totals.balance == 120
        assert len(view.cells) % 7 == 0
        assert view.selected is None

        tones = {c.day: c.tone for c in view.cells}
        assert tones[date(2024, 1, 5)] == DayTone.SURPLUS
        assert tones[date(2024, 1, 6)] == DayTone.DEFICIT

    def test_selected_day(self, filled_tracker):
        cursor = CalendarCursor(month=date(2024, 1, 1)).select(date(2024, 1, 6))
        view = filled_tracker.calendar(cursor)
        assert view.selected.expense == 30
        assert [e.category for e in view.selected.entries] == ["Gas"]

    def test_other_month_is_empty(self, filled_tracker):
        view = filled_tracker.calendar(CalendarCursor(month=date(2024, 2, 1)))
        assert view.month_totals.balance == 0
        assert all(c.tone == DayTone.EMPTY for c in view.cells if c.in_month)


class TestExportImport:
    """Tests for export and import through the tracker."""

    def test_export(self, filled_tracker, storage):
        before = storage.load(KEY)
        filename, text = filled_tracker.export(date(2024, 1, 31))
        assert filename == "gastos-ingresos-2024-01-31.json"
        assert len(parse_entries(text)) == 3
        assert storage.load(KEY) == before

    def test_record_export(self, filled_tracker, audit_logger):
        filled_tracker.record_export("gastos-ingresos-2024-01-31.json")
        event = audit_logger.history[-1]
        assert event.event_type == AuditEventType.ENTRIES_EXPORTED
        assert event.details["entry_count"] == 3

    def test_import_replaces_entries(self, filled_tracker, make_entry):
        replacement = [make_entry("9", EntryKind.INCOME, "Propinas", 5, date(2024, 3, 1))]
        assert filled_tracker.import_json(export_entries(replacement)) == 1
        assert list(filled_tracker.entries) == replacement

    def test_invalid_import_keeps_entries(self, filled_tracker, audit_logger):
        with pytest.raises(ImportFormatError):
            filled_tracker.import_json("not json")
        assert len(filled_tracker.entries) == 3
        assert audit_logger.history[-1].event_type == AuditEventType.IMPORT_FAILED


class TestReload:
    """Tests for state surviving a restart."""

    def test_entries_survive_new_tracker(self, filled_tracker, storage):
        reopened = FinanceTracker(EntryStore(storage, KEY), settings=AppSettings())
        assert [e.category for e in reopened.entries] == ["Food", "Sales", "Gas"]


class TestFactories:
    """Tests for component construction."""

    def test_build_storage_memory(self):
        assert isinstance(build_storage("memory", ".unused", 1024), InMemoryStorage)

    def test_build_storage_file(self, tmp_path):
        storage = build_storage("file", str(tmp_path), 1024)
        storage.save("k", "[]")
        assert (tmp_path / "k.json").exists()

    def test_create_app_components_in_memory(self):
        tracker = create_app_components(use_storage=False)
        assert tracker.store.is_loaded
        assert tracker.entries == ()
