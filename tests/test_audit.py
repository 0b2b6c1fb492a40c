"""Tests for the audit logger and settings."""

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import AppSettings, StorageSettings, get_settings, validate_all_settings
from finance_tracker.models.audit import AuditEventBuilder, AuditEventType, AuditSeverity


class TestAuditLogger:
    """Tests for event history."""

    def test_history_is_oldest_first(self):
        audit_logger = AuditLogger()
        audit_logger.log_entries_cleared(3)
        audit_logger.log_import_failed("bad file")

        types = [e.event_type for e in audit_logger.history]
        assert types == [AuditEventType.ENTRIES_CLEARED, AuditEventType.IMPORT_FAILED]

    def test_recent_is_newest_first(self):
        audit_logger = AuditLogger()
        for count in range(5):
            audit_logger.log_entries_cleared(count)

        recent = audit_logger.recent(limit=2)
        assert [e.details["entry_count"] for e in recent] == [4, 3]

    def test_history_is_bounded(self):
        audit_logger = AuditLogger(history_size=3)
        for count in range(10):
            audit_logger.log_entries_cleared(count)
        assert len(audit_logger.history) == 3

    def test_log_error(self):
        audit_logger = AuditLogger()
        audit_logger.log_error("storage_unavailable", "disk gone", {"backend": "file"})
        event = audit_logger.history[-1]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk gone"

    def test_long_description_is_truncated(self):
        event = AuditEventBuilder.entry_added("1", "gasto", "x" * 600, 5.0)
        assert len(event.description) == 500
        assert event.description.endswith("...")

    def test_emit_failure_does_not_raise(self, monkeypatch):
        class BrokenLogger:
            def warning(self, *args, **kwargs):
                raise RuntimeError("handler gone")

        audit_logger = AuditLogger()
        monkeypatch.setattr(audit_logger, "_logger", BrokenLogger())
        audit_logger.log_entries_cleared(2)
        assert audit_logger.history[-1].event_type == AuditEventType.ENTRIES_CLEARED


class TestSettings:
    """Tests for configuration loading."""

    def test_storage_defaults(self, monkeypatch):
        monkeypatch.delenv("TRACKER_STORAGE_KEY", raising=False)
        settings = StorageSettings()
        assert settings.key == "gestionGastosIngresos"
        assert settings.quota_bytes == 5 * 1024 * 1024

    def test_storage_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRACKER_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("TRACKER_STORAGE_DATA_DIR", str(tmp_path))
        settings = StorageSettings()
        assert settings.backend == "memory"
        assert settings.data_dir == str(tmp_path)

    def test_data_dir_must_not_be_a_file(self, tmp_path):
        blocker = tmp_path / "file.txt"
        blocker.write_text("x")
        with pytest.raises(ValueError):
            StorageSettings(data_dir=str(blocker))

    def test_log_level_is_normalized(self):
        assert AppSettings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError):
            AppSettings(log_level="chatty")

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        get_settings.cache_clear()
        try:
            results = validate_all_settings()
        finally:
            get_settings.cache_clear()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results
