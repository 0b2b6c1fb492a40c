"""
Audit Logger

DESIGN DECISION: Every mutation of the entry list and every storage
failure is logged. This is the diagnostic channel the entry store
reports read and write failures on.

The audit logger:
- Writes structured (JSON by default) logs through structlog
- Keeps a bounded in-memory history the app can show
- Never raises; logging must not break the UI
"""

import logging
from collections import deque
from typing import Optional

import structlog

from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)
from finance_tracker.models.entry import Entry


def configure_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structlog on top of the standard library logger.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(format="%(message)s", level=log_level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. A bounded in-memory history (for the app's diagnostics panel)
    """

    def __init__(self, history_size: int = 200):
        self._logger = structlog.get_logger("finance_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> list[AuditEvent]:
        """Recorded events, oldest first."""
        return list(self._history)

    def recent(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))[:limit]

    def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        self._history.append(event)

        try:
            log_dict = event.to_log_dict()

            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            logging.getLogger(__name__).error(
                "audit_log_failed: %s %s", event.event_type.value, e
            )

    def log_entry_added(self, entry: Entry) -> None:
        self.log(AuditEventBuilder.entry_added(
            entry_id=entry.id,
            kind=entry.kind.value,
            category=entry.category,
            amount=entry.amount,
        ))

    def log_entry_rejected(self, reason: str) -> None:
        self.log(AuditEventBuilder.entry_rejected(reason))

    def log_entry_deleted(self, entry_id: str, found: bool = True) -> None:
        if found:
            self.log(AuditEventBuilder.entry_deleted(entry_id))
        else:
            self.log(AuditEventBuilder.entry_not_found(entry_id))

    def log_entries_cleared(self, count: int) -> None:
        self.log(AuditEventBuilder.entries_cleared(count))

    def log_exported(self, filename: str, count: int) -> None:
        self.log(AuditEventBuilder.entries_exported(filename, count))

    def log_imported(self, count: int, replaced: int) -> None:
        self.log(AuditEventBuilder.entries_imported(count, replaced))

    def log_import_failed(self, error_message: str) -> None:
        self.log(AuditEventBuilder.import_failed(error_message))

    def log_storage_loaded(self, key: str, count: int) -> None:
        self.log(AuditEventBuilder.storage_loaded(key, count))

    def log_storage_load_failed(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_load_failed(key, error_message))

    def log_entries_skipped(self, key: str, skipped: int, kept: int, errors: list[str]) -> None:
        self.log(AuditEventBuilder.entries_skipped(key, skipped, kept, errors))

    def log_storage_save_failed(
        self,
        key: str,
        error: Exception,
        pending_count: int,
    ) -> None:
        self.log(AuditEventBuilder.storage_save_failed(
            key=key,
            error_code=type(error).__name__,
            error_message=str(error),
            pending_count=pending_count,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
