"""
Audit Models for Personal Finance Tracker

Every mutation of the entry list and every storage failure is
recorded as an AuditEvent and written to the diagnostic log.
This provides:
1. Traceability of adds, deletes, imports and exports
2. Debugging information when the stored blob goes out of sync
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Entry lifecycle
    ENTRY_ADDED = "entry_added"
    ENTRY_REJECTED = "entry_rejected"
    ENTRY_DELETED = "entry_deleted"
    ENTRY_NOT_FOUND = "entry_not_found"
    ENTRIES_CLEARED = "entries_cleared"

    # Import / export
    ENTRIES_EXPORTED = "entries_exported"
    ENTRIES_IMPORTED = "entries_imported"
    IMPORT_FAILED = "import_failed"

    # Persistence
    STORAGE_LOADED = "storage_loaded"
    STORAGE_LOAD_FAILED = "storage_load_failed"
    ENTRIES_SKIPPED = "entries_skipped"
    STORAGE_SAVE_FAILED = "storage_save_failed"

    # System events
    SYSTEM_ERROR = "system_error"


# Longest description an event keeps; longer text is cut
MAX_DESCRIPTION_LENGTH = 500


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'entry', 'storage')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    @field_validator('description', mode='before')
    @classmethod
    def truncate_description(cls, v: Any) -> Any:
        """Descriptions embed user text (categories, ids, keys)."""
        if isinstance(v, str) and len(v) > MAX_DESCRIPTION_LENGTH:
            return v[:MAX_DESCRIPTION_LENGTH - 3] + "..."
        return v

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_added(entry_id, "gasto", "Carne", 50.0)
        event = AuditEventBuilder.storage_save_failed(key, "quota exceeded")
    """

    @staticmethod
    def entry_added(
        entry_id: str,
        kind: str,
        category: str,
        amount: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entity_type="entry",
            entity_id=entry_id,
            description=f"Entry added: {kind} {category} {amount}",
            details={
                "kind": kind,
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_rejected(reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.DEBUG,
            entity_type="entry",
            description="Add-entry form submitted without a usable entry",
            details={
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_deleted(entry_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entity_type="entry",
            entity_id=entry_id,
            description=f"Entry deleted: {entry_id}",
            is_user_action=True,
        )

    @staticmethod
    def entry_not_found(entry_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type="entry",
            entity_id=entry_id,
            description=f"Delete requested for unknown entry: {entry_id}",
            is_user_action=True,
        )

    @staticmethod
    def entries_cleared(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="entry",
            description=f"All {count} entries cleared",
            details={
                "entry_count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def entries_exported(filename: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_EXPORTED,
            entity_type="export",
            description=f"Exported {count} entries to {filename}",
            details={
                "filename": filename,
                "entry_count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def entries_imported(count: int, replaced: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_IMPORTED,
            entity_type="export",
            description=f"Imported {count} entries (replacing {replaced})",
            details={
                "entry_count": count,
                "replaced_count": replaced,
            },
            is_user_action=True,
        )

    @staticmethod
    def import_failed(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="export",
            description="Import file rejected",
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def storage_loaded(key: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOADED,
            entity_type="storage",
            entity_id=key,
            description=f"Loaded {count} entries from '{key}'",
            details={
                "entry_count": count,
            },
        )

    @staticmethod
    def storage_load_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Stored entries under '{key}' could not be read; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def entries_skipped(key: str, skipped: int, kept: int, errors: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRIES_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="storage",
            entity_id=key,
            description=f"Skipped {skipped} unreadable stored entries, kept {kept}",
            details={
                "skipped_count": skipped,
                "kept_count": kept,
                "errors": errors[:10],
            },
        )

    @staticmethod
    def storage_save_failed(
        key: str,
        error_code: str,
        error_message: str,
        pending_count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Entries could not be written to '{key}'",
            error_code=error_code,
            error_message=error_message,
            details={
                "pending_count": pending_count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
        )
