"""
Audit Models for FinanceHub

Every change to a collection is recorded as an audit event.
This provides:
1. A history of what the user added, removed and ticked off
2. Debugging information when a save fails
3. A trace of stored entries that were dropped on load

DESIGN DECISION: Audit logs are append-only. We never modify events.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Collection changes
    RECORD_ADDED = "record_added"
    RECORD_REMOVED = "record_removed"
    STATUS_CHANGED = "status_changed"
    SAVINGS_ADJUSTED = "savings_adjusted"

    # Rejections
    VALIDATION_REJECTED = "validation_rejected"
    LOAD_REJECTED_RECORD = "load_rejected_record"

    # Persistence
    SAVE_FAILED = "save_failed"
    SAVE_RECOVERED = "save_recovered"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_type is the collection key ("incomes", "savings", ...),
    entity_id the record id when the event concerns one record.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one user action"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging
        and for the record store.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_added("incomes", record_id, "Freelance", "500")
        event = AuditEventBuilder.save_failed("expenses", "disk full")
    """

    @staticmethod
    def record_added(
        collection: str,
        record_id: str,
        label: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_ADDED,
            entity_type=collection,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"Added to {collection}: {label}",
            details={"label": label, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def record_removed(
        collection: str,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_REMOVED,
            entity_type=collection,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"Removed from {collection}: {record_id}",
            is_user_action=True,
        )

    @staticmethod
    def status_changed(
        collection: str,
        record_id: str,
        field: str,
        old_value: Any,
        new_value: Any,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATUS_CHANGED,
            entity_type=collection,
            entity_id=record_id,
            correlation_id=correlation_id,
            description=f"{field} changed from {old_value} to {new_value}",
            details={"field": field, "old": old_value, "new": new_value},
            is_user_action=True,
        )

    @staticmethod
    def savings_adjusted(
        delta: str,
        old_amount: str,
        new_amount: str,
        clamped: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVINGS_ADJUSTED,
            entity_type="savings",
            correlation_id=correlation_id,
            description=f"Savings adjusted by {delta}",
            details={
                "delta": delta,
                "old_amount": old_amount,
                "new_amount": new_amount,
                "clamped_at_zero": clamped,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_rejected(
        collection: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type=collection,
            correlation_id=correlation_id,
            description=f"Rejected new {collection} entry ({len(issues)} issue(s))",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def load_rejected_record(
        collection: str,
        position: int,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_REJECTED_RECORD,
            severity=AuditSeverity.WARNING,
            entity_type=collection,
            description=f"Dropped unreadable stored entry #{position} in {collection}",
            details={"position": position},
            error_message=error_message,
        )

    @staticmethod
    def save_failed(
        collection: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=collection,
            correlation_id=correlation_id,
            description=f"Could not save {collection}; changes kept in memory",
            error_message=error_message,
        )

    @staticmethod
    def save_recovered(collection: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_RECOVERED,
            entity_type=collection,
            description=f"Pending changes to {collection} saved",
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
