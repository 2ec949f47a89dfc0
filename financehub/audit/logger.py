"""
Audit Logger

DESIGN DECISION: Every change to a collection is logged.
This provides:
1. A readable history of what was added, removed and paid
2. Debugging capability when a save fails
3. Evidence when stored entries are dropped on load

The audit logger:
- Is synchronous, like the rest of the dashboard
- Gracefully handles failures (a failed audit write never breaks a save)
- Supports correlation IDs to trace the events of one user action
"""

import logging
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog

from financehub.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from financehub.storage import RecordStore, StorageError


AUDIT_LOG_KEY = "auditLog"


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(level: str = "INFO") -> None:
    """Route the structured log to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The record store under "auditLog" (for the activity panel)
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        limit: int = 500,
    ):
        """
        Initialize audit logger.

        Args:
            store: Record store for persistence.
                   If None, only logs locally.
            limit: Most recent events kept in the store.
        """
        self._store = store
        self._limit = limit
        self._logger = structlog.get_logger("financehub.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the store if available.

        Returns True if the store write succeeded (or no store configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._store is None or self._limit <= 0:
            return True

        try:
            events = self._stored_events()
            events.append(log_dict)
            self._store.set(AUDIT_LOG_KEY, events[-self._limit:])
            return True
        except StorageError as e:
            # Log failure but don't raise
            self._logger.error(
                "audit_storage_failed",
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def recent_events(self, limit: int = 20) -> list[dict[str, Any]]:
        """Most recent persisted events, newest first."""
        if self._store is None or limit <= 0:
            return []
        events = self._stored_events()
        return list(reversed(events[-limit:]))

    def _stored_events(self) -> list[dict[str, Any]]:
        """The persisted log; anything other than a list starts over empty."""
        events = self._store.get(AUDIT_LOG_KEY, [])
        return list(events) if isinstance(events, list) else []

    def log_record_added(
        self,
        collection: str,
        record_id: str,
        label: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new record."""
        self.log(AuditEventBuilder.record_added(
            collection=collection,
            record_id=record_id,
            label=label,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_record_removed(
        self,
        collection: str,
        record_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.record_removed(
            collection=collection,
            record_id=record_id,
            correlation_id=correlation_id,
        ))

    def log_status_changed(
        self,
        collection: str,
        record_id: str,
        field: str,
        old_value: Any,
        new_value: Any,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.status_changed(
            collection=collection,
            record_id=record_id,
            field=field,
            old_value=old_value,
            new_value=new_value,
            correlation_id=correlation_id,
        ))

    def log_validation_rejected(
        self,
        collection: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an add-form submission that was rejected."""
        self.log(AuditEventBuilder.validation_rejected(
            collection=collection,
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        collection: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed write. The change itself stays in memory."""
        self.log(AuditEventBuilder.save_failed(
            collection=collection,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g. one form submit).
    """
    return uuid4()
