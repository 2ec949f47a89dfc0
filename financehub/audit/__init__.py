"""Audit logging package."""

from financehub.audit.logger import (
    AUDIT_LOG_KEY,
    AuditLogger,
    configure_log_level,
    create_correlation_id,
)

__all__ = ["AUDIT_LOG_KEY", "AuditLogger", "configure_log_level", "create_correlation_id"]
