"""
Data Models Package

This package contains all Pydantic models used in FinanceHub.
All data flowing between storage, aggregation and views conforms
to these schemas.
"""

from financehub.models.records import (
    DAILY_SPEND_LIMITS,
    RECORD_MODELS,
    DailySpendRecord,
    DueCategory,
    DueDateRecord,
    ExpenseCategory,
    ExpenseRecord,
    IncomeRecord,
    IncomeType,
    Record,
    RecordKind,
    SavingsState,
    SpendCategory,
    new_record_id,
)
from financehub.models.summaries import (
    CalendarCell,
    CashflowTone,
    CategoryAmount,
    CategoryLimitStatus,
    DayClassification,
    DueStatus,
    GoalProgressTier,
    GoalProjection,
    GoalStatus,
    Insight,
    MarginBadge,
    Milestone,
    MonthlySpendingAnalysis,
    MonthlyTrend,
    OverviewMetrics,
    PaymentProgress,
    PeriodSummary,
    Severity,
    SpendingTip,
    ValidationIssue,
    ValidationResult,
)
from financehub.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Records
    "DAILY_SPEND_LIMITS",
    "RECORD_MODELS",
    "DailySpendRecord",
    "DueCategory",
    "DueDateRecord",
    "ExpenseCategory",
    "ExpenseRecord",
    "IncomeRecord",
    "IncomeType",
    "Record",
    "RecordKind",
    "SavingsState",
    "SpendCategory",
    "new_record_id",
    # Summaries and tags
    "CalendarCell",
    "CashflowTone",
    "CategoryAmount",
    "CategoryLimitStatus",
    "DayClassification",
    "DueStatus",
    "GoalProgressTier",
    "GoalProjection",
    "GoalStatus",
    "Insight",
    "MarginBadge",
    "Milestone",
    "MonthlySpendingAnalysis",
    "MonthlyTrend",
    "OverviewMetrics",
    "PaymentProgress",
    "PeriodSummary",
    "Severity",
    "SpendingTip",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
