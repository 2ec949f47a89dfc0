"""
Application Wiring for FinanceHub

Builds one record store and hands it to every manager, so all pages
of a session read and write the same document.

DESIGN DECISION: The store is chosen here and nowhere else.
Managers never open files themselves; swapping the on-disk store for
the in-memory one is a single argument.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from financehub.audit import AuditLogger, configure_log_level
from financehub.config import get_settings
from financehub.managers import (
    DailySpendManager,
    DueDateManager,
    ExpenseManager,
    IncomeManager,
    SavingsGoalTracker,
)
from financehub.storage import (
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStore,
)
from financehub.validation import RecordValidator


logger = structlog.get_logger(__name__)


@dataclass
class AppComponents:
    """Everything a page needs, sharing one store."""

    store: RecordStore
    audit_logger: AuditLogger
    incomes: IncomeManager
    expenses: ExpenseManager
    daily_spends: DailySpendManager
    due_dates: DueDateManager
    savings: SavingsGoalTracker

    @property
    def collections(self) -> tuple:
        return (self.incomes, self.expenses, self.daily_spends, self.due_dates)

    @property
    def storage_errors(self) -> list[str]:
        """Messages for every manager holding unsaved changes."""
        managers = (*self.collections, self.savings)
        return [m.storage_error for m in managers if m.storage_error]

    def flush_all(self) -> bool:
        """Retry every pending write. True when everything is saved."""
        results = [m.flush() for m in (*self.collections, self.savings)]
        return all(results)


def create_app_components(
    store: Optional[RecordStore] = None,
    use_file_store: bool = True,
    today: Optional[date] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        store: Store to use as-is (tests pass an InMemoryRecordStore).
        use_file_store: Open the JSON file from StorageSettings when no
                        store is given. Set to False to keep everything
                        in memory.
        today: Fixed "today" for validation defaults; None means the
               real date on every call.

    Returns:
        AppComponents sharing a single store
    """
    settings = get_settings()
    configure_log_level(settings.app.log_level)

    if store is None:
        if use_file_store:
            try:
                store = JsonFileRecordStore()
                store.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                # Disk not usable - keep the session alive in memory
                logger.warning("file_store_unavailable", error=str(e))
                store = InMemoryRecordStore()
        else:
            store = InMemoryRecordStore()

    audit_logger = AuditLogger(store, limit=settings.app.audit_log_limit)
    validator = RecordValidator(today)

    return AppComponents(
        store=store,
        audit_logger=audit_logger,
        incomes=IncomeManager(store, audit_logger, validator),
        expenses=ExpenseManager(store, audit_logger, validator),
        daily_spends=DailySpendManager(store, audit_logger, validator),
        due_dates=DueDateManager(store, audit_logger, validator),
        savings=SavingsGoalTracker(store, audit_logger, settings.savings, validator),
    )
