"""The four record collections of the dashboard."""

from typing import Any

from financehub.managers.base import CollectionManager, PayableCollectionManager
from financehub.models.records import (
    DailySpendRecord,
    DueCategory,
    DueDateRecord,
    ExpenseCategory,
    ExpenseRecord,
    IncomeRecord,
    IncomeType,
    RecordKind,
    SpendCategory,
)
from financehub.models.summaries import ValidationResult


class IncomeManager(CollectionManager[IncomeRecord]):
    """Income entries, business and personal."""

    kind = RecordKind.INCOMES
    record_model = IncomeRecord

    def validate(
        self,
        source: Any = None,
        amount: Any = None,
        type: Any = IncomeType.BUSINESS,
        date: Any = None,
    ) -> ValidationResult:
        return self._validator.validate_income(source=source, amount=amount, type=type, date=date)

    @staticmethod
    def label(record: IncomeRecord) -> str:
        return record.source


class ExpenseManager(PayableCollectionManager[ExpenseRecord]):
    """Household expenses. New expenses start unpaid."""

    kind = RecordKind.EXPENSES
    record_model = ExpenseRecord

    def validate(
        self,
        name: Any = None,
        amount: Any = None,
        category: Any = ExpenseCategory.MISC,
        is_recurring: bool = False,
        purpose: Any = None,
    ) -> ValidationResult:
        return self._validator.validate_expense(
            name=name,
            amount=amount,
            category=category,
            is_recurring=is_recurring,
            purpose=purpose,
        )

    @staticmethod
    def label(record: ExpenseRecord) -> str:
        return record.name


class DailySpendManager(CollectionManager[DailySpendRecord]):
    kind = RecordKind.DAILY_SPENDS
    record_model = DailySpendRecord

    def validate(
        self,
        date: Any = None,
        amount: Any = None,
        description: Any = None,
        category: Any = SpendCategory.FOOD,
    ) -> ValidationResult:
        return self._validator.validate_daily_spend(
            date=date,
            amount=amount,
            description=description,
            category=category,
        )

    @staticmethod
    def label(record: DailySpendRecord) -> str:
        return f"{record.description} ({record.date.isoformat()})"


class DueDateManager(PayableCollectionManager[DueDateRecord]):
    """Upcoming bills. New bills start unpaid."""

    kind = RecordKind.DUE_DATES
    record_model = DueDateRecord

    def validate(
        self,
        name: Any = None,
        amount: Any = None,
        due_date: Any = None,
        category: Any = DueCategory.MISC,
    ) -> ValidationResult:
        return self._validator.validate_due_date(
            name=name,
            amount=amount,
            due_date=due_date,
            category=category,
        )

    @staticmethod
    def label(record: DueDateRecord) -> str:
        return f"{record.name} due {record.due_date.isoformat()}"
