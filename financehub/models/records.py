"""
Core Record Models for FinanceHub

These models define the strict schemas for every record the user enters.
They are designed to:
1. Enforce type safety at runtime
2. Reject unknown categories at the storage boundary
3. Serialize to the same JSON shape the dashboard has always stored
4. Stay immutable once created

DESIGN DECISION: Records are frozen. The only "mutation" is an explicit
status change (is_paid), which produces a new record via model_copy.
Python attributes are snake_case; the persisted JSON keeps the camelCase
keys (isPaid, dueDate, isRecurring) through an alias generator.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class IncomeType(str, Enum):
    """Where an income entry came from."""
    BUSINESS = "business"
    PERSONAL = "personal"


class ExpenseCategory(str, Enum):
    """
    Household expense categories.

    DESIGN DECISION: Explicit categories rather than free text keep
    the category breakdown chart stable.
    """
    RENT = "rent"
    SUBSCRIPTION = "subscription"
    MISC = "misc"
    BABY = "baby"


class SpendCategory(str, Enum):
    """Categories for day-to-day discretionary spending."""
    FOOD = "food"
    GAS = "gas"
    CLOTHING = "clothing"
    ENTERTAINMENT = "entertainment"
    MISC = "misc"
    GROCERIES = "groceries"
    UTILITIES = "utilities"


class DueCategory(str, Enum):
    """Categories for upcoming bills."""
    RENT = "rent"
    SUBSCRIPTION = "subscription"
    CARD = "card"
    MISC = "misc"


# Daily soft limits per spend category. Used for warnings only,
# nothing is ever blocked for exceeding them.
DAILY_SPEND_LIMITS: dict[SpendCategory, Decimal] = {
    SpendCategory.FOOD: Decimal("50"),
    SpendCategory.GROCERIES: Decimal("150"),
    SpendCategory.GAS: Decimal("80"),
    SpendCategory.CLOTHING: Decimal("100"),
    SpendCategory.ENTERTAINMENT: Decimal("75"),
    SpendCategory.UTILITIES: Decimal("200"),
    SpendCategory.MISC: Decimal("60"),
}


Amount = Annotated[
    Decimal,
    Field(ge=0, allow_inf_nan=False, description="Non-negative amount in dollars"),
]


def new_record_id() -> str:
    """Generate a fresh record id."""
    return str(uuid4())


# =============================================================================
# RECORDS
# =============================================================================

class Record(BaseModel):
    """
    Base for every persisted record.

    Ids are plain strings: new records get a uuid4, but stored
    data from older versions used short numeric strings and must
    still load.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Unique id within the record's collection"
    )
    amount: Amount

    def to_storage(self) -> dict:
        """Serialize to the JSON shape kept in the record store."""
        return self.model_dump(mode="json", by_alias=True)


class IncomeRecord(Record):
    """A single income entry."""

    source: str = Field(..., min_length=1, max_length=200)
    type: IncomeType
    date: datetime.date


class ExpenseRecord(Record):
    """
    A household expense.

    Created unpaid; the user toggles is_paid from the expense list.
    """

    name: str = Field(..., min_length=1, max_length=200)
    category: ExpenseCategory
    is_paid: bool = False
    is_recurring: bool = False
    purpose: Optional[str] = Field(
        default=None,
        max_length=500,
        description="What the expense is for"
    )


class DailySpendRecord(Record):
    """One purchase on one day."""

    date: datetime.date
    category: SpendCategory
    description: str = Field(..., min_length=1, max_length=200)

    @property
    def daily_limit(self) -> Decimal:
        return DAILY_SPEND_LIMITS[self.category]


class DueDateRecord(Record):
    """
    An upcoming bill.

    Display order is unpaid first, then by due date; the
    collection itself stays in insertion order.
    """

    name: str = Field(..., min_length=1, max_length=200)
    due_date: datetime.date
    is_paid: bool = False
    category: DueCategory


class SavingsState(BaseModel):
    """
    The savings goal: one mutable balance against a fixed target.

    current_amount is clamped at zero by the tracker, never here.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    current_amount: Amount
    goal_amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    target_date: datetime.date

    @property
    def remaining_amount(self) -> Decimal:
        return self.goal_amount - self.current_amount

    @property
    def is_reached(self) -> bool:
        return self.current_amount >= self.goal_amount

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RecordKind(str, Enum):
    """The four collections, valued by their record-store keys."""
    INCOMES = "incomes"
    EXPENSES = "expenses"
    DAILY_SPENDS = "dailySpends"
    DUE_DATES = "dueDates"


RECORD_MODELS: dict[RecordKind, type[Record]] = {
    RecordKind.INCOMES: IncomeRecord,
    RecordKind.EXPENSES: ExpenseRecord,
    RecordKind.DAILY_SPENDS: DailySpendRecord,
    RecordKind.DUE_DATES: DueDateRecord,
}
