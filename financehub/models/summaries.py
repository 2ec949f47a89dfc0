"""
Derived Value Models

Everything the aggregation layer hands to the views: summaries,
classification tags and validation results. None of these are
persisted; they are recomputed from the collections on every read.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from financehub.models.records import SpendCategory


# =============================================================================
# CLASSIFICATION TAGS
# =============================================================================

class Severity(str, Enum):
    """Generic severity scale for threshold classification."""
    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"


class DayClassification(str, Enum):
    """
    Calendar heatmap tag for one day of spending.

    Priority order matters: the first matching rule wins.
    """
    NONE = "none"                              # nothing spent
    HIGH = "high"                              # over the high threshold
    MEDIUM = "medium"                          # over the medium threshold
    MANY_TRANSACTIONS = "many_transactions"    # lots of small purchases
    NORMAL = "normal"


class DueStatus(str, Enum):
    """Badge shown next to an upcoming bill."""
    PAID = "paid"
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    THIS_WEEK = "this_week"
    UPCOMING = "upcoming"


class CashflowTone(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    POSITIVE = "positive"
    NEGATIVE = "negative"


class MarginBadge(str, Enum):
    GOOD = "good"
    OK = "ok"
    LOW = "low"


class PaymentProgress(str, Enum):
    """How much of the expense list has been paid off."""
    MOSTLY_PAID = "mostly_paid"
    PARTLY_PAID = "partly_paid"
    BEHIND = "behind"


class GoalProgressTier(str, Enum):
    COMPLETE = "complete"
    NEARLY_THERE = "nearly_there"
    ON_TRACK = "on_track"
    STARTED = "started"


class GoalStatus(str, Enum):
    """
    Where the savings goal stands relative to its target date.

    OVERDUE replaces the negative "months remaining" the dashboard
    used to show once the target date had passed.
    """
    REACHED = "reached"
    IN_PROGRESS = "in_progress"
    OVERDUE = "overdue"


class Insight(str, Enum):
    """Quick insights on the monthly overview."""
    EXCELLENT_CASHFLOW = "excellent_cashflow"
    OUTSTANDING_SAVINGS_RATE = "outstanding_savings_rate"
    HIGH_FIXED_EXPENSES = "high_fixed_expenses"
    LOW_BUSINESS_MARGIN = "low_business_margin"


class SpendingTip(str, Enum):
    """Smart tips on the daily spending page."""
    SET_DAILY_LIMIT = "set_daily_limit"
    COOK_AT_HOME = "cook_at_home"
    CUT_ENTERTAINMENT = "cut_entertainment"
    UNDER_BUDGET = "under_budget"


# =============================================================================
# SUMMARIES
# =============================================================================

class CategoryAmount(BaseModel):
    """One entry of a ranked category breakdown."""

    key: str
    amount: Decimal


class PeriodSummary(BaseModel):
    """
    Totals for one calendar month.

    has_data is False when no record fell in the month; totals are
    then zero. Nothing is invented to fill the gap.
    """

    year: int
    month: int = Field(ge=1, le=12)
    label: str
    total: Decimal = Decimal("0")
    by_key: dict[str, Decimal] = Field(default_factory=dict)
    record_count: int = Field(default=0, ge=0)
    has_data: bool = False


class MonthlyTrend(BaseModel):
    """One bar/point of the income-vs-expenses chart."""

    year: int
    month: int = Field(ge=1, le=12)
    label: str
    income: Decimal = Decimal("0")
    business: Decimal = Decimal("0")
    personal: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    daily_spending: Decimal = Decimal("0")
    has_data: bool = False

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses - self.daily_spending


class MonthlySpendingAnalysis(BaseModel):
    """Current-month view of the daily spending collection."""

    category_totals: dict[str, Decimal] = Field(default_factory=dict)
    ranked_categories: list[CategoryAmount] = Field(default_factory=list)
    total_spent: Decimal = Decimal("0")
    average_daily: Decimal = Decimal("0")

    @property
    def top_category(self) -> Optional[CategoryAmount]:
        return self.ranked_categories[0] if self.ranked_categories else None


class CategoryLimitStatus(BaseModel):
    """One day's spend in one category against its soft limit."""

    category: SpendCategory
    spent: Decimal
    limit: Decimal
    over_limit: bool


class CalendarCell(BaseModel):
    """A day cell of the spending calendar (None date = leading blank)."""

    date: Optional[datetime.date] = None
    total: Decimal = Decimal("0")
    transaction_count: int = 0
    classification: Optional[DayClassification] = None


class OverviewMetrics(BaseModel):
    """
    Monthly overview numbers.

    Ratios whose denominator is zero are None rather than NaN;
    the view shows them as "n/a".
    """

    total_income: Decimal
    total_expenses: Decimal
    business_income: Decimal
    personal_income: Decimal
    fixed_expenses: Decimal
    variable_expenses: Decimal
    net_cashflow: Decimal
    savings_rate: Optional[Decimal] = None
    business_margin: Optional[Decimal] = None
    fixed_share_of_income: Optional[Decimal] = None
    variable_share_of_income: Optional[Decimal] = None


class Milestone(BaseModel):
    label: str
    amount: Decimal
    reached: bool
    to_go: Decimal


class GoalProjection(BaseModel):
    """
    Savings goal outlook.

    months_remaining and monthly_target are None when the goal is
    OVERDUE: there is no meaningful denominator to divide by.
    """

    status: GoalStatus
    progress_percentage: Decimal
    remaining_amount: Decimal
    months_remaining: Optional[int] = None
    monthly_target: Optional[Decimal] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem with user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'unknown_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
    )


class ValidationResult(BaseModel):
    """
    Outcome of validating one add-form submission.

    cleaned holds the parsed field values when the input is valid;
    the manager builds the record from it.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)
    cleaned: dict = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]
