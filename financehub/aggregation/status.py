"""
Threshold Classification and Badges

All badge rules share one shape: compare a number against an ordered
set of thresholds and return the first tag that applies. Thresholds
are always evaluated from the highest down, so when ranges overlap the
most severe tag wins.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any, Optional, TypeVar, Union

from financehub.aggregation.totals import as_decimal, total
from financehub.config import DashboardSettings, get_settings
from financehub.models.records import DueDateRecord, ExpenseRecord
from financehub.models.summaries import (
    CashflowTone,
    DueStatus,
    MarginBadge,
    PaymentProgress,
)


Tag = TypeVar("Tag")

Thresholds = Union[Mapping[Tag, Any], Iterable[tuple[Tag, Any]]]


def dashboard_settings(settings: Optional[DashboardSettings] = None) -> DashboardSettings:
    return settings or get_settings().dashboard


def classify_status(
    value: Any,
    thresholds: Thresholds,
    default: Tag,
    strict: bool = False,
) -> Tag:
    """
    Map value to the tag of the highest threshold it reaches.

    Args:
        value: Number to classify
        thresholds: {tag: threshold} or [(tag, threshold), ...]
        default: Tag when no threshold is reached
        strict: Compare with > instead of >=

    Example:
        classify_status(120, {"high": 100, "medium": 50}, "ok", strict=True)
        returns "high", never "medium".
    """
    pairs = thresholds.items() if isinstance(thresholds, Mapping) else thresholds
    ordered = sorted(
        ((tag, as_decimal(limit)) for tag, limit in pairs),
        key=lambda pair: pair[1],
        reverse=True,
    )
    number = as_decimal(value)
    for tag, limit in ordered:
        if number > limit or (not strict and number == limit):
            return tag
    return default


def days_until(target_date: date, reference_date: Optional[date] = None) -> int:
    """
    Whole calendar days from reference_date to target_date.

    Negative means overdue, 0 means today. Dates, not datetimes,
    so there is no time-of-day or timezone drift.
    """
    reference_date = reference_date or date.today()
    return (target_date - reference_date).days


def due_status(
    record: DueDateRecord,
    today: Optional[date] = None,
    settings: Optional[DashboardSettings] = None,
) -> DueStatus:
    """Badge for one bill: paid, overdue, due soon, this week, or later."""
    if record.is_paid:
        return DueStatus.PAID
    cfg = dashboard_settings(settings)
    days = days_until(record.due_date, today)
    if days < 0:
        return DueStatus.OVERDUE
    if days <= cfg.due_soon_days:
        return DueStatus.DUE_SOON
    if days <= cfg.due_this_week_days:
        return DueStatus.THIS_WEEK
    return DueStatus.UPCOMING


def cashflow_tone(
    net_cashflow: Decimal,
    settings: Optional[DashboardSettings] = None,
) -> CashflowTone:
    cfg = dashboard_settings(settings)
    return classify_status(
        net_cashflow,
        {
            CashflowTone.EXCELLENT: cfg.cashflow_excellent,
            CashflowTone.GOOD: cfg.cashflow_good,
            CashflowTone.POSITIVE: 0,
        },
        default=CashflowTone.NEGATIVE,
        strict=True,
    )


def margin_badge(
    margin: Decimal,
    settings: Optional[DashboardSettings] = None,
) -> MarginBadge:
    cfg = dashboard_settings(settings)
    return classify_status(
        margin,
        {MarginBadge.GOOD: cfg.margin_good, MarginBadge.OK: cfg.margin_ok},
        default=MarginBadge.LOW,
    )


def payment_progress(paid: Decimal, owed: Decimal) -> PaymentProgress:
    """
    How far through the expense list the household is.

    Nothing owed counts as fully paid.
    """
    owed = as_decimal(owed)
    if owed <= 0:
        return PaymentProgress.MOSTLY_PAID
    return classify_status(
        as_decimal(paid) / owed,
        {PaymentProgress.MOSTLY_PAID: Decimal("0.8"), PaymentProgress.PARTLY_PAID: Decimal("0.5")},
        default=PaymentProgress.BEHIND,
        strict=True,
    )


def paid_total(expenses: Iterable[ExpenseRecord]) -> Decimal:
    return total(e for e in expenses if e.is_paid)
