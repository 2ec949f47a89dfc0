"""Day-based aggregation for the spending calendar."""

import calendar
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from financehub.aggregation.status import classify_status, dashboard_settings
from financehub.aggregation.totals import as_decimal, total
from financehub.config import DashboardSettings
from financehub.models.records import DailySpendRecord
from financehub.models.summaries import CalendarCell, DayClassification


def build_calendar_grid(year: int, month: int) -> list[Optional[date]]:
    """
    Cells for a Sunday-first month view.

    Leading None placeholders fill the week before the 1st (0 for a
    Sunday, 6 for a Saturday), then one date per day. No trailing
    padding.
    """
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar uses Monday=0; the grid starts on Sunday
    leading = (first_weekday + 1) % 7
    cells: list[Optional[date]] = [None] * leading
    cells.extend(date(year, month, day) for day in range(1, days_in_month + 1))
    return cells


def classify_calendar_day(
    day_total: Decimal,
    transaction_count: int,
    settings: Optional[DashboardSettings] = None,
) -> DayClassification:
    """
    Heatmap tag for one day. Rules are checked in this order and
    the first one that holds wins:

    nothing spent -> NONE
    total > high -> HIGH
    total > medium -> MEDIUM
    more than N purchases -> MANY_TRANSACTIONS
    otherwise -> NORMAL
    """
    cfg = dashboard_settings(settings)
    day_total = as_decimal(day_total)
    if day_total <= 0:
        return DayClassification.NONE
    by_amount = classify_status(
        day_total,
        {
            DayClassification.HIGH: cfg.calendar_high_total,
            DayClassification.MEDIUM: cfg.calendar_medium_total,
        },
        default=None,
        strict=True,
    )
    if by_amount is not None:
        return by_amount
    if transaction_count > cfg.calendar_many_transactions:
        return DayClassification.MANY_TRANSACTIONS
    return DayClassification.NORMAL


def day_spends(records: Iterable[DailySpendRecord], day: date) -> list[DailySpendRecord]:
    return [r for r in records if r.date == day]


def day_total(records: Iterable[DailySpendRecord], day: date) -> Decimal:
    return total(day_spends(records, day))


def calendar_month(
    records: Sequence[DailySpendRecord],
    year: int,
    month: int,
    settings: Optional[DashboardSettings] = None,
) -> list[CalendarCell]:
    """The calendar grid with each day's total and heatmap tag filled in."""
    cells = []
    for day in build_calendar_grid(year, month):
        if day is None:
            cells.append(CalendarCell())
            continue
        spends = day_spends(records, day)
        spent = total(spends)
        cells.append(CalendarCell(
            date=day,
            total=spent,
            transaction_count=len(spends),
            classification=classify_calendar_day(spent, len(spends), settings),
        ))
    return cells
