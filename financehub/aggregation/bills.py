"""Upcoming bill derivations for the due dates view."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from financehub.aggregation.status import dashboard_settings, days_until
from financehub.aggregation.totals import total
from financehub.config import DashboardSettings
from financehub.models.records import DueDateRecord


def sort_due_dates(records: Iterable[DueDateRecord]) -> list[DueDateRecord]:
    """Unpaid bills first, each group by ascending due date."""
    return sorted(records, key=lambda r: (r.is_paid, r.due_date))


def upcoming_total(records: Iterable[DueDateRecord], today: Optional[date] = None) -> Decimal:
    """Unpaid bills due today or later. Overdue bills are not included."""
    return total(
        r for r in records
        if not r.is_paid and days_until(r.due_date, today) >= 0
    )


def is_overdue(record: DueDateRecord, today: Optional[date] = None) -> bool:
    return not record.is_paid and days_until(record.due_date, today) < 0


def is_due_soon(
    record: DueDateRecord,
    today: Optional[date] = None,
    settings: Optional[DashboardSettings] = None,
) -> bool:
    days = days_until(record.due_date, today)
    return not record.is_paid and 0 <= days <= dashboard_settings(settings).due_soon_days


def paid_count(records: Iterable[DueDateRecord]) -> tuple[int, int]:
    """(paid, total) bill counts."""
    records = list(records)
    return sum(1 for r in records if r.is_paid), len(records)
