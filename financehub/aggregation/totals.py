"""
Totals, Grouping and Monthly Series

DESIGN DECISION: Aggregation is DETERMINISTIC and side-effect free.
Every function here:
- Reads its input, never mutates it
- Returns zero / empty results for empty input, never raises
- Works on Decimal; rounding to cents happens only when displaying

Records can be pydantic models or plain dicts (as read from the
store), so field access goes through _field().
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, TypeVar

from financehub.models.summaries import CategoryAmount, PeriodSummary


R = TypeVar("R")

ZERO = Decimal("0")


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name)


def as_decimal(value: Any) -> Decimal:
    """Convert a stored amount to Decimal without binary float noise."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Amount is not finite: {value}")
        return Decimal(repr(value))
    return Decimal(str(value))


def as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _key(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def total(records: Iterable[Any], amount_field: str = "amount") -> Decimal:
    """Sum of amount_field over all records. Empty input sums to 0."""
    return sum((as_decimal(_field(r, amount_field)) for r in records), ZERO)


def group_totals(
    records: Iterable[Any],
    key_field: str,
    amount_field: str = "amount",
) -> dict[str, Decimal]:
    """
    Partition records by key_field and sum each partition.

    Keys appear in order of first occurrence; enum keys are
    reduced to their string values.
    """
    totals: dict[str, Decimal] = {}
    for record in records:
        key = _key(_field(record, key_field))
        totals[key] = totals.get(key, ZERO) + as_decimal(_field(record, amount_field))
    return totals


def ranked_categories(totals: Mapping[str, Decimal]) -> list[CategoryAmount]:
    """Group totals, largest first. Ties keep the mapping's order."""
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryAmount(key=key, amount=amount) for key, amount in ordered]


def month_filter(
    records: Iterable[R],
    date_field: str,
    month: int,
    year: int,
) -> list[R]:
    """Records whose date falls in the given calendar month."""
    selected = []
    for record in records:
        when = as_date(_field(record, date_field))
        if when.year == year and when.month == month:
            selected.append(record)
    return selected


def daily_average(month_total: Decimal, day_of_month: int) -> Decimal:
    """
    Average spend per elapsed day of the month (day 1-indexed).

    day_of_month comes from a real date, so it is never below 1.
    """
    if day_of_month < 1:
        raise ValueError(f"day_of_month must be at least 1, got {day_of_month}")
    return as_decimal(month_total) / day_of_month


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """(year, month) moved by offset calendar months."""
    index = year * 12 + (month - 1) + offset
    shifted_year, shifted_month = divmod(index, 12)
    return shifted_year, shifted_month + 1


def month_label(year: int, month: int) -> str:
    return date(year, month, 1).strftime("%b")


def last_months(today: date, months_back: int) -> list[tuple[int, int]]:
    """The months_back calendar months ending at today's month, oldest first."""
    return [
        shift_month(today.year, today.month, -offset)
        for offset in range(months_back - 1, -1, -1)
    ]


def monthly_series(
    records: Sequence[Any],
    date_field: str = "date",
    key_field: Optional[str] = None,
    amount_field: str = "amount",
    today: Optional[date] = None,
    months_back: int = 6,
) -> list[PeriodSummary]:
    """
    One PeriodSummary per calendar month ending at the current month.

    Months without records are returned with has_data=False and zero
    totals; no placeholder numbers are made up for them.
    """
    today = today or date.today()
    series = []
    for year, month in last_months(today, max(months_back, 0)):
        in_month = month_filter(records, date_field, month, year)
        series.append(PeriodSummary(
            year=year,
            month=month,
            label=month_label(year, month),
            total=total(in_month, amount_field),
            by_key=group_totals(in_month, key_field, amount_field) if key_field else {},
            record_count=len(in_month),
            has_data=bool(in_month),
        ))
    return series
