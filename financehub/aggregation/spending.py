"""Daily spending analysis: monthly breakdown, soft limits and tips."""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from financehub.aggregation.calendar_grid import day_spends
from financehub.aggregation.status import dashboard_settings
from financehub.aggregation.totals import (
    daily_average,
    group_totals,
    month_filter,
    ranked_categories,
    total,
)
from financehub.config import DashboardSettings
from financehub.models.records import DAILY_SPEND_LIMITS, DailySpendRecord, SpendCategory
from financehub.models.summaries import (
    CategoryAmount,
    CategoryLimitStatus,
    MonthlySpendingAnalysis,
    SpendingTip,
)


def monthly_spending_analysis(
    records: Sequence[DailySpendRecord],
    today: Optional[date] = None,
) -> MonthlySpendingAnalysis:
    """
    Category totals, ranking, month total and average per elapsed day
    for the current calendar month.
    """
    today = today or date.today()
    in_month = month_filter(records, "date", today.month, today.year)
    totals = group_totals(in_month, "category")
    month_total = total(in_month)
    return MonthlySpendingAnalysis(
        category_totals=totals,
        ranked_categories=ranked_categories(totals),
        total_spent=month_total,
        average_daily=daily_average(month_total, today.day),
    )


def category_limit_status(
    records: Sequence[DailySpendRecord],
    day: Optional[date] = None,
) -> list[CategoryLimitStatus]:
    """One day's spend per category against its soft limit."""
    spends = day_spends(records, day or date.today())
    by_category = group_totals(spends, "category")
    statuses = []
    for category, limit in DAILY_SPEND_LIMITS.items():
        spent = by_category.get(category.value, total([]))
        statuses.append(CategoryLimitStatus(
            category=category,
            spent=spent,
            limit=limit,
            over_limit=spent > limit,
        ))
    return statuses


def over_limit_categories(analysis: MonthlySpendingAnalysis) -> list[CategoryAmount]:
    """Ranked categories whose month total already exceeds one day's limit."""
    return [
        entry for entry in analysis.ranked_categories
        if entry.amount > DAILY_SPEND_LIMITS[SpendCategory(entry.key)]
    ]


def spending_tips(
    analysis: MonthlySpendingAnalysis,
    settings: Optional[DashboardSettings] = None,
) -> list[SpendingTip]:
    cfg = dashboard_settings(settings)
    tips = []
    if analysis.average_daily > cfg.tip_average_daily:
        tips.append(SpendingTip.SET_DAILY_LIMIT)
    top = analysis.top_category
    if top is not None and top.key == SpendCategory.FOOD.value and top.amount > cfg.tip_food_month_total:
        tips.append(SpendingTip.COOK_AT_HOME)
    entertainment = analysis.category_totals.get(SpendCategory.ENTERTAINMENT.value)
    if entertainment is not None and entertainment > cfg.tip_entertainment_month_total:
        tips.append(SpendingTip.CUT_ENTERTAINMENT)
    if analysis.total_spent < cfg.tip_under_budget_total:
        tips.append(SpendingTip.UNDER_BUDGET)
    return tips
