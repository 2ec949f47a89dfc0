"""
Aggregation Package

Pure functions that turn record collections into the numbers the
dashboard shows. Nothing here touches storage or mutates its input.
"""

from financehub.aggregation.bills import (
    is_due_soon,
    is_overdue,
    paid_count,
    sort_due_dates,
    upcoming_total,
)
from financehub.aggregation.calendar_grid import (
    build_calendar_grid,
    calendar_month,
    classify_calendar_day,
    day_spends,
    day_total,
)
from financehub.aggregation.goals import (
    GoalOverdueError,
    goal_projection,
    goal_status,
    milestones,
    monthly_target,
    months_until,
    progress_percentage,
    progress_tier,
)
from financehub.aggregation.overview import (
    estimated_monthly_expenses,
    expense_category_breakdown,
    income_by_type,
    monthly_trend,
    overview_insights,
    overview_metrics,
)
from financehub.aggregation.spending import (
    category_limit_status,
    monthly_spending_analysis,
    over_limit_categories,
    spending_tips,
)
from financehub.aggregation.status import (
    cashflow_tone,
    classify_status,
    days_until,
    due_status,
    margin_badge,
    paid_total,
    payment_progress,
)
from financehub.aggregation.totals import (
    ZERO,
    as_decimal,
    daily_average,
    group_totals,
    last_months,
    month_filter,
    monthly_series,
    ranked_categories,
    total,
)

__all__ = [
    # Generic operations
    "ZERO",
    "as_decimal",
    "total",
    "group_totals",
    "ranked_categories",
    "month_filter",
    "daily_average",
    "last_months",
    "monthly_series",
    "classify_status",
    "days_until",
    # Calendar
    "build_calendar_grid",
    "calendar_month",
    "classify_calendar_day",
    "day_spends",
    "day_total",
    # Badges
    "cashflow_tone",
    "due_status",
    "margin_badge",
    "paid_total",
    "payment_progress",
    # Overview
    "estimated_monthly_expenses",
    "expense_category_breakdown",
    "income_by_type",
    "monthly_trend",
    "overview_insights",
    "overview_metrics",
    # Daily spending
    "category_limit_status",
    "monthly_spending_analysis",
    "over_limit_categories",
    "spending_tips",
    # Due dates
    "is_due_soon",
    "is_overdue",
    "paid_count",
    "sort_due_dates",
    "upcoming_total",
    # Savings goal
    "GoalOverdueError",
    "goal_projection",
    "goal_status",
    "milestones",
    "monthly_target",
    "months_until",
    "progress_percentage",
    "progress_tier",
]
