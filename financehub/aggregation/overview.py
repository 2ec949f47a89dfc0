"""
Monthly Overview and Trend

Income and expense totals, the ratios built on them and the
per-month trend series behind the income-vs-expenses chart.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from financehub.aggregation.status import cashflow_tone, dashboard_settings
from financehub.aggregation.totals import (
    ZERO,
    group_totals,
    last_months,
    month_filter,
    month_label,
    ranked_categories,
    total,
)
from financehub.config import DashboardSettings
from financehub.models.records import (
    DailySpendRecord,
    ExpenseRecord,
    IncomeRecord,
    IncomeType,
)
from financehub.models.summaries import (
    CashflowTone,
    CategoryAmount,
    Insight,
    MonthlyTrend,
    OverviewMetrics,
)


def _percent(numerator: Decimal, denominator: Decimal) -> Optional[Decimal]:
    if denominator == 0:
        return None
    return numerator / denominator * 100


def income_by_type(incomes: Sequence[IncomeRecord]) -> dict[str, Decimal]:
    """Business and personal totals; both keys always present."""
    totals = group_totals(incomes, "type")
    return {kind.value: totals.get(kind.value, ZERO) for kind in IncomeType}


def expense_category_breakdown(expenses: Sequence[ExpenseRecord]) -> list[CategoryAmount]:
    return ranked_categories(group_totals(expenses, "category"))


def overview_metrics(
    incomes: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    settings: Optional[DashboardSettings] = None,
) -> OverviewMetrics:
    """
    Headline numbers for the overview page.

    The fixed/variable split of expenses and the business running
    costs behind the margin are configured estimates, not data.
    """
    cfg = dashboard_settings(settings)
    by_type = income_by_type(incomes)
    total_income = total(incomes)
    total_expenses = total(expenses)
    business = by_type[IncomeType.BUSINESS.value]
    fixed = total_expenses * cfg.fixed_expense_share
    variable = total_expenses * cfg.variable_expense_share
    net = total_income - total_expenses

    return OverviewMetrics(
        total_income=total_income,
        total_expenses=total_expenses,
        business_income=business,
        personal_income=by_type[IncomeType.PERSONAL.value],
        fixed_expenses=fixed,
        variable_expenses=variable,
        net_cashflow=net,
        savings_rate=_percent(net, total_income),
        business_margin=_percent(business - cfg.assumed_business_expenses, business),
        fixed_share_of_income=_percent(fixed, total_income),
        variable_share_of_income=_percent(variable, total_income),
    )


def overview_insights(
    metrics: OverviewMetrics,
    settings: Optional[DashboardSettings] = None,
) -> list[Insight]:
    """Insights in display order. Undefined ratios never trigger one."""
    cfg = dashboard_settings(settings)
    insights = []
    if cashflow_tone(metrics.net_cashflow, cfg) == CashflowTone.EXCELLENT:
        insights.append(Insight.EXCELLENT_CASHFLOW)
    if metrics.savings_rate is not None and metrics.savings_rate >= cfg.savings_rate_outstanding:
        insights.append(Insight.OUTSTANDING_SAVINGS_RATE)
    if metrics.fixed_share_of_income is not None and metrics.fixed_share_of_income > cfg.fixed_share_high:
        insights.append(Insight.HIGH_FIXED_EXPENSES)
    if metrics.business_margin is not None and metrics.business_margin < cfg.margin_ok:
        insights.append(Insight.LOW_BUSINESS_MARGIN)
    return insights


def estimated_monthly_expenses(expenses: Sequence[ExpenseRecord], months_back: int) -> Decimal:
    """
    Expenses have no date, so a month's share is estimated: paid
    recurring expenses count in full, paid one-time expenses are
    spread evenly over the window.
    """
    paid = [e for e in expenses if e.is_paid]
    recurring = total(e for e in paid if e.is_recurring)
    one_time = total(e for e in paid if not e.is_recurring)
    if months_back <= 0:
        return recurring
    return recurring + one_time / months_back


def monthly_trend(
    incomes: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    daily_spends: Sequence[DailySpendRecord],
    today: Optional[date] = None,
    months_back: Optional[int] = None,
) -> list[MonthlyTrend]:
    """
    Income, expenses and daily spending for the last months_back
    calendar months, oldest first.

    has_data is only True for months with dated income or spending
    records; the expense estimate alone does not count as data.
    """
    today = today or date.today()
    if months_back is None:
        months_back = dashboard_settings().months_back
    expense_estimate = estimated_monthly_expenses(expenses, months_back)

    trend = []
    for year, month in last_months(today, max(months_back, 0)):
        month_incomes = month_filter(incomes, "date", month, year)
        month_spends = month_filter(daily_spends, "date", month, year)
        by_type = income_by_type(month_incomes)
        trend.append(MonthlyTrend(
            year=year,
            month=month,
            label=month_label(year, month),
            income=total(month_incomes),
            business=by_type[IncomeType.BUSINESS.value],
            personal=by_type[IncomeType.PERSONAL.value],
            expenses=expense_estimate,
            daily_spending=total(month_spends),
            has_data=bool(month_incomes or month_spends),
        ))
    return trend
