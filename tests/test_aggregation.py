"""
Tests for the aggregation layer.

All functions are pure, so every test builds its own records and
passes a fixed "today".
"""

import pytest
from datetime import date
from decimal import Decimal

from financehub.aggregation import (
    build_calendar_grid,
    calendar_month,
    cashflow_tone,
    category_limit_status,
    classify_calendar_day,
    classify_status,
    daily_average,
    day_spends,
    day_total,
    days_until,
    due_status,
    estimated_monthly_expenses,
    expense_category_breakdown,
    group_totals,
    income_by_type,
    is_due_soon,
    is_overdue,
    margin_badge,
    month_filter,
    monthly_series,
    monthly_spending_analysis,
    monthly_trend,
    over_limit_categories,
    overview_insights,
    overview_metrics,
    paid_count,
    paid_total,
    payment_progress,
    ranked_categories,
    sort_due_dates,
    spending_tips,
    total,
    upcoming_total,
)
from financehub.aggregation.totals import shift_month
from financehub.models import (
    CashflowTone,
    DailySpendRecord,
    DayClassification,
    DueDateRecord,
    DueStatus,
    ExpenseRecord,
    IncomeRecord,
    Insight,
    MarginBadge,
    PaymentProgress,
    SpendCategory,
    SpendingTip,
)


def income(amount, kind="business", when=date(2024, 3, 1), source="Client"):
    return IncomeRecord(source=source, amount=Decimal(str(amount)), type=kind, date=when)


def expense(amount, category="misc", is_paid=False, is_recurring=False, name="Item"):
    return ExpenseRecord(
        name=name,
        amount=Decimal(str(amount)),
        category=category,
        is_paid=is_paid,
        is_recurring=is_recurring,
    )


def spend(amount, when, category="food", description="Purchase"):
    return DailySpendRecord(
        date=when,
        category=category,
        amount=Decimal(str(amount)),
        description=description,
    )


def bill(amount, due, is_paid=False, name="Bill"):
    return DueDateRecord(name=name, amount=Decimal(str(amount)), due_date=due, category="misc", is_paid=is_paid)


class TestTotals:
    """Tests for totals and grouping."""

    def test_total_of_empty_is_zero(self):
        assert total([]) == Decimal("0")

    def test_total_is_exact(self):
        records = [expense("0.10"), expense("0.20")]
        assert total(records) == Decimal("0.30")

    def test_total_accepts_stored_dicts(self):
        assert total([{"amount": "1.50"}, {"amount": 2}]) == Decimal("3.50")

    def test_group_totals_partition(self):
        """Group totals always add back up to the overall total."""
        records = [
            expense("300", "rent"),
            expense("15.99", "subscription"),
            expense("40", "baby"),
            expense("9.01", "subscription"),
        ]
        groups = group_totals(records, "category")
        assert groups == {
            "rent": Decimal("300"),
            "subscription": Decimal("25.00"),
            "baby": Decimal("40"),
        }
        assert sum(groups.values()) == total(records)

    def test_ranked_categories_descending(self):
        ranked = ranked_categories({"a": Decimal("1"), "b": Decimal("3"), "c": Decimal("2")})
        assert [entry.key for entry in ranked] == ["b", "c", "a"]

    def test_ranked_categories_ties_keep_order(self):
        ranked = ranked_categories({"x": Decimal("5"), "y": Decimal("5")})
        assert [entry.key for entry in ranked] == ["x", "y"]

    def test_month_filter(self):
        records = [
            income(1, when=date(2024, 3, 1)),
            income(2, when=date(2024, 3, 31)),
            income(3, when=date(2024, 2, 29)),
            income(4, when=date(2023, 3, 10)),
        ]
        selected = month_filter(records, "date", 3, 2024)
        assert [r.amount for r in selected] == [Decimal("1"), Decimal("2")]

    def test_daily_average(self):
        assert daily_average(Decimal("300"), 15) == Decimal("20")

    def test_daily_average_rejects_day_zero(self):
        with pytest.raises(ValueError):
            daily_average(Decimal("300"), 0)

    def test_shift_month_across_years(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2023, 12, 1) == (2024, 1)


class TestMonthlySeries:
    """Tests for the per-month series."""

    def test_one_entry_per_month_oldest_first(self):
        series = monthly_series([], today=date(2024, 3, 15), months_back=3)
        assert [(p.year, p.month, p.label) for p in series] == [
            (2024, 1, "Jan"),
            (2024, 2, "Feb"),
            (2024, 3, "Mar"),
        ]

    def test_empty_months_are_marked_not_invented(self):
        records = [spend(40, date(2024, 2, 10)), spend(10, date(2024, 2, 11), category="gas")]
        series = monthly_series(
            records,
            key_field="category",
            today=date(2024, 3, 15),
            months_back=3,
        )
        jan, feb, mar = series
        assert jan.has_data is False and jan.total == Decimal("0")
        assert mar.has_data is False and mar.total == Decimal("0")
        assert feb.has_data is True
        assert feb.total == Decimal("50")
        assert feb.by_key == {"food": Decimal("40"), "gas": Decimal("10")}
        assert feb.record_count == 2


class TestCalendar:
    """Tests for the calendar grid and heatmap."""

    def test_leap_year_february(self):
        cells = build_calendar_grid(2024, 2)
        dates = [c for c in cells if c is not None]
        # 1 Feb 2024 was a Thursday
        assert cells[:4] == [None, None, None, None]
        assert len(dates) == 29
        assert dates[-1] == date(2024, 2, 29)

    def test_non_leap_february(self):
        cells = build_calendar_grid(2023, 2)
        # 1 Feb 2023 was a Wednesday
        assert cells[:3] == [None, None, None]
        assert len([c for c in cells if c is not None]) == 28
        assert len(cells) == 31

    def test_month_starting_on_sunday_has_no_blanks(self):
        cells = build_calendar_grid(2024, 9)
        assert cells[0] == date(2024, 9, 1)

    def test_classification_priority(self, dashboard_settings):
        classify = lambda amount, count: classify_calendar_day(Decimal(amount), count, dashboard_settings)
        assert classify("0", 0) == DayClassification.NONE
        assert classify("120", 1) == DayClassification.HIGH
        assert classify("120", 10) == DayClassification.HIGH
        assert classify("100", 1) == DayClassification.MEDIUM
        assert classify("75", 1) == DayClassification.MEDIUM
        assert classify("50", 6) == DayClassification.MANY_TRANSACTIONS
        assert classify("50", 5) == DayClassification.NORMAL

    def test_calendar_month_cells(self, dashboard_settings):
        records = [spend(30, date(2024, 2, 2)), spend(90, date(2024, 2, 2))]
        cells = calendar_month(records, 2024, 2, dashboard_settings)
        assert len(cells) == 33
        assert cells[0].date is None
        second = cells[5]
        assert second.date == date(2024, 2, 2)
        assert second.total == Decimal("120")
        assert second.transaction_count == 2
        assert second.classification == DayClassification.HIGH
        assert day_total(records, date(2024, 2, 2)) == Decimal("120")

    def test_selected_day_detail(self):
        lunch = spend(12, date(2024, 3, 14))
        shop = spend(40, date(2024, 3, 14))
        records = [lunch, spend(5, date(2024, 3, 13)), shop]

        assert day_spends(records, date(2024, 3, 14)) == [lunch, shop]
        assert day_total(records, date(2024, 3, 14)) == Decimal("52")
        assert day_spends(records, date(2024, 3, 1)) == []
        assert day_total(records, date(2024, 3, 1)) == Decimal("0")


class TestClassification:
    """Tests for the threshold badges."""

    def test_highest_threshold_wins(self):
        assert classify_status(120, {"high": 100, "medium": 50}, "ok", strict=True) == "high"
        assert classify_status(120, [("medium", 50), ("high", 100)], "ok") == "high"
        assert classify_status(10, {"high": 100, "medium": 50}, "ok") == "ok"

    def test_days_until(self):
        reference = date(2024, 3, 15)
        assert days_until(date(2024, 3, 17), reference) == 2
        assert days_until(date(2024, 3, 12), reference) == -3
        assert days_until(reference, reference) == 0

    @pytest.mark.parametrize("due,expected", [
        (date(2024, 3, 14), DueStatus.OVERDUE),
        (date(2024, 3, 15), DueStatus.DUE_SOON),
        (date(2024, 3, 18), DueStatus.DUE_SOON),
        (date(2024, 3, 20), DueStatus.THIS_WEEK),
        (date(2024, 3, 23), DueStatus.UPCOMING),
    ])
    def test_due_status(self, today, dashboard_settings, due, expected):
        assert due_status(bill(10, due), today, dashboard_settings) == expected

    def test_paid_bill_is_paid_even_if_past_due(self, today, dashboard_settings):
        assert due_status(bill(10, date(2024, 1, 1), is_paid=True), today, dashboard_settings) == DueStatus.PAID

    def test_cashflow_tone(self, dashboard_settings):
        assert cashflow_tone(Decimal("2500"), dashboard_settings) == CashflowTone.EXCELLENT
        assert cashflow_tone(Decimal("2000"), dashboard_settings) == CashflowTone.GOOD
        assert cashflow_tone(Decimal("1000"), dashboard_settings) == CashflowTone.POSITIVE
        assert cashflow_tone(Decimal("0"), dashboard_settings) == CashflowTone.NEGATIVE

    def test_margin_badge(self, dashboard_settings):
        assert margin_badge(Decimal("50"), dashboard_settings) == MarginBadge.GOOD
        assert margin_badge(Decimal("30"), dashboard_settings) == MarginBadge.OK
        assert margin_badge(Decimal("29.9"), dashboard_settings) == MarginBadge.LOW

    def test_payment_progress(self):
        assert payment_progress(Decimal("0"), Decimal("0")) == PaymentProgress.MOSTLY_PAID
        assert payment_progress(Decimal("81"), Decimal("100")) == PaymentProgress.MOSTLY_PAID
        assert payment_progress(Decimal("80"), Decimal("100")) == PaymentProgress.PARTLY_PAID
        assert payment_progress(Decimal("50"), Decimal("100")) == PaymentProgress.BEHIND

    def test_paid_total(self):
        records = [expense(100, is_paid=True), expense(50), expense(25, is_paid=True)]
        assert paid_total(records) == Decimal("125")


class TestOverview:
    """Tests for the monthly overview numbers and insights."""

    def test_income_by_type_always_has_both_keys(self):
        assert income_by_type([]) == {"business": Decimal("0"), "personal": Decimal("0")}

    def test_overview_metrics(self, dashboard_settings):
        incomes = [income(3000), income(1000, kind="personal")]
        expenses = [expense(1000, "rent"), expense(200)]
        metrics = overview_metrics(incomes, expenses, dashboard_settings)

        assert metrics.total_income == Decimal("4000")
        assert metrics.total_expenses == Decimal("1200")
        assert metrics.net_cashflow == Decimal("2800")
        assert metrics.fixed_expenses == Decimal("1020")
        assert metrics.variable_expenses == Decimal("180")
        assert metrics.savings_rate == Decimal("70")
        assert metrics.business_margin == Decimal("50")
        assert metrics.fixed_share_of_income == Decimal("25.5")

        assert overview_insights(metrics, dashboard_settings) == [
            Insight.EXCELLENT_CASHFLOW,
            Insight.OUTSTANDING_SAVINGS_RATE,
        ]

    def test_empty_overview_has_no_ratios(self, dashboard_settings):
        """Zero denominators give None, never NaN or an exception."""
        metrics = overview_metrics([], [], dashboard_settings)
        assert metrics.savings_rate is None
        assert metrics.business_margin is None
        assert metrics.fixed_share_of_income is None
        assert overview_insights(metrics, dashboard_settings) == []

    def test_warning_insights(self, dashboard_settings):
        incomes = [income(1600)]
        expenses = [expense(1500, "rent")]
        metrics = overview_metrics(incomes, expenses, dashboard_settings)
        insights = overview_insights(metrics, dashboard_settings)
        assert Insight.HIGH_FIXED_EXPENSES in insights
        assert Insight.LOW_BUSINESS_MARGIN in insights
        assert Insight.EXCELLENT_CASHFLOW not in insights

    def test_expense_category_breakdown(self):
        breakdown = expense_category_breakdown([expense(10, "baby"), expense(300, "rent"), expense(5, "baby")])
        assert [(e.key, e.amount) for e in breakdown] == [
            ("rent", Decimal("300")),
            ("baby", Decimal("15")),
        ]


class TestMonthlyTrend:
    """Tests for the income-vs-expenses trend."""

    def test_expense_estimate(self):
        expenses = [
            expense(300, "rent", is_paid=True, is_recurring=True),
            expense(90, is_paid=True),
            expense(1000),
        ]
        assert estimated_monthly_expenses(expenses, 3) == Decimal("330")

    def test_trend(self):
        incomes = [
            income(500, when=date(2024, 3, 2)),
            income(200, kind="personal", when=date(2024, 3, 5)),
        ]
        spends = [spend(40, date(2024, 2, 10))]
        expenses = [expense(300, "rent", is_paid=True, is_recurring=True)]

        trend = monthly_trend(incomes, expenses, spends, today=date(2024, 3, 15), months_back=3)

        assert [point.label for point in trend] == ["Jan", "Feb", "Mar"]
        jan, feb, mar = trend
        assert jan.has_data is False
        assert jan.income == Decimal("0")
        assert jan.expenses == Decimal("300")
        assert feb.has_data is True
        assert feb.daily_spending == Decimal("40")
        assert mar.income == Decimal("700")
        assert mar.business == Decimal("500")
        assert mar.personal == Decimal("200")
        assert mar.net == Decimal("400")


class TestDailySpending:
    """Tests for the daily spending analysis."""

    @pytest.fixture
    def spends(self):
        return [
            spend(200, date(2024, 3, 1)),
            spend(150, date(2024, 3, 5)),
            spend(250, date(2024, 3, 9), category="entertainment"),
            spend(999, date(2024, 2, 28)),
        ]

    def test_monthly_analysis(self, spends):
        analysis = monthly_spending_analysis(spends, today=date(2024, 3, 10))
        assert analysis.category_totals == {"food": Decimal("350"), "entertainment": Decimal("250")}
        assert analysis.total_spent == Decimal("600")
        assert analysis.average_daily == Decimal("60")
        assert analysis.top_category.key == "food"

    def test_empty_analysis(self):
        analysis = monthly_spending_analysis([], today=date(2024, 3, 10))
        assert analysis.total_spent == Decimal("0")
        assert analysis.top_category is None

    def test_spending_tips(self, spends, dashboard_settings):
        analysis = monthly_spending_analysis(spends, today=date(2024, 3, 10))
        assert spending_tips(analysis, dashboard_settings) == [
            SpendingTip.COOK_AT_HOME,
            SpendingTip.CUT_ENTERTAINMENT,
            SpendingTip.UNDER_BUDGET,
        ]

    def test_over_limit_categories(self, spends):
        analysis = monthly_spending_analysis(spends, today=date(2024, 3, 10))
        assert [entry.key for entry in over_limit_categories(analysis)] == ["food", "entertainment"]

    def test_category_limit_status(self, spends):
        statuses = category_limit_status(spends, date(2024, 3, 9))
        assert [s.category for s in statuses] == [
            SpendCategory.FOOD,
            SpendCategory.GROCERIES,
            SpendCategory.GAS,
            SpendCategory.CLOTHING,
            SpendCategory.ENTERTAINMENT,
            SpendCategory.UTILITIES,
            SpendCategory.MISC,
        ]
        entertainment = statuses[4]
        assert entertainment.spent == Decimal("250")
        assert entertainment.over_limit is True
        assert statuses[0].spent == Decimal("0")
        assert statuses[0].over_limit is False


class TestDueDates:
    """Tests for the bill list helpers."""

    def test_sort_unpaid_first_then_by_date(self):
        records = [
            bill(1, date(2024, 3, 1), is_paid=True, name="paid-early"),
            bill(1, date(2024, 3, 20), name="late"),
            bill(1, date(2024, 3, 10), name="early"),
        ]
        assert [r.name for r in sort_due_dates(records)] == ["early", "late", "paid-early"]

    def test_upcoming_total_excludes_paid_and_overdue(self, today):
        records = [
            bill(100, date(2024, 3, 15)),
            bill(50, date(2024, 4, 1)),
            bill(999, date(2024, 3, 14)),
            bill(999, date(2024, 3, 20), is_paid=True),
        ]
        assert upcoming_total(records, today) == Decimal("150")

    def test_overdue_and_due_soon(self, today, dashboard_settings):
        assert is_overdue(bill(1, date(2024, 3, 14)), today) is True
        assert is_overdue(bill(1, date(2024, 3, 14), is_paid=True), today) is False
        assert is_due_soon(bill(1, date(2024, 3, 18)), today, dashboard_settings) is True
        assert is_due_soon(bill(1, date(2024, 3, 19)), today, dashboard_settings) is False

    def test_paid_count(self):
        records = [bill(1, date(2024, 3, 1), is_paid=True), bill(1, date(2024, 3, 2))]
        assert paid_count(records) == (1, 2)
