"""Tests for the plotly figure builders used by the app."""

from datetime import date
from decimal import Decimal

from charts import (
    create_category_bar_chart,
    create_category_pie_chart,
    create_income_line_chart,
    create_series_line_chart,
    create_trend_bar_chart,
)
from financehub.aggregation import monthly_series
from financehub.models import CategoryAmount, MonthlyTrend


def trend_point(month, income="0", has_data=True):
    return MonthlyTrend(
        year=2024,
        month=month,
        label=date(2024, month, 1).strftime("%b"),
        income=Decimal(income),
        business=Decimal(income),
        has_data=has_data,
    )


class TestCharts:

    def test_empty_inputs(self):
        for fig in (
            create_trend_bar_chart([]),
            create_income_line_chart([]),
            create_category_pie_chart([]),
            create_category_bar_chart([]),
            create_series_line_chart(monthly_series([], today=date(2024, 3, 1), months_back=3)),
        ):
            assert fig.layout.title.text == "No data to display"

    def test_trend_bar_chart(self):
        fig = create_trend_bar_chart([trend_point(2, has_data=False), trend_point(3, "500")])
        assert [trace.name for trace in fig.data] == ["Income", "Expenses (est.)", "Daily spending"]
        assert list(fig.data[0].x) == ["Feb", "Mar"]
        assert list(fig.data[0].y) == [0.0, 500.0]

    def test_pie_chart_labels(self):
        fig = create_category_pie_chart([
            CategoryAmount(key="rent", amount=Decimal("300")),
            CategoryAmount(key="baby", amount=Decimal("40")),
        ])
        assert list(fig.data[0].labels) == ["Rent", "Baby"]

    def test_bar_chart_largest_on_top(self):
        fig = create_category_bar_chart([
            CategoryAmount(key="food", amount=Decimal("300")),
            CategoryAmount(key="gas", amount=Decimal("40")),
        ])
        assert list(fig.data[0].y) == ["Gas", "Food"]
