"""Plotly figures for the dashboard pages.

Every function takes the summary models produced by
:mod:`financehub.aggregation` and returns a ``plotly.graph_objects.Figure``
ready for ``st.plotly_chart``. An empty input gives an empty figure
titled "No data to display" instead of raising.
"""

from collections.abc import Sequence

import plotly.graph_objects as go

from financehub.models import CategoryAmount, MonthlyTrend, PeriodSummary


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def _title(key: str) -> str:
    return key.replace("_", " ").title()


def create_trend_bar_chart(trend: Sequence[MonthlyTrend], title: str | None = None) -> go.Figure:
    """Grouped bars of income, expenses and daily spending per month.

    Months without dated records are drawn with a lighter bar so an
    estimate is never mistaken for data.
    """
    if not trend:
        return _empty_figure()
    labels = [point.label for point in trend]
    opacity = [1.0 if point.has_data else 0.35 for point in trend]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name="Income",
        x=labels,
        y=[float(point.income) for point in trend],
        marker={"opacity": opacity},
    ))
    fig.add_trace(go.Bar(
        name="Expenses (est.)",
        x=labels,
        y=[float(point.expenses) for point in trend],
    ))
    fig.add_trace(go.Bar(
        name="Daily spending",
        x=labels,
        y=[float(point.daily_spending) for point in trend],
        marker={"opacity": opacity},
    ))
    fig.update_layout(
        title=title or "Income vs expenses",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_income_line_chart(trend: Sequence[MonthlyTrend], title: str | None = None) -> go.Figure:
    """Business and personal income per month."""
    if not trend:
        return _empty_figure()
    labels = [point.label for point in trend]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        name="Business",
        x=labels,
        y=[float(point.business) for point in trend],
        mode="lines+markers",
    ))
    fig.add_trace(go.Scatter(
        name="Personal",
        x=labels,
        y=[float(point.personal) for point in trend],
        mode="lines+markers",
    ))
    fig.update_layout(
        title=title or "Income by type",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig


def create_series_line_chart(series: Sequence[PeriodSummary], title: str | None = None) -> go.Figure:
    """Monthly totals of a single series; gaps where a month has no records."""
    if not any(period.has_data for period in series):
        return _empty_figure()
    fig = go.Figure(go.Scatter(
        x=[period.label for period in series],
        y=[float(period.total) if period.has_data else None for period in series],
        mode="lines+markers",
        connectgaps=False,
    ))
    fig.update_layout(title=title or "Monthly total", xaxis_title="Month", yaxis_title="Amount")
    return fig


def create_category_pie_chart(breakdown: Sequence[CategoryAmount], title: str | None = None) -> go.Figure:
    """Share of each category in a ranked breakdown."""
    if not breakdown or not any(entry.amount > 0 for entry in breakdown):
        return _empty_figure()
    fig = go.Figure(go.Pie(
        labels=[_title(entry.key) for entry in breakdown],
        values=[float(entry.amount) for entry in breakdown],
        hole=0.4,
        sort=False,
    ))
    fig.update_layout(title=title or "Breakdown by category")
    return fig


def create_category_bar_chart(breakdown: Sequence[CategoryAmount], title: str | None = None) -> go.Figure:
    """Horizontal bars, largest category on top."""
    if not breakdown:
        return _empty_figure()
    ordered = list(reversed(breakdown))
    fig = go.Figure(go.Bar(
        x=[float(entry.amount) for entry in ordered],
        y=[_title(entry.key) for entry in ordered],
        orientation="h",
    ))
    fig.update_layout(title=title or "Spending by category", xaxis_title="Amount")
    return fig
