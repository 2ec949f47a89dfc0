"""
Streamlit Frontend for FinanceHub

The household finance dashboard: income, expenses, daily spending,
upcoming bills and the savings goal, with charts and insights built
from whatever has been entered so far.

DESIGN PRINCIPLES:
1. Every number on screen is derived from stored records
2. Bad input is explained, never silently fixed
3. A failed save is shown, and the change is kept until it can be saved
4. Amounts are formatted only at the last moment

Run with:
    streamlit run app/main.py
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from charts import (
    create_category_bar_chart,
    create_category_pie_chart,
    create_income_line_chart,
    create_series_line_chart,
    create_trend_bar_chart,
)
from financehub.aggregation import (
    calendar_month,
    cashflow_tone,
    category_limit_status,
    day_spends,
    day_total,
    days_until,
    due_status,
    expense_category_breakdown,
    income_by_type,
    is_overdue,
    margin_badge,
    monthly_series,
    monthly_spending_analysis,
    monthly_trend,
    over_limit_categories,
    overview_insights,
    overview_metrics,
    paid_count,
    paid_total,
    payment_progress,
    sort_due_dates,
    spending_tips,
    total,
    upcoming_total,
)
from financehub.config import get_settings, validate_all_settings
from financehub.formatting import format_currency, format_percentage
from financehub.models import (
    CashflowTone,
    DayClassification,
    DueCategory,
    DueStatus,
    ExpenseCategory,
    GoalStatus,
    IncomeType,
    Insight,
    MarginBadge,
    PaymentProgress,
    SpendCategory,
    SpendingTip,
    ValidationResult,
)
from financehub.orchestrator import AppComponents, create_app_components


# Page configuration
st.set_page_config(
    page_title="FinanceHub",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .success-box {
        padding: 16px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 8px 0;
    }
    .warning-box {
        padding: 16px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 8px 0;
    }
    .error-box {
        padding: 16px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 8px 0;
    }
    .info-box {
        padding: 16px;
        background-color: #cce5ff;
        border-radius: 10px;
        border-left: 5px solid #004085;
        margin: 8px 0;
    }
</style>
""", unsafe_allow_html=True)


INSIGHT_MESSAGES = {
    Insight.EXCELLENT_CASHFLOW: ("success-box", "Excellent cashflow! Consider increasing savings or business investment."),
    Insight.OUTSTANDING_SAVINGS_RATE: ("info-box", "Outstanding savings rate! You're on track for your savings goal."),
    Insight.HIGH_FIXED_EXPENSES: ("warning-box", "Fixed expenses are high. Consider ways to reduce recurring costs."),
    Insight.LOW_BUSINESS_MARGIN: ("error-box", "Business margins could improve. Review ad spend and costs."),
}

TIP_MESSAGES = {
    SpendingTip.SET_DAILY_LIMIT: "Your daily average is high. Try setting a daily spending limit.",
    SpendingTip.COOK_AT_HOME: "Food is your top category. Cooking at home more often could save a lot.",
    SpendingTip.CUT_ENTERTAINMENT: "Entertainment spending is adding up. Look for free activities.",
    SpendingTip.UNDER_BUDGET: "Great job! You're keeping spending under control this month.",
}

DUE_BADGES = {
    DueStatus.PAID: "✅ Paid",
    DueStatus.OVERDUE: "🔴 Overdue",
    DueStatus.DUE_SOON: "🟠 Due soon",
    DueStatus.THIS_WEEK: "🟡 This week",
    DueStatus.UPCOMING: "🔵 Upcoming",
}

DAY_MARKERS = {
    DayClassification.NONE: "",
    DayClassification.HIGH: "🔴",
    DayClassification.MEDIUM: "🟠",
    DayClassification.MANY_TRANSACTIONS: "🟣",
    DayClassification.NORMAL: "🟢",
}

TONE_ICONS = {
    CashflowTone.EXCELLENT: "🟢",
    CashflowTone.GOOD: "🔵",
    CashflowTone.POSITIVE: "🟡",
    CashflowTone.NEGATIVE: "🔴",
}

# Preset buttons under the savings form
QUICK_ADD_AMOUNTS = (100, 500, 1000, 2000)


def _pretty(value) -> str:
    text = value.value if hasattr(value, "value") else str(value)
    return text.replace("_", " ").title()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    try:
        return create_app_components(use_file_store=True)
    except Exception as e:
        st.error(f"Failed to open the data file, working in memory only: {e}")
        return create_app_components(use_file_store=False)


def show_validation(result: ValidationResult | None) -> None:
    """Show why the last submission was rejected, plus any warnings."""
    if result is None:
        return
    for issue in result.issues:
        if issue.severity == "error":
            st.error(issue.message)
        else:
            st.warning(issue.message)


def show_storage_status(components: AppComponents) -> None:
    errors = components.storage_errors
    if not errors:
        return
    st.markdown(f"""
    <div class="warning-box">
        <h4>⚠️ Not saved yet</h4>
        <p>{errors[0]}</p>
    </div>
    """, unsafe_allow_html=True)
    if st.button("💾 Try saving again"):
        if components.flush_all():
            st.success("All changes saved.")
        st.rerun()


def main():
    """Main application entry point."""
    components = get_components()

    st.sidebar.title("💰 FinanceHub")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "📊 Overview",
            "💵 Income",
            "🧾 Expenses",
            "🛒 Daily Spending",
            "📅 Due Dates",
            "🎯 Savings",
            "📈 Analytics",
            "⚙️ Settings",
        ],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.caption(f"Today: {date.today().strftime('%d %B %Y')}")

    show_storage_status(components)

    if page == "📊 Overview":
        render_overview_page(components)
    elif page == "💵 Income":
        render_income_page(components)
    elif page == "🧾 Expenses":
        render_expenses_page(components)
    elif page == "🛒 Daily Spending":
        render_daily_spending_page(components)
    elif page == "📅 Due Dates":
        render_due_dates_page(components)
    elif page == "🎯 Savings":
        render_savings_page(components)
    elif page == "📈 Analytics":
        render_analytics_page(components)
    elif page == "⚙️ Settings":
        render_settings_page(components)


def render_overview_page(components: AppComponents):
    """Render the monthly overview."""
    st.title("📊 Monthly Overview")
    st.markdown(date.today().strftime("%B %Y"))

    metrics = overview_metrics(components.incomes.records, components.expenses.records)
    tone = cashflow_tone(metrics.net_cashflow)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Income", format_currency(metrics.total_income))
    col2.metric("Total Expenses", format_currency(metrics.total_expenses))
    col3.metric(f"Net Cashflow {TONE_ICONS[tone]}", format_currency(metrics.net_cashflow))
    col4.metric("Savings Rate", format_percentage(metrics.savings_rate))

    st.markdown("---")
    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Income Breakdown")
        st.markdown(f"**Business:** {format_currency(metrics.business_income)}")
        if metrics.business_margin is None:
            st.caption("No business income yet")
        else:
            badge = margin_badge(metrics.business_margin)
            icon = {MarginBadge.GOOD: "🟢", MarginBadge.OK: "🟡", MarginBadge.LOW: "🔴"}[badge]
            st.markdown(f"{icon} {format_percentage(metrics.business_margin, 0)} margin")
        st.markdown(f"**Personal:** {format_currency(metrics.personal_income)}")

    with col2:
        st.subheader("Expense Breakdown")
        st.markdown(
            f"**Fixed:** {format_currency(metrics.fixed_expenses)} "
            f"({format_percentage(metrics.fixed_share_of_income)} of income)"
        )
        st.markdown(
            f"**Variable:** {format_currency(metrics.variable_expenses)} "
            f"({format_percentage(metrics.variable_share_of_income)} of income)"
        )

    st.markdown("---")
    st.subheader("Quick Insights")
    insights = overview_insights(metrics)
    if not insights:
        st.info("Add income and expenses to see insights.")
    for insight in insights:
        css, message = INSIGHT_MESSAGES[insight]
        st.markdown(f'<div class="{css}">{message}</div>', unsafe_allow_html=True)


def render_income_page(components: AppComponents):
    """Render the income tracker."""
    st.title("💵 Income")
    manager = components.incomes

    by_type = income_by_type(manager.records)
    col1, col2, col3 = st.columns(3)
    col1.metric("Total", format_currency(total(manager.records)))
    col2.metric("Business", format_currency(by_type[IncomeType.BUSINESS.value]))
    col3.metric("Personal", format_currency(by_type[IncomeType.PERSONAL.value]))

    with st.form("add_income", clear_on_submit=True):
        st.markdown("### Add Income")
        col1, col2 = st.columns(2)
        with col1:
            source = st.text_input("Source *", placeholder="e.g., Freelance project")
            amount = st.text_input("Amount *", placeholder="0.00")
        with col2:
            income_type = st.selectbox("Type", options=list(IncomeType), format_func=_pretty)
            income_date = st.date_input("Date", value=date.today())
        if st.form_submit_button("➕ Add Income", type="primary"):
            record = manager.add(source=source, amount=amount, type=income_type, date=income_date)
            if record:
                st.success(f"Added {record.source}: {format_currency(record.amount)}")
            show_validation(manager.last_validation)

    st.markdown("---")
    if not manager.records:
        st.info("No income recorded yet.")
    for record in sorted(manager.records, key=lambda r: r.date, reverse=True):
        col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
        col1.markdown(f"**{record.source}**")
        col2.markdown(f"{_pretty(record.type)} · {record.date.strftime('%d %b %Y')}")
        col3.markdown(format_currency(record.amount))
        if col4.button("🗑️", key=f"del_income_{record.id}"):
            manager.remove(record.id)
            st.rerun()


def render_expenses_page(components: AppComponents):
    """Render the expense tracker."""
    st.title("🧾 Expenses")
    manager = components.expenses

    owed = total(manager.records)
    paid = paid_total(manager.records)
    progress = payment_progress(paid, owed)
    progress_icon = {
        PaymentProgress.MOSTLY_PAID: "🟢",
        PaymentProgress.PARTLY_PAID: "🟡",
        PaymentProgress.BEHIND: "🔴",
    }[progress]

    col1, col2, col3 = st.columns(3)
    col1.metric("Total", format_currency(owed))
    col2.metric("Paid", format_currency(paid))
    col3.metric(f"Remaining {progress_icon}", format_currency(owed - paid))

    with st.form("add_expense", clear_on_submit=True):
        st.markdown("### Add Expense")
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", placeholder="e.g., Rent")
            amount = st.text_input("Amount *", placeholder="0.00")
            category = st.selectbox("Category", options=list(ExpenseCategory), index=2, format_func=_pretty)
        with col2:
            purpose = st.text_input("Purpose (optional)")
            is_recurring = st.checkbox("Recurring monthly")
        if st.form_submit_button("➕ Add Expense", type="primary"):
            record = manager.add(
                name=name,
                amount=amount,
                category=category,
                is_recurring=is_recurring,
                purpose=purpose,
            )
            if record:
                st.success(f"Added {record.name}: {format_currency(record.amount)}")
            show_validation(manager.last_validation)

    st.markdown("---")
    if not manager.records:
        st.info("No expenses recorded yet.")
    for record in manager.records:
        col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 1, 1])
        label = f"**{record.name}**" + (" 🔁" if record.is_recurring else "")
        col1.markdown(label)
        if record.purpose:
            col1.caption(record.purpose)
        col2.markdown(_pretty(record.category))
        col3.markdown(format_currency(record.amount))
        if col4.button("✅" if record.is_paid else "⬜", key=f"pay_expense_{record.id}"):
            manager.toggle_paid(record.id)
            st.rerun()
        if col5.button("🗑️", key=f"del_expense_{record.id}"):
            manager.remove(record.id)
            st.rerun()


def render_daily_spending_page(components: AppComponents):
    """Render the daily spending tracker with calendar and limits."""
    st.title("🛒 Daily Spending")
    manager = components.daily_spends
    today = date.today()

    analysis = monthly_spending_analysis(manager.records, today)
    col1, col2, col3 = st.columns(3)
    col1.metric("This Month", format_currency(analysis.total_spent))
    col2.metric("Daily Average", format_currency(analysis.average_daily))
    top = analysis.top_category
    col3.metric("Top Category", _pretty(top.key) if top else "n/a")

    with st.form("add_spend", clear_on_submit=True):
        st.markdown("### Log a Purchase")
        col1, col2 = st.columns(2)
        with col1:
            spend_date = st.date_input("Date", value=today)
            category = st.selectbox("Category", options=list(SpendCategory), format_func=_pretty)
        with col2:
            amount = st.text_input("Amount *", placeholder="0.00")
            description = st.text_input("Description *", placeholder="e.g., Lunch")
        if st.form_submit_button("➕ Add", type="primary"):
            record = manager.add(
                date=spend_date,
                amount=amount,
                description=description,
                category=category,
            )
            if record:
                st.success(f"Logged {record.description}: {format_currency(record.amount)}")
            show_validation(manager.last_validation)

    st.markdown("---")
    st.subheader("Today's Limits")
    for status in category_limit_status(manager.records, today):
        if status.spent == 0:
            continue
        ratio = min(float(status.spent / status.limit), 1.0) if status.limit else 1.0
        label = (
            f"{_pretty(status.category)}: {format_currency(status.spent)} "
            f"of {format_currency(status.limit)}"
        )
        st.progress(ratio, text=("⚠️ " if status.over_limit else "") + label)

    st.subheader(today.strftime("%B %Y"))
    render_calendar(manager.records, today)
    render_selected_day(manager, today)

    over = over_limit_categories(analysis)
    if over:
        st.markdown("**Categories over their daily limit this month:** " + ", ".join(
            f"{_pretty(entry.key)} ({format_currency(entry.amount)})" for entry in over
        ))

    st.subheader("Smart Tips")
    for tip in spending_tips(analysis):
        st.markdown(f"- {TIP_MESSAGES[tip]}")

    st.markdown("---")
    for record in sorted(manager.records, key=lambda r: r.date, reverse=True)[:30]:
        col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
        col1.markdown(f"**{record.description}**")
        col2.markdown(f"{_pretty(record.category)} · {record.date.strftime('%d %b')}")
        col3.markdown(format_currency(record.amount))
        if col4.button("🗑️", key=f"del_spend_{record.id}"):
            manager.remove(record.id)
            st.rerun()


def render_selected_day(manager, today: date):
    """Purchases and total for one picked day."""
    selected = st.date_input("Show day", value=today, key="selected_spend_day")
    spends = day_spends(manager.records, selected)
    if not spends:
        st.caption(f"Nothing logged on {selected.strftime('%d %b %Y')}.")
        return

    st.markdown(
        f"**📝 {selected.strftime('%d %b %Y')}**: "
        f"{format_currency(day_total(manager.records, selected))} across {len(spends)} purchases"
    )
    for record in spends:
        col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
        col1.markdown(f"**{record.description}**")
        col2.markdown(_pretty(record.category))
        col3.markdown(format_currency(record.amount))
        if col4.button("🗑️", key=f"del_day_spend_{record.id}"):
            manager.remove(record.id)
            st.rerun()


def render_calendar(records, today: date):
    """Sunday-first month grid with a marker per day."""
    header = st.columns(7)
    for col, name in zip(header, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]):
        col.markdown(f"**{name}**")

    cells = calendar_month(records, today.year, today.month)
    for start in range(0, len(cells), 7):
        row = st.columns(7)
        for col, cell in zip(row, cells[start:start + 7]):
            if cell.date is None:
                col.markdown(" ")
                continue
            marker = DAY_MARKERS[cell.classification]
            amount = format_currency(cell.total, decimals=0) if cell.total else ""
            col.markdown(f"{cell.date.day} {marker}  \n{amount}")


def render_due_dates_page(components: AppComponents):
    """Render the upcoming bills list."""
    st.title("📅 Due Dates")
    manager = components.due_dates
    today = date.today()

    paid, count = paid_count(manager.records)
    col1, col2 = st.columns(2)
    col1.metric("Upcoming", format_currency(upcoming_total(manager.records, today)))
    col2.metric("Paid", f"{paid} of {count}")

    with st.form("add_due_date", clear_on_submit=True):
        st.markdown("### Add Bill")
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", placeholder="e.g., Credit card")
            amount = st.text_input("Amount *", placeholder="0.00")
        with col2:
            due_date = st.date_input("Due date", value=today)
            category = st.selectbox("Category", options=list(DueCategory), index=3, format_func=_pretty)
        if st.form_submit_button("➕ Add Bill", type="primary"):
            record = manager.add(name=name, amount=amount, due_date=due_date, category=category)
            if record:
                st.success(f"Added {record.name}: {format_currency(record.amount)}")
            show_validation(manager.last_validation)

    st.markdown("---")
    if not manager.records:
        st.info("No bills added yet.")
    for record in sort_due_dates(manager.records):
        col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 1, 1])
        col1.markdown(f"**{record.name}**")
        days = days_until(record.due_date, today)
        when = record.due_date.strftime("%d %b")
        if is_overdue(record, today):
            when += f" ({-days} days late)"
        elif not record.is_paid:
            when += f" (in {days} days)"
        col1.caption(when)
        col2.markdown(DUE_BADGES[due_status(record, today)])
        col3.markdown(format_currency(record.amount))
        if col4.button("✅" if record.is_paid else "⬜", key=f"pay_due_{record.id}"):
            manager.toggle_paid(record.id)
            st.rerun()
        if col5.button("🗑️", key=f"del_due_{record.id}"):
            manager.remove(record.id)
            st.rerun()


def render_savings_page(components: AppComponents):
    """Render the savings goal tracker."""
    st.title("🎯 Savings Goal")
    tracker = components.savings
    state = tracker.state
    projection = tracker.projection()

    col1, col2, col3 = st.columns(3)
    col1.metric("Saved", format_currency(state.current_amount))
    col2.metric("Goal", format_currency(state.goal_amount))
    col3.metric("Target date", state.target_date.strftime("%B %Y"))

    st.progress(
        min(float(projection.progress_percentage) / 100, 1.0),
        text=f"{format_percentage(projection.progress_percentage)} · {_pretty(tracker.progress_tier())}",
    )

    if projection.status == GoalStatus.REACHED:
        st.markdown('<div class="success-box">🎉 Goal reached!</div>', unsafe_allow_html=True)
    elif projection.status == GoalStatus.OVERDUE:
        st.markdown(f"""
        <div class="error-box">
            The target date has passed with {format_currency(projection.remaining_amount)} still to save.
        </div>
        """, unsafe_allow_html=True)
    else:
        st.markdown(
            f"Save **{format_currency(projection.monthly_target)}** per month for "
            f"**{projection.months_remaining}** months to reach the goal."
        )

    with st.form("adjust_savings", clear_on_submit=True):
        st.markdown("### Adjust Savings")
        delta = st.text_input("Amount (negative to withdraw)", placeholder="e.g., 500 or -200")
        if st.form_submit_button("💾 Update", type="primary"):
            if tracker.adjust_from_input(delta) is not None:
                st.success("Savings updated.")
            show_validation(tracker.last_validation)

    for col, amount in zip(st.columns(len(QUICK_ADD_AMOUNTS)), QUICK_ADD_AMOUNTS):
        if col.button(f"+{format_currency(amount, decimals=0)}", key=f"quick_add_{amount}"):
            tracker.adjust(Decimal(amount))
            st.rerun()

    st.subheader("Milestones")
    for milestone in tracker.milestones():
        icon = "✅" if milestone.reached else "⬜"
        to_go = "" if milestone.reached else f" ({format_currency(milestone.to_go)} to go)"
        st.markdown(f"{icon} **{milestone.label}**: {format_currency(milestone.amount)}{to_go}")


def render_analytics_page(components: AppComponents):
    """Render the charts."""
    st.title("📈 Analytics")
    today = date.today()
    months_back = get_settings().dashboard.months_back

    trend = monthly_trend(
        components.incomes.records,
        components.expenses.records,
        components.daily_spends.records,
        today,
        months_back,
    )
    st.plotly_chart(create_trend_bar_chart(trend), use_container_width=True)
    st.caption(
        "Expenses carry no date, so each month shows an estimate: paid recurring "
        "expenses in full plus paid one-time expenses spread over the period."
    )

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_income_line_chart(trend), use_container_width=True)
    with col2:
        st.plotly_chart(
            create_category_pie_chart(
                expense_category_breakdown(components.expenses.records),
                title="Expenses by category",
            ),
            use_container_width=True,
        )

    spend_series = monthly_series(
        components.daily_spends.records,
        key_field="category",
        today=today,
        months_back=months_back,
    )
    st.plotly_chart(
        create_series_line_chart(spend_series, title="Daily spending per month"),
        use_container_width=True,
    )
    analysis = monthly_spending_analysis(components.daily_spends.records, today)
    st.plotly_chart(
        create_category_bar_chart(analysis.ranked_categories, title="This month's spending"),
        use_container_width=True,
    )


def render_settings_page(components: AppComponents):
    """Render configuration status and recent activity."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")
    status = validate_all_settings()
    for section in ("storage", "dashboard", "savings", "app"):
        if status.get(section, False):
            st.success(f"✅ {section.title()} settings OK")
        else:
            st.error(f"❌ {section.title()} - {status.get(f'{section}_error', 'Invalid')}")

    store = components.store
    path = getattr(store, "path", None)
    st.markdown(f"**Data file:** `{path}`" if path else "**Data file:** in memory only")

    st.markdown("---")
    st.markdown("### Recent Activity")
    events = components.audit_logger.recent_events(limit=20)
    if not events:
        st.info("No activity yet.")
    for event in events:
        st.markdown(f"- `{event.get('timestamp', '')[:19]}` {event.get('description', '')}")

    st.markdown("---")
    st.markdown(
        "Thresholds and the savings goal can be changed with `FINANCEHUB_*` "
        "environment variables or a `.env` file. See `.env.example`."
    )


if __name__ == "__main__":
    main()
