# src/finance_dashboard/interfaces/app.py
# Streamlit UI for the finance dashboard
# - Sidebar: optional date range + manual refresh
# - Auto refresh every `refresh_interval` seconds
# - Metric cards, monthly revenue, cash flow, expense distribution
#
# Run with: streamlit run src/finance_dashboard/interfaces/app.py

from __future__ import annotations

from datetime import date, timedelta

import streamlit as st

from finance_dashboard.config import get_settings
from finance_dashboard.data.upstream import TransactionSource
from finance_dashboard.domain.models import DateRange
from finance_dashboard.domain.schemas import DashboardSummary
from finance_dashboard.interfaces.formatting import (
    cash_flow_frame,
    expense_distribution_frame,
    format_money,
    format_percent,
    monthly_revenue_frame,
)
from finance_dashboard.services.aggregator import build_dashboard
from finance_dashboard.utils.exceptions import DashboardError
from finance_dashboard.utils.logger import configure_logging, get_logger

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)


# -----------------------------
# Page config
# -----------------------------
st.set_page_config(page_title="Financial Dashboard", layout="wide")
st.title("📊 Financial Dashboard")


# -----------------------------
# Data loader
# -----------------------------
def load_summary(date_range: DateRange) -> DashboardSummary:
    source = TransactionSource.from_settings(settings)
    today = date.today()
    payload = source.fetch(date_range, today=today)
    return build_dashboard(payload, date_range=date_range, today=today)


# -----------------------------
# Sidebar controls
# -----------------------------
st.sidebar.header("Controls")

use_range = st.sidebar.checkbox("Filter by date range", value=False)
date_range = DateRange()
if use_range:
    today_ = date.today()
    start_d = st.sidebar.date_input("Start date", value=today_ - timedelta(days=365))
    end_d = st.sidebar.date_input("End date", value=today_)
    date_range = DateRange(start=start_d, end=end_d)

if st.sidebar.button("🔄 Refresh"):
    st.rerun()

st.sidebar.caption(f"Auto refresh every {settings.refresh_interval:g}s")


def metric_card(col, title: str, value: str, growth: float | None = None):
    delta = format_percent(growth) if growth is not None else None
    col.metric(title, value, delta=delta)


# -----------------------------
# Dashboard (re-runs on its own timer)
# -----------------------------
@st.fragment(run_every=timedelta(seconds=settings.refresh_interval))
def render_dashboard(date_range: DateRange):
    try:
        with st.spinner("Loading data..."):
            summary = load_summary(date_range)
    except DashboardError as e:
        logger.error(f"Dashboard refresh failed: {e}")
        st.error(f"Failed to load dashboard data: {e}")
        return

    m = summary.metrics
    c1, c2, c3, c4 = st.columns(4)
    metric_card(c1, "Total Revenue", format_money(m.total_revenue), m.revenue_growth)
    metric_card(c2, "Total Expenses", format_money(m.total_expenses), m.expense_growth)
    metric_card(c3, "Net Profit", format_money(m.net_profit), m.profit_growth)
    metric_card(c4, "Profit Margin", format_percent(m.profit_margin), m.margin_growth)

    st.divider()

    left, right = st.columns(2)
    with left:
        st.caption("Monthly revenue")
        st.bar_chart(monthly_revenue_frame(summary), height=280)
    with right:
        st.caption("Cash flow")
        st.line_chart(cash_flow_frame(summary), height=280)

    st.caption("Expense distribution (% of total expenses)")
    dist = expense_distribution_frame(summary)
    if dist.empty:
        st.info("No expenses found for the selected window.")
    else:
        st.bar_chart(dist, height=280)
        st.dataframe(
            dist.assign(share=dist["share"].map(format_percent)),
            width="stretch",
        )


render_dashboard(date_range)
