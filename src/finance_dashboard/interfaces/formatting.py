"""Display helpers for the Streamlit dashboard. No aggregation happens here."""

from __future__ import annotations

import pandas as pd

from finance_dashboard.domain.schemas import DashboardSummary

CURRENCY_PREFIX = "Rp"


def format_currency(value: float) -> str:
    """1234567.891 -> "1.234.567,89" (Indonesian grouping)."""
    text = f"{value:,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_money(value: float) -> str:
    return f"{CURRENCY_PREFIX} {format_currency(value)}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def month_label(key: str) -> str:
    """"2024-01" -> "2024 01"."""
    return key.replace("-", " ")


def monthly_revenue_frame(summary: DashboardSummary) -> pd.DataFrame:
    series = summary.monthly_revenue
    return pd.DataFrame(
        {"revenue": series.data},
        index=pd.Index([month_label(m) for m in series.labels], name="month"),
    )


def cash_flow_frame(summary: DashboardSummary) -> pd.DataFrame:
    cf = summary.cash_flow
    return pd.DataFrame(
        {"revenue": cf.revenue, "expenses": cf.expenses, "profit": cf.profit},
        index=pd.Index([month_label(m) for m in cf.labels], name="month"),
    )


def expense_distribution_frame(summary: DashboardSummary) -> pd.DataFrame:
    dist = summary.expense_distribution
    return pd.DataFrame(
        {"share": dist.data},
        index=pd.Index(dist.labels, name="category"),
    )
