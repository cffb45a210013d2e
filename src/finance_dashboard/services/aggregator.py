"""
Transaction aggregation for the dashboard.

Turns the raw transaction payload from the backend into a DashboardSummary:
- totals, net profit and profit margin
- trailing 12-month revenue/expense buckets ending at the current month
- growth rates between the first 11 and the last 11 of those months
- expense share per category

Both the HTTP API and the Streamlit dashboard call build_dashboard(), so the
numbers shown on screen and the numbers served as JSON are computed by the
same code.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from finance_dashboard.domain.models import DateRange, TransactionKind, TransactionRecord
from finance_dashboard.domain.schemas import (
    CashFlowSeries,
    DashboardMetrics,
    DashboardSummary,
    ExpenseDistribution,
    MonthlySeries,
    TransactionIn,
)
from finance_dashboard.utils.exceptions import InvalidDataError
from finance_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

WINDOW_MONTHS = 12


@dataclass
class MonthBucket:
    revenue: float = 0.0
    expenses: float = 0.0

    @property
    def profit(self) -> float:
        return self.revenue - self.expenses


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator * 100


def _ensure_finite(**values: float) -> None:
    """Sums of huge amounts can overflow; an inf/nan summary is not served."""
    bad = [name for name, value in values.items() if not math.isfinite(value)]
    if bad:
        raise InvalidDataError(f"Transaction amounts overflow: {', '.join(bad)} not finite")


def trailing_months(today: date, count: int = WINDOW_MONTHS) -> List[str]:
    """
    "YYYY-MM" keys of the `count` calendar months ending at today's month,
    oldest first.
    """
    months = []
    for back in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - back
        year, month = divmod(index, 12)
        months.append(f"{year:04d}-{month + 1:02d}")
    return months


def parse_transactions(payload: Any) -> List[TransactionRecord]:
    """
    Validate the upstream payload.

    A payload that is not a list is fatal (InvalidDataError). Individual
    records with a bad amount, type or date are dropped and logged.
    """
    if not isinstance(payload, list):
        raise InvalidDataError(
            f"Expected a list of transactions, got {type(payload).__name__}"
        )

    records: List[TransactionRecord] = []
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            logger.warning(f"Dropping transaction #{position}: not an object ({type(item).__name__})")
            continue
        try:
            records.append(TransactionIn.model_validate(item).to_record())
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            logger.warning(f"Dropping transaction #{position} (id={item.get('id')!r}): invalid {fields}")

    dropped = len(payload) - len(records)
    if dropped:
        logger.info(f"Parsed {len(records)} transactions, dropped {dropped} malformed")
    return records


def filter_by_range(
    records: Iterable[TransactionRecord],
    date_range: Optional[DateRange] = None,
) -> List[TransactionRecord]:
    if date_range is None or date_range.is_unbounded:
        return list(records)
    return [r for r in records if date_range.contains(r.transaction_date)]


def empty_summary(today: Optional[date] = None) -> DashboardSummary:
    """All-zero summary over the trailing 12 months."""
    months = trailing_months(today or date.today())
    zeros = [0.0] * len(months)
    return DashboardSummary(
        metrics=DashboardMetrics(),
        monthly_revenue=MonthlySeries(labels=list(months), data=list(zeros)),
        cash_flow=CashFlowSeries(
            labels=list(months), revenue=list(zeros), expenses=list(zeros), profit=list(zeros)
        ),
        expense_distribution=ExpenseDistribution(),
    )


def aggregate(
    records: Iterable[TransactionRecord],
    date_range: Optional[DateRange] = None,
    today: Optional[date] = None,
) -> DashboardSummary:
    """
    Aggregate transactions into a DashboardSummary.

    Args:
        records: Parsed transaction records
        date_range: Optional inclusive filter on transaction_date
        today: Anchor of the 12-month window (defaults to the local date)

    Returns:
        DashboardSummary object
    """
    today = today or date.today()
    transactions = filter_by_range(records, date_range)

    if not transactions:
        logger.info("No transactions in range, returning empty summary")
        return empty_summary(today)

    # Totals
    total_revenue = sum(t.amount for t in transactions if t.kind is TransactionKind.INCOME)
    total_expenses = sum(t.amount for t in transactions if t.kind is TransactionKind.EXPENSE)
    net_profit = total_revenue - total_expenses
    profit_margin = _ratio(net_profit, total_revenue)
    _ensure_finite(total_revenue=total_revenue, total_expenses=total_expenses, net_profit=net_profit)

    # Monthly buckets, seeded so empty months still show up
    months = trailing_months(today)
    buckets: Dict[str, MonthBucket] = {m: MonthBucket() for m in months}
    for t in transactions:
        bucket = buckets.get(t.month)
        if bucket is None:
            continue
        if t.kind is TransactionKind.INCOME:
            bucket.revenue += t.amount
        else:
            bucket.expenses += t.amount

    # Growth: months[:-1] vs months[1:]
    previous = [buckets[m] for m in months[:-1]]
    current = [buckets[m] for m in months[1:]]
    previous_revenue = sum(b.revenue for b in previous)
    previous_expenses = sum(b.expenses for b in previous)
    current_revenue = sum(b.revenue for b in current)
    current_expenses = sum(b.expenses for b in current)
    previous_net = previous_revenue - previous_expenses
    current_net = current_revenue - current_expenses

    revenue_growth = _ratio(current_revenue - previous_revenue, previous_revenue)
    expense_growth = _ratio(current_expenses - previous_expenses, previous_expenses)
    # previous_net may be negative, which flips the sign
    profit_growth = _ratio(current_net - previous_net, previous_net)
    margin_growth = profit_margin - _ratio(previous_net, previous_revenue) if previous_revenue else 0.0
    _ensure_finite(
        profit_margin=profit_margin,
        revenue_growth=revenue_growth,
        expense_growth=expense_growth,
        profit_growth=profit_growth,
        margin_growth=margin_growth,
    )

    # Expense share per category, first-seen order
    by_category: Dict[str, float] = defaultdict(float)
    for t in transactions:
        if t.kind is TransactionKind.EXPENSE:
            by_category[t.category] += t.amount

    logger.debug(
        f"Aggregated {len(transactions)} transactions into {len(by_category)} categories "
        f"for {months[0]}..{months[-1]}"
    )

    return DashboardSummary(
        metrics=DashboardMetrics(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_profit=net_profit,
            profit_margin=profit_margin,
            revenue_growth=revenue_growth,
            expense_growth=expense_growth,
            profit_growth=profit_growth,
            margin_growth=margin_growth,
        ),
        monthly_revenue=MonthlySeries(
            labels=list(months),
            data=[buckets[m].revenue for m in months],
        ),
        cash_flow=CashFlowSeries(
            labels=list(months),
            revenue=[buckets[m].revenue for m in months],
            expenses=[buckets[m].expenses for m in months],
            profit=[buckets[m].profit for m in months],
        ),
        expense_distribution=ExpenseDistribution(
            labels=list(by_category),
            data=[_ratio(amount, total_expenses) for amount in by_category.values()],
        ),
    )


def build_dashboard(
    payload: Any,
    date_range: Optional[DateRange] = None,
    today: Optional[date] = None,
) -> DashboardSummary:
    """Parse a raw upstream payload and aggregate it."""
    return aggregate(parse_transactions(payload), date_range=date_range, today=today)
