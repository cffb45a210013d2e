"""
Sample transactions for running the dashboard without a backend.

Same wire shape as the upstream /api/transactions endpoint, anchored on the
trailing 12 months so every chart has data.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from finance_dashboard.services.aggregator import trailing_months

MONTHLY_REVENUE = [
    95000, 105000, 115000, 120000, 125000, 132000,
    140000, 148000, 160000, 165000, 170000, 175000,
]
MONTHLY_EXPENSES = [
    65000, 72000, 85000, 86000, 90000, 92000,
    95000, 101000, 110000, 114000, 120000, 125000,
]

# Share of each month's expenses, in percent
EXPENSE_SHARES = {
    "Salaries": 40,
    "Marketing": 20,
    "Operations": 15,
    "Technology": 10,
    "Office": 10,
    "Others": 5,
}


def mock_transactions(today: Optional[date] = None) -> List[Dict[str, Any]]:
    """One income and one expense per category for each of the last 12 months."""
    months = trailing_months(today or date.today())
    rows: List[Dict[str, Any]] = []
    next_id = 1

    for month, revenue, expenses in zip(months, MONTHLY_REVENUE, MONTHLY_EXPENSES):
        rows.append({
            "id": next_id,
            "description": "Sales",
            "amount": float(revenue),
            "type": "income",
            "category": "Sales",
            "transaction_date": f"{month}-05",
        })
        next_id += 1

        for day, (category, share) in enumerate(EXPENSE_SHARES.items(), start=10):
            rows.append({
                "id": next_id,
                "description": f"{category} payment",
                "amount": round(expenses * share / 100, 2),
                "type": "expense",
                "category": category,
                "transaction_date": f"{month}-{day:02d}",
            })
            next_id += 1

    return rows
