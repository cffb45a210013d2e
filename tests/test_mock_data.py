import pytest

from finance_dashboard.services.aggregator import build_dashboard, parse_transactions
from finance_dashboard.services.mock_data import EXPENSE_SHARES, mock_transactions


class TestMockData:
    def test_deterministic(self, today):
        assert mock_transactions(today) == mock_transactions(today)

    def test_all_records_are_valid(self, today):
        rows = mock_transactions(today)
        assert len(parse_transactions(rows)) == len(rows) == 12 * (1 + len(EXPENSE_SHARES))

    def test_covers_every_month_of_the_window(self, today):
        summary = build_dashboard(mock_transactions(today), today=today)

        assert all(v > 0 for v in summary.monthly_revenue.data)
        assert all(v > 0 for v in summary.cash_flow.expenses)
        assert summary.expense_distribution.labels == list(EXPENSE_SHARES)
        for share, expected in zip(summary.expense_distribution.data, EXPENSE_SHARES.values()):
            assert share == pytest.approx(expected, abs=0.01)
