import pytest

from datetime import date
from unittest.mock import patch

from fastapi.testclient import TestClient

from finance_dashboard.interfaces import api
from finance_dashboard.utils.exceptions import UpstreamError


class FakeSource:
    """stands in for TransactionSource and records what it was asked for"""
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def fetch(self, date_range=None, today=None):
        self.calls.append(date_range)
        if self.error is not None:
            raise self.error
        return self.payload


class TestDashboardApi:
    @pytest.fixture(scope='function')
    def client_with(self, today):
        """return a function that builds a TestClient around a given fake source"""
        def make(source: FakeSource) -> TestClient:
            api.app.dependency_overrides[api.get_transaction_source] = lambda: source
            api.app.dependency_overrides[api.get_today] = lambda: today
            return TestClient(api.app)
        yield make
        api.app.dependency_overrides.clear()

    def test_health(self, client_with):
        resp = client_with(FakeSource([])).get('/health')
        assert resp.status_code == 200
        assert resp.json() == {'status': 'ok'}

    def test_dashboard_summary(self, client_with, tx_maker):
        source = FakeSource([tx_maker('income', 1000, '2024-01-15'),
                             tx_maker('expense', 400, '2024-01-20', 'Ops')])
        resp = client_with(source).get('/api/dashboard')

        assert resp.status_code == 200
        body = resp.json()
        assert body['metrics']['totalRevenue'] == 1000
        assert body['metrics']['netProfit'] == 600
        assert body['metrics']['profitMargin'] == pytest.approx(60)
        assert len(body['monthlyRevenue']['labels']) == 12
        assert body['monthlyRevenue']['labels'][-1] == '2024-06'
        assert body['expenseDistribution'] == {'labels': ['Ops'], 'data': [100.0]}

    def test_date_range_is_forwarded_and_applied(self, client_with, sample_payload):
        source = FakeSource(sample_payload)
        resp = client_with(source).get('/api/dashboard', params={'start_date': '2024-05-01',
                                                                  'end_date': '2024-05-31'})

        assert resp.status_code == 200
        assert source.calls[0].start == date(2024, 5, 1)
        assert source.calls[0].end == date(2024, 5, 31)
        metrics = resp.json()['metrics']
        assert metrics['totalRevenue'] == 2500
        assert metrics['totalExpenses'] == 300

    def test_invalid_date_param(self, client_with):
        resp = client_with(FakeSource([])).get('/api/dashboard', params={'start_date': 'yesterday'})
        assert resp.status_code == 422

    def test_upstream_failure_is_500(self, client_with):
        resp = client_with(FakeSource(error=UpstreamError('connection refused'))).get('/api/dashboard')
        assert resp.status_code == 500
        assert resp.json() == {'error': 'Failed to process transactions'}

    def test_non_list_payload_is_500(self, client_with):
        resp = client_with(FakeSource({'message': 'Unauthenticated.'})).get('/api/dashboard')
        assert resp.status_code == 500
        assert resp.json() == {'error': 'Failed to process transactions'}

    def test_mock_dashboard(self, client_with):
        resp = client_with(FakeSource(error=AssertionError('source must not be used'))).get('/api/dashboard/mock')

        assert resp.status_code == 200
        body = resp.json()
        assert body['metrics']['totalRevenue'] > 0
        assert body['expenseDistribution']['labels'][0] == 'Salaries'
        assert sum(body['expenseDistribution']['data']) == pytest.approx(100)

    def test_overflowing_amounts_are_500(self, client_with, tx_maker):
        source = FakeSource([tx_maker('income', 1e308, '2024-06-01'),
                             tx_maker('income', 1e308, '2024-06-02')])
        resp = client_with(source).get('/api/dashboard')
        assert resp.status_code == 500
        assert resp.json() == {'error': 'Failed to process transactions'}

    def test_unexpected_error_is_json_500(self, today):
        api.app.dependency_overrides[api.get_transaction_source] = lambda: FakeSource(error=KeyError('boom'))
        api.app.dependency_overrides[api.get_today] = lambda: today
        try:
            resp = TestClient(api.app, raise_server_exceptions=False).get('/api/dashboard')
        finally:
            api.app.dependency_overrides.clear()

        assert resp.status_code == 500
        assert resp.json() == {'error': 'Internal Server Error'}


class TestMain:
    def test_main_runs_uvicorn_with_settings(self):
        with patch('finance_dashboard.interfaces.api.uvicorn.run') as run_mock:
            api.main()

        args, kwargs = run_mock.call_args
        assert args[0] is api.app
        assert kwargs['host'] == api.settings.api_host
        assert kwargs['port'] == api.settings.api_port
