import pytest

from datetime import date
from typing import Callable

from finance_dashboard import config


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """make sure no FINANCE_DASHBOARD_* variable leaks between tests"""
    import os
    for key in list(os.environ):
        if key.startswith(config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture(scope='session')
def today() -> date:
    """fixed 'now' so the 12-month window is 2023-07 .. 2024-06"""
    return date(2024, 6, 15)


@pytest.fixture(scope='session')
def tx_maker() -> Callable:
    """return a function that builds one upstream transaction payload"""
    counter = iter(range(1, 10_000))

    def make(kind: str, amount, day: str, category: str = '') -> dict:
        return {'id': next(counter),
                'description': f'{kind} {category}'.strip(),
                'amount': amount,
                'type': kind,
                'category': category,
                'transaction_date': day,
                'created_at': f'{day}T08:00:00.000000Z',
                'updated_at': f'{day}T08:00:00.000000Z'}
    return make


@pytest.fixture(scope='function')
def sample_payload(tx_maker) -> list:
    """a year of activity with a few records outside the window"""
    return [tx_maker('income', 1000, '2024-01-15'),
            tx_maker('expense', 400, '2024-01-20', 'Ops'),
            tx_maker('income', 2500, '2024-05-02'),
            tx_maker('expense', 300, '2024-05-10', 'Marketing'),
            tx_maker('expense', 300, '2024-06-01', 'Ops'),
            tx_maker('income', 500, '2023-07-31'),
            tx_maker('income', 9999, '2022-12-31'),
            tx_maker('expense', 1000, '2023-01-05', 'Legal')]
