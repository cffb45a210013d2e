"""
Client for the transactions backend.

The backend answers GET <upstream_url>?start_date=...&end_date=... with a
JSON array of transactions. Anything else is an UpstreamError; checking that
the body is actually a list is left to parse_transactions().
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

import requests

from finance_dashboard.config import Settings, get_settings
from finance_dashboard.domain.models import DateRange
from finance_dashboard.services.mock_data import mock_transactions
from finance_dashboard.utils.exceptions import UpstreamError
from finance_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


def _range_params(date_range: Optional[DateRange]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    if date_range is None:
        return params
    if date_range.start is not None:
        params["start_date"] = date_range.start.isoformat()
    if date_range.end is not None:
        params["end_date"] = date_range.end.isoformat()
    return params


class TransactionSource:
    def __init__(self, base_url: str, timeout: float = 30.0, use_mock: bool = False):
        self.base_url = base_url
        self.timeout = timeout
        self.use_mock = use_mock

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TransactionSource":
        settings = settings or get_settings()
        return cls(
            base_url=settings.upstream_url,
            timeout=settings.request_timeout,
            use_mock=settings.use_mock_data,
        )

    def fetch(self, date_range: Optional[DateRange] = None, today: Optional[date] = None) -> Any:
        """Return the decoded JSON body of the transactions endpoint."""
        if self.use_mock:
            logger.debug("Serving mock transactions")
            return mock_transactions(today)

        params = _range_params(date_range)
        try:
            resp = requests.get(
                self.base_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamError(f"Transactions backend request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError("Transactions backend returned a non-JSON body") from e

        logger.debug(f"Fetched {len(data) if isinstance(data, list) else 'non-list'} payload from {self.base_url}")
        return data
