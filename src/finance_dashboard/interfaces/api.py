# finance_dashboard/interfaces/api.py
# FastAPI backend for the finance dashboard
# - dashboard summary over the upstream transactions (optional date range)
# - dashboard summary over the built-in mock transactions

from __future__ import annotations

from datetime import date
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finance_dashboard.config import get_settings
from finance_dashboard.data.upstream import TransactionSource
from finance_dashboard.domain.models import DateRange
from finance_dashboard.domain.schemas import DashboardSummary
from finance_dashboard.services.aggregator import build_dashboard
from finance_dashboard.services.mock_data import mock_transactions
from finance_dashboard.utils.exceptions import DashboardError
from finance_dashboard.utils.logger import configure_logging, get_logger

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Finance Dashboard API", version="0.1.0")

# Allow local Streamlit dev server(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------
# Dependencies
# ----------------------------
def get_transaction_source() -> TransactionSource:
    return TransactionSource.from_settings()


def get_today() -> date:
    return date.today()


# ----------------------------
# Errors
# ----------------------------
@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    logger.error(f"Error processing transactions for {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Failed to process transactions"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error for {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ----------------------------
# Routes
# ----------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/dashboard", response_model=DashboardSummary)
def dashboard(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    source: TransactionSource = Depends(get_transaction_source),
    today: date = Depends(get_today),
):
    date_range = DateRange(start=start_date, end=end_date)
    payload = source.fetch(date_range, today=today)
    return build_dashboard(payload, date_range=date_range, today=today)


@app.get("/api/dashboard/mock", response_model=DashboardSummary)
def dashboard_mock(today: date = Depends(get_today)):
    return build_dashboard(mock_transactions(today), today=today)


# Run with: finance-dashboard-api  (or: uvicorn finance_dashboard.interfaces.api:app)
def main():
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())

