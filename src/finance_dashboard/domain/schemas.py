# finance_dashboard/domain/schemas.py
# Pydantic models for the wire formats:
# - TransactionIn: one record as the upstream backend returns it
# - DashboardSummary: the aggregated document (camelCase keys on the wire)

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from finance_dashboard.domain.models import TransactionKind, TransactionRecord


# ----------------------------
# Input
# ----------------------------
class TransactionIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    amount: float
    type: Literal["income", "expense"]
    category: str = ""
    transaction_date: date

    @field_validator("category", mode="before")
    @classmethod
    def _category_label(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _numeric_amount(cls, value: Any) -> Any:
        # bool is an int subclass; "true" is not an amount
        if isinstance(value, bool):
            raise ValueError("amount must be numeric, not boolean")
        if isinstance(value, str):
            value = value.strip()
        return value

    @field_validator("amount")
    @classmethod
    def _finite_amount(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("amount must be finite")
        if value < 0:
            raise ValueError("amount must not be negative")
        return value

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:
        """
        Accept "YYYY-MM-DD" as well as full ISO datetimes
        ("2024-01-15T10:30:00.000000Z"). The calendar date written in the
        string is kept as is, no timezone conversion.
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            raw = value.strip()
            try:
                return date.fromisoformat(raw)
            except ValueError:
                return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        return value

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(
            id=self.id,
            amount=float(self.amount),
            kind=TransactionKind(self.type),
            category=self.category,
            transaction_date=self.transaction_date,
        )


# ----------------------------
# Output
# ----------------------------
class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardMetrics(_CamelModel):
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0
    revenue_growth: float = 0.0
    expense_growth: float = 0.0
    profit_growth: float = 0.0
    margin_growth: float = 0.0


class MonthlySeries(_CamelModel):
    labels: List[str] = Field(default_factory=list)
    data: List[float] = Field(default_factory=list)


class CashFlowSeries(_CamelModel):
    labels: List[str] = Field(default_factory=list)
    revenue: List[float] = Field(default_factory=list)
    expenses: List[float] = Field(default_factory=list)
    profit: List[float] = Field(default_factory=list)


class ExpenseDistribution(_CamelModel):
    labels: List[str] = Field(default_factory=list)
    data: List[float] = Field(default_factory=list)


class DashboardSummary(_CamelModel):
    metrics: DashboardMetrics = Field(default_factory=DashboardMetrics)
    monthly_revenue: MonthlySeries = Field(default_factory=MonthlySeries)
    cash_flow: CashFlowSeries = Field(default_factory=CashFlowSeries)
    expense_distribution: ExpenseDistribution = Field(default_factory=ExpenseDistribution)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
