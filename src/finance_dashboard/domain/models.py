from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


# Represents a single income or expense event
@dataclass(frozen=True)
class TransactionRecord:
    amount: float
    kind: TransactionKind
    transaction_date: date
    category: str = ""
    id: Any = None

    @property
    def month(self) -> str:
        return self.transaction_date.strftime("%Y-%m")


# Inclusive on both ends; a missing bound is unbounded
@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True
