from pydantic import BaseModel, field_validator
from typing import List, Literal, Optional
from datetime import datetime
from referralhub.core.utils import parse_timestamp


class Transaction(BaseModel):
    id: str
    type: str
    amount: float
    description: str = ""
    date: Optional[datetime] = None
    status: str = "completed"
    category: Literal["income", "expense", "transfer"]
    source: Literal["main_wallet", "fund_wallet"]

    @field_validator("date", mode="before")
    @classmethod
    def make_aware(cls, value):
        return parse_timestamp(value)


class TransactionStats(BaseModel):
    total_income: float = 0
    total_expense: float = 0
    net_balance: float = 0
    transaction_count: int = 0
    this_month_income: float = 0
    this_month_expense: float = 0
    largest_income: float = 0
    largest_expense: float = 0


class TransactionFilters(BaseModel):
    wallet: Literal["all", "main", "fund"] = "all"
    search: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    date_range: Literal["today", "week", "month", "year", "all"] = "all"
    tz: Optional[str] = None  # IANA zone for the today/month/year boundaries, e.g. "Asia/Kolkata"


class TransactionList(BaseModel):
    transactions: List[Transaction]
    stats: TransactionStats
