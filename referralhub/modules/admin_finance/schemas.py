from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime


class IncomeStreamStats(BaseModel):
    direct_referral: float = 0
    level_income: float = 0
    pool_income: float = 0
    rank_sponsor_income: float = 0
    global_turnover_income: float = 0
    team_rewards: float = 0
    recycle_income: float = 0


class RecentTransaction(BaseModel):
    id: str
    type: str
    amount: float
    username: str = "Unknown"
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    status: Optional[str] = None


class FinanceOverview(BaseModel):
    financial_stats: Dict[str, Any]
    income_streams: IncomeStreamStats
    recent_transactions: List[RecentTransaction]


class FinancialReport(BaseModel):
    generated_at: datetime
    summary: Dict[str, Any]
    income_streams: IncomeStreamStats
    recent_transactions: List[RecentTransaction]
