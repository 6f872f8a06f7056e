from pydantic import BaseModel
from typing import List, Optional


class UserGrowthPoint(BaseModel):
    date: str
    users: int
    active: int


class RevenuePoint(BaseModel):
    date: str
    revenue: float
    withdrawals: float


class IncomeStream(BaseModel):
    name: str
    value: float
    color: str


class PoolPerformance(BaseModel):
    pool: str
    completions: int
    rewards: float


class ReferralBucket(BaseModel):
    level: str
    count: int
    income: float


class TopPerformer(BaseModel):
    username: Optional[str] = None
    income: float
    referrals: int


class AnalyticsResponse(BaseModel):
    days: int
    user_growth: List[UserGrowthPoint] = []
    revenue_data: List[RevenuePoint] = []
    income_streams: List[IncomeStream] = []
    pool_performance: List[PoolPerformance] = []
    referral_stats: List[ReferralBucket] = []
    top_performers: List[TopPerformer] = []
