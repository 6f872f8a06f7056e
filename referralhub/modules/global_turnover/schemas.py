from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class TurnoverLevelProgress(BaseModel):
    level: int
    required_referrals: int
    time_limit_days: int
    percentage: int
    referral_progress: float
    time_progress: float
    days_left_to_qualify: int


class GlobalTurnoverStatus(BaseModel):
    eligible: bool
    status: str  # active | paused | not_eligible
    level: Optional[int] = None
    percentage: Optional[float] = None
    message: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    days_remaining: int = 0
    total_earned: float = 0
    daily_average: float = 0
    active_direct_referrals: int = 0
    days_from_registration: int = 0
    levels: List[TurnoverLevelProgress] = []


class TurnoverHistoryItem(BaseModel):
    id: str
    amount: float
    percentage: int
    company_turnover: float
    description: Optional[str] = None
    date: Optional[datetime] = None
