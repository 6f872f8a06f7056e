from pydantic import BaseModel
from typing import Optional, List, Dict, Any
from datetime import datetime


class PoolProgress(BaseModel):
    id: str
    user_id: str
    pool_number: int
    pool_amount: float = 0
    time_limit_minutes: int = 0
    direct_referral_requirement: Optional[int] = None
    rank_requirement: Optional[str] = None
    timer_start: Optional[datetime] = None
    timer_end: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    reward_paid: float = 0
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CurrentPool(PoolProgress):
    time_remaining_seconds: int = 0
    time_remaining_text: str = "0s"
    progress_percentage: float = 0


class PoolStats(BaseModel):
    total_pools_completed: int = 0
    total_rewards_earned: float = 0
    current_pool: int = 0
    pools_failed: int = 0
    average_completion_time: float = 0  # minutes


class PoolOverview(BaseModel):
    history: List[PoolProgress] = []
    current_pool: Optional[CurrentPool] = None
    stats: PoolStats
    show_referral_cta: bool = False


class PoolRequirement(BaseModel):
    pool_number: int
    time_limit_minutes: int
    time_limit_text: str
    direct_referrals: int
    rank: str


class PoolActionResult(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
