from pydantic import BaseModel
from typing import Optional


class DashboardStats(BaseModel):
    total_earnings: float = 0
    direct_referrals: int = 0
    active_referrals: int = 0
    current_pool: int = 0
    pool_time_remaining: str = "No active pool"
    pool_progress: float = 0  # share of the active pool's time still left
    next_pool_reward: float = 0
    team_size: int = 0
    rank: Optional[str] = None
    account_status: Optional[str] = None
    needs_activation: bool = False
    activation_fee: float = 0
