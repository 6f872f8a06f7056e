from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class NetworkMember(BaseModel):
    id: str
    username: Optional[str] = None
    rank: Optional[str] = None
    account_status: Optional[str] = None
    activation_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    level: int
    sponsor_id: Optional[str] = None
    total_earned_from: float = 0
    direct_referrals_count: int = 0
    team_size: int = 0

    class Config:
        from_attributes = True


class NetworkStats(BaseModel):
    total_network_size: int = 0
    direct_referrals: int = 0
    active_members: int = 0
    total_volume: float = 0
    this_month_growth: int = 0
    levels_deep: int = 0
    top_performers: List[NetworkMember] = []


class ReferralLink(BaseModel):
    referral_code: str
    link: str
    share_title: str
    share_text: str
