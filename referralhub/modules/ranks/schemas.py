from pydantic import BaseModel
from typing import Dict, List, Literal, Optional


class RankInfo(BaseModel):
    rank: str
    requirements: Dict[str, int]
    benefits: List[str]
    current: bool
    achieved: bool
    progress: float


class RankOverview(BaseModel):
    current_rank: Optional[str] = None
    direct_referrals: int = 0
    team_size: int = 0
    ranks: List[RankInfo]


class RewardTrack(BaseModel):
    amount: float
    time_limit_days: int
    claimed: bool
    eligible: bool


class TeamReward(BaseModel):
    team_size: int
    fast_track: RewardTrack
    standard: RewardTrack


class TeamRewardsOverview(BaseModel):
    current_team_size: int
    days_from_registration: int
    rewards: List[TeamReward]


class TeamRewardClaim(BaseModel):
    team_size: int
    reward_type: Literal["fast_track", "standard"]


class TeamRewardClaimResult(BaseModel):
    success: bool
    amount: float = 0
    message: str
