from supabase import Client
from referralhub.core.utils import format_amount, parse_timestamp, utcnow
from referralhub.modules.network.service import NetworkService
from referralhub.modules.ranks.models import RANKS, TEAM_REWARD_TIERS
from referralhub.modules.ranks.schemas import (
    RankInfo, RankOverview, RewardTrack, TeamReward, TeamRewardClaim,
    TeamRewardClaimResult, TeamRewardsOverview
)
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
import logging

logger = logging.getLogger(__name__)


def rank_progress(requirements: Dict[str, int], direct_referrals: int, team_size: int) -> float:
    required_directs = requirements.get("direct_referrals", 0)
    if required_directs == 0:
        return 100.0
    if "team_size" in requirements:
        return min(100.0, (direct_referrals / required_directs + team_size / requirements["team_size"]) * 50)
    return min(100.0, direct_referrals / required_directs * 100)


def rank_achieved(requirements: Dict[str, int], direct_referrals: int, team_size: int) -> bool:
    return (
        direct_referrals >= requirements.get("direct_referrals", 0)
        and team_size >= requirements.get("team_size", 0)
    )


def build_ranks(profile: Dict[str, Any], team_size: int) -> List[RankInfo]:
    directs = profile.get("total_direct_referrals") or 0
    return [
        RankInfo(
            rank=entry["rank"],
            requirements=entry["requirements"],
            benefits=entry["benefits"],
            current=profile.get("rank") == entry["rank"],
            achieved=rank_achieved(entry["requirements"], directs, team_size),
            progress=rank_progress(entry["requirements"], directs, team_size),
        )
        for entry in RANKS
    ]


def build_team_rewards(team_size: int, days: int, claimed: Set[int]) -> List[TeamReward]:
    rewards = []
    for tier, (fast_amount, fast_days), (std_amount, std_days) in TEAM_REWARD_TIERS:
        is_claimed = tier in claimed
        reached = team_size >= tier
        rewards.append(TeamReward(
            team_size=tier,
            fast_track=RewardTrack(
                amount=fast_amount,
                time_limit_days=fast_days,
                claimed=is_claimed,
                eligible=reached and days <= fast_days and not is_claimed,
            ),
            standard=RewardTrack(
                amount=std_amount,
                time_limit_days=std_days,
                claimed=is_claimed,
                eligible=reached and fast_days < days <= std_days and not is_claimed,
            ),
        ))
    return rewards


class RankService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _team_size(self, profile: Dict[str, Any]) -> int:
        return len(NetworkService(self.supabase).walk_downline(profile))

    def get_ranks(self, profile: Dict[str, Any]) -> RankOverview:
        try:
            team_size = self._team_size(profile)
        except Exception as e:
            logger.error(f"Failed to calculate team size for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return RankOverview(
            current_rank=profile.get("rank"),
            direct_referrals=profile.get("total_direct_referrals") or 0,
            team_size=team_size,
            ranks=build_ranks(profile, team_size),
        )

    def get_claimed_tiers(self, user_id: str) -> Set[int]:
        result = self.supabase.table("team_reward_claims")\
            .select("team_size")\
            .eq("user_id", user_id)\
            .execute()
        return {row["team_size"] for row in result.data or []}

    def get_team_rewards(self, profile: Dict[str, Any], now: Optional[datetime] = None) -> TeamRewardsOverview:
        """Team size reward tiers with fast-track / standard eligibility"""
        now = now or utcnow()
        try:
            team_size = self._team_size(profile)
            claimed = self.get_claimed_tiers(profile["id"])
        except Exception as e:
            logger.error(f"Failed to load team rewards for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        registered = parse_timestamp(profile.get("created_at"))
        days = int((now - registered).total_seconds() // 86400) if registered else 0
        return TeamRewardsOverview(
            current_team_size=team_size,
            days_from_registration=days,
            rewards=build_team_rewards(team_size, days, claimed),
        )

    def claim_team_reward(self, user_id: str, claim: TeamRewardClaim) -> TeamRewardClaimResult:
        # the RPC decides which tier pays out; the request only labels the message
        try:
            result = self.supabase.rpc("check_team_rewards", {"user_id_param": user_id}).execute()
        except Exception as e:
            logger.error(f"check_team_rewards failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        data = result.data or {}
        if not data.get("success"):
            raise HTTPException(status_code=400, detail=data.get("message") or "Failed to claim team reward")
        amount = float(data.get("amount") or 0)
        logger.info(f"User {user_id} claimed {claim.reward_type} team reward for tier {claim.team_size}: ${amount}")
        return TeamRewardClaimResult(
            success=True,
            amount=amount,
            message=f"Congratulations! You earned a {claim.reward_type.replace('_', ' ')} team reward of ${format_amount(amount)}!",
        )
