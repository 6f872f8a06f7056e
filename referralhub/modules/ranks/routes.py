from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.ranks.schemas import (
    RankOverview, TeamRewardClaim, TeamRewardClaimResult, TeamRewardsOverview
)
from referralhub.modules.ranks.service import RankService
from referralhub.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/ranks", tags=["ranks"])


def get_rank_service(supabase: Client = Depends(get_service_supabase)) -> RankService:
    return RankService(supabase)


@router.get("", response_model=RankOverview)
async def get_ranks(
    profile: Dict = Depends(get_current_profile),
    service: RankService = Depends(get_rank_service)
):
    """Rank ladder with the caller's progress towards each rank"""
    return service.get_ranks(profile)


@router.get("/team-rewards", response_model=TeamRewardsOverview)
async def get_team_rewards(
    profile: Dict = Depends(get_current_profile),
    service: RankService = Depends(get_rank_service)
):
    return service.get_team_rewards(profile)


@router.post("/team-rewards/claim", response_model=TeamRewardClaimResult)
async def claim_team_reward(
    claim: TeamRewardClaim,
    profile: Dict = Depends(get_current_profile),
    service: RankService = Depends(get_rank_service)
):
    return service.claim_team_reward(profile["id"], claim)
