from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.pools.schemas import PoolActionResult, PoolOverview, PoolRequirement
from referralhub.modules.pools.service import PoolService
from referralhub.core.dependencies import get_current_profile, get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/pools", tags=["pools"])


def get_pool_service(supabase: Client = Depends(get_service_supabase)) -> PoolService:
    return PoolService(supabase)


@router.get("", response_model=PoolOverview)
async def get_pools(
    profile: Dict = Depends(get_current_profile),
    service: PoolService = Depends(get_pool_service)
):
    return service.get_overview(profile)


@router.get("/requirements", response_model=List[PoolRequirement])
async def get_pool_requirements(
    user_data: Dict = Depends(get_current_user),
    service: PoolService = Depends(get_pool_service)
):
    """Time limit, referral and rank requirement of each pool"""
    return service.get_requirements()


@router.post("/check-progression", response_model=PoolActionResult)
async def check_pool_progression(
    user_data: Dict = Depends(get_current_user),
    service: PoolService = Depends(get_pool_service)
):
    return service.check_progression(user_data["id"])


@router.post("/reset-expired", response_model=PoolActionResult)
async def reset_expired_pool(
    user_data: Dict = Depends(get_current_user),
    service: PoolService = Depends(get_pool_service)
):
    """Restart an expired pool with a fresh timer"""
    return service.reset_expired(user_data["id"])
