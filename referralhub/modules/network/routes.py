from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.network.schemas import NetworkMember, NetworkStats, ReferralLink
from referralhub.modules.network.service import NetworkService
from referralhub.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/network", tags=["network"])


def get_network_service(supabase: Client = Depends(get_service_supabase)) -> NetworkService:
    return NetworkService(supabase)


@router.get("/members", response_model=List[NetworkMember])
async def list_members(
    search: Optional[str] = None,
    level: Optional[int] = None,
    status: Optional[str] = None,
    profile: Dict = Depends(get_current_profile),
    service: NetworkService = Depends(get_network_service)
):
    """Members of the caller's downline, level 1 being direct referrals"""
    return service.list_members(profile, search=search, level=level, status=status)


@router.get("/stats", response_model=NetworkStats)
async def get_network_stats(
    profile: Dict = Depends(get_current_profile),
    service: NetworkService = Depends(get_network_service)
):
    return service.get_stats(profile)


@router.get("/referral-link", response_model=ReferralLink)
async def get_referral_link(
    profile: Dict = Depends(get_current_profile),
    service: NetworkService = Depends(get_network_service)
):
    return service.get_referral_link(profile)
