from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.dashboard.schemas import DashboardStats
from referralhub.modules.dashboard.service import DashboardService
from referralhub.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_service_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardStats)
async def get_dashboard(
    profile: Dict = Depends(get_current_profile),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Earnings, referral counters and the active pool countdown"""
    return service.get_stats(profile)
