from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.global_turnover.schemas import GlobalTurnoverStatus, TurnoverHistoryItem
from referralhub.modules.global_turnover.service import GlobalTurnoverService
from referralhub.core.dependencies import get_current_profile, get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/global-turnover", tags=["global-turnover"])


def get_global_turnover_service(supabase: Client = Depends(get_service_supabase)) -> GlobalTurnoverService:
    return GlobalTurnoverService(supabase)


@router.get("", response_model=GlobalTurnoverStatus)
async def get_status(
    profile: Dict = Depends(get_current_profile),
    service: GlobalTurnoverService = Depends(get_global_turnover_service)
):
    """Eligibility, the active earning window and progress toward each level"""
    return service.get_status(profile)


@router.get("/history", response_model=List[TurnoverHistoryItem])
async def get_history(
    user_data: Dict = Depends(get_current_user),
    service: GlobalTurnoverService = Depends(get_global_turnover_service)
):
    return service.get_history(user_data["id"])
