from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.account.schemas import ActivationResponse, ReactivationResponse, RecycleOverview
from referralhub.modules.account.service import AccountService
from referralhub.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/account", tags=["account"])


def get_account_service(supabase: Client = Depends(get_service_supabase)) -> AccountService:
    return AccountService(supabase)


@router.post("/activate", response_model=ActivationResponse)
async def activate_account(
    profile: Dict = Depends(get_current_profile),
    service: AccountService = Depends(get_account_service)
):
    return service.activate(profile)


@router.get("/recycle", response_model=RecycleOverview)
async def get_recycle(
    profile: Dict = Depends(get_current_profile),
    service: AccountService = Depends(get_account_service)
):
    """Recycle income earned so far and whether a reactivation is available"""
    return service.get_recycle(profile)


@router.post("/reactivate", response_model=ReactivationResponse)
async def reactivate_account(
    profile: Dict = Depends(get_current_profile),
    service: AccountService = Depends(get_account_service)
):
    return service.reactivate(profile)
