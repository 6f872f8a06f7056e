from fastapi import APIRouter, Depends, Query
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.p2p.schemas import (
    FundBalance, SearchType, TransferHistoryItem, TransferRequest, TransferResponse, UserSearchResult
)
from referralhub.modules.p2p.service import P2PService
from referralhub.core.dependencies import get_current_profile, get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/p2p", tags=["p2p"])


def get_p2p_service(supabase: Client = Depends(get_service_supabase)) -> P2PService:
    return P2PService(supabase)


@router.get("/balance", response_model=FundBalance)
async def get_balance(
    profile: Dict = Depends(get_current_profile),
    service: P2PService = Depends(get_p2p_service)
):
    return service.get_balance(profile)


@router.get("/history", response_model=List[TransferHistoryItem])
async def get_history(
    limit: int = Query(50, ge=1, le=1000),
    user_data: Dict = Depends(get_current_user),
    service: P2PService = Depends(get_p2p_service)
):
    return service.get_history(user_data["id"], limit)


@router.get("/search", response_model=List[UserSearchResult])
async def search_users(
    term: str = "",
    search_type: SearchType = "username",
    user_data: Dict = Depends(get_current_user),
    service: P2PService = Depends(get_p2p_service)
):
    """Look up a recipient by username, referral code or email"""
    return service.search_users(user_data["id"], term, search_type)


@router.post("/transfer", response_model=TransferResponse)
async def transfer(
    request: TransferRequest,
    profile: Dict = Depends(get_current_profile),
    service: P2PService = Depends(get_p2p_service)
):
    return service.transfer(profile, request)
