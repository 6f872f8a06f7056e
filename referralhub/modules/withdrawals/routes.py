from fastapi import APIRouter, Depends, Query
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.withdrawals.schemas import (
    FeeQuote, SourceWallet, WithdrawalOverview, WithdrawalRequest, WithdrawalResponse
)
from referralhub.modules.withdrawals.service import WithdrawalService, quote_fees
from referralhub.core.dependencies import get_current_profile, get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/withdrawals", tags=["withdrawals"])


def get_withdrawal_service(supabase: Client = Depends(get_service_supabase)) -> WithdrawalService:
    return WithdrawalService(supabase)


@router.get("", response_model=WithdrawalOverview)
async def get_withdrawals(
    profile: Dict = Depends(get_current_profile),
    service: WithdrawalService = Depends(get_withdrawal_service)
):
    return service.get_overview(profile)


@router.get("/quote", response_model=FeeQuote)
async def get_quote(
    amount: float = Query(..., ge=0),
    source_wallet: SourceWallet = "main",
    user_data: Dict = Depends(get_current_user)
):
    """Fee breakdown for a prospective withdrawal"""
    return quote_fees(amount, source_wallet)


@router.post("", response_model=WithdrawalResponse)
async def request_withdrawal(
    request: WithdrawalRequest,
    profile: Dict = Depends(get_current_profile),
    service: WithdrawalService = Depends(get_withdrawal_service)
):
    return service.request_withdrawal(profile, request)
