from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.bscscan import BscScanClient, get_bscscan_client
from referralhub.modules.wallets.schemas import (
    ChainTransfer, WalletBalance, WalletCreateResponse, WalletResponse
)
from referralhub.modules.wallets.service import WalletService
from referralhub.core.dependencies import get_current_user
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/wallets", tags=["wallets"])


def get_wallet_service(
    supabase: Client = Depends(get_service_supabase),
    bscscan: BscScanClient = Depends(get_bscscan_client)
) -> WalletService:
    return WalletService(supabase, bscscan)


@router.get("", response_model=WalletResponse)
async def get_wallet(
    user_data: Dict = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service)
):
    """The caller's deposit wallet (without key material), or null"""
    return service.get_wallet(user_data["id"])


@router.post("", response_model=WalletCreateResponse)
async def create_wallet(
    user_data: Dict = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service)
):
    return service.create_wallet(user_data["id"])


@router.get("/balance", response_model=WalletBalance)
async def get_wallet_balance(
    user_data: Dict = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service)
):
    return service.get_balance(user_data["id"])


@router.get("/transactions", response_model=List[ChainTransfer])
async def get_wallet_transactions(
    user_data: Dict = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service)
):
    return service.get_incoming_transfers(user_data["id"])
