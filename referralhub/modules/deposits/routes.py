from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.bscscan import BscScanClient, get_bscscan_client
from referralhub.modules.deposits.schemas import DepositOverview, ProcessDepositRequest, ProcessDepositResponse
from referralhub.modules.deposits.service import DepositService
from referralhub.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/deposits", tags=["deposits"])


def get_deposit_service(
    supabase: Client = Depends(get_service_supabase),
    bscscan: BscScanClient = Depends(get_bscscan_client)
) -> DepositService:
    return DepositService(supabase, bscscan)


@router.get("", response_model=DepositOverview)
async def get_deposits(
    profile: Dict = Depends(get_current_profile),
    service: DepositService = Depends(get_deposit_service)
):
    return service.get_overview(profile)


@router.post("/process", response_model=ProcessDepositResponse)
async def process_deposit(
    request: ProcessDepositRequest,
    profile: Dict = Depends(get_current_profile),
    service: DepositService = Depends(get_deposit_service)
):
    return service.process_deposit(profile, request)
