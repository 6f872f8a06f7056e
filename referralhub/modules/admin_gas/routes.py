from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from referralhub.config import settings
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.bscscan import BscScanClient, BscScanError, get_bscscan_client
from referralhub.core.utils import utcnow
from referralhub.modules.admin_gas.schemas import (
    GasOverview, HotWalletStatus, HotWalletStatusResponse, MasterWalletConfig,
    MasterWalletConfigUpdate, WalletStats
)
from referralhub.modules.admin_gas.service import GasService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def get_gas_service(
    supabase: Client = Depends(get_service_supabase),
    bscscan: BscScanClient = Depends(get_bscscan_client)
) -> GasService:
    return GasService(supabase, bscscan)


@router.get("/gas", response_model=GasOverview)
async def get_gas_overview(
    days: int = 7,
    admin: Dict = Depends(require_admin_permission("system.view_settings")),
    service: GasService = Depends(get_gas_service)
):
    """Recent gas operations, gas stats, master wallet config and the sweep queue"""
    return service.get_overview(days)


@router.patch("/gas/config", response_model=MasterWalletConfig)
async def update_gas_config(
    update: MasterWalletConfigUpdate,
    admin: Dict = Depends(require_admin_permission("system.edit_settings")),
    service: GasService = Depends(get_gas_service)
):
    return service.update_config(update, admin["id"])


@router.post("/gas/auto-sweep/toggle", response_model=MasterWalletConfig)
async def toggle_auto_sweep(
    admin: Dict = Depends(require_admin_permission("system.edit_settings")),
    service: GasService = Depends(get_gas_service)
):
    return service.toggle_auto_sweep(admin["id"])


@router.get("/sweep/statistics", response_model=Dict[str, Any])
async def get_sweep_statistics(
    admin: Dict = Depends(require_admin_permission("system.view_settings")),
    service: GasService = Depends(get_gas_service)
):
    return service.get_sweep_statistics()


@router.get("/sweep/hot-wallet-status", response_model=HotWalletStatusResponse)
async def get_hot_wallet_status(
    admin: Dict = Depends(require_admin_permission("system.view_settings")),
    service: GasService = Depends(get_gas_service)
):
    try:
        return HotWalletStatusResponse(success=True, data=service.get_hot_wallet_status())
    except BscScanError as e:
        logger.error(f"Hot wallet status error: {e}")
        fallback = HotWalletStatusResponse(
            success=False,
            error=str(e),
            data=HotWalletStatus(address=settings.hot_wallet_address, last_update=utcnow()),
        )
        return JSONResponse(status_code=500, content=fallback.model_dump(mode="json"))


@router.get("/sweep/wallet-stats", response_model=WalletStats)
async def get_wallet_stats(
    admin: Dict = Depends(require_admin_permission("system.view_settings")),
    service: GasService = Depends(get_gas_service)
):
    return service.get_wallet_stats()
