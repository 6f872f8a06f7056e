from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.admin_withdrawals.schemas import AdminWithdrawal, WithdrawalList, WithdrawalStatusUpdate
from referralhub.modules.admin_withdrawals.service import AdminWithdrawalService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/admin/withdrawals", tags=["admin"])


def get_admin_withdrawal_service(supabase: Client = Depends(get_service_supabase)) -> AdminWithdrawalService:
    return AdminWithdrawalService(supabase)


@router.get("", response_model=WithdrawalList)
async def list_withdrawals(
    tab: str = "pending",
    status: str = "all",
    search: Optional[str] = None,
    admin: Dict = Depends(require_admin_permission("finances.view")),
    service: AdminWithdrawalService = Depends(get_admin_withdrawal_service)
):
    return service.list_withdrawals(tab=tab, status=status, search=search)


@router.patch("/{withdrawal_id}", response_model=AdminWithdrawal)
async def update_withdrawal_status(
    withdrawal_id: str,
    update: WithdrawalStatusUpdate,
    admin: Dict = Depends(require_admin_permission("finances.approve_withdrawals")),
    service: AdminWithdrawalService = Depends(get_admin_withdrawal_service)
):
    """Approve, complete or reject a withdrawal"""
    return service.update_status(withdrawal_id, update, admin["id"])
