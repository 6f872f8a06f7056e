from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.reporting import csv_response, dated_filename
from referralhub.modules.admin_users.schemas import (
    AdminUser, AdminUserDetail, AdminUserUpdate, BalanceAdjustment, BalanceAdjustmentResult,
    UserFilters, UserPage
)
from referralhub.modules.admin_users.service import AdminUserService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/users", tags=["admin"])


def get_admin_user_service(supabase: Client = Depends(get_service_supabase)) -> AdminUserService:
    return AdminUserService(supabase)


@router.get("", response_model=UserPage)
async def list_users(
    filters: UserFilters = Depends(),
    admin: Dict = Depends(require_admin_permission("users.view")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    """Filtered, sorted and paginated users with platform-wide user stats"""
    return service.list_users(filters)


@router.get("/export")
async def export_users(
    filters: UserFilters = Depends(),
    admin: Dict = Depends(require_admin_permission("users.view")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return csv_response(service.export_csv(filters), dated_filename("users", "csv"))


@router.get("/{user_id}", response_model=AdminUserDetail)
async def get_user(
    user_id: str,
    admin: Dict = Depends(require_admin_permission("users.view")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return service.get_user(user_id)


@router.patch("/{user_id}", response_model=AdminUser)
async def update_user(
    user_id: str,
    update: AdminUserUpdate,
    admin: Dict = Depends(require_admin_permission("users.edit")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return service.update_user(user_id, update, admin["id"])


@router.post("/{user_id}/balance", response_model=BalanceAdjustmentResult)
async def adjust_balance(
    user_id: str,
    adjustment: BalanceAdjustment,
    admin: Dict = Depends(require_admin_permission("users.manage_balances")),
    service: AdminUserService = Depends(get_admin_user_service)
):
    return service.adjust_balance(user_id, adjustment, admin["id"])
