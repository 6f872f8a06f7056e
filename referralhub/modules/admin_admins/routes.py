from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.admin_admins.schemas import (
    AdminAccount, AdminCreate, AdminList, AdminRole, AdminStatusUpdate, RoleCreate
)
from referralhub.modules.admin_admins.service import AdminAccountService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/admin/admins", tags=["admin"])


def get_admin_account_service(supabase: Client = Depends(get_service_supabase)) -> AdminAccountService:
    return AdminAccountService(supabase)


@router.get("", response_model=AdminList)
async def list_admins(
    admin: Dict = Depends(require_admin_permission("system.manage_admins")),
    service: AdminAccountService = Depends(get_admin_account_service)
):
    return service.list_admins()


@router.post("", response_model=AdminAccount)
async def create_admin(
    request: AdminCreate,
    admin: Dict = Depends(require_admin_permission("system.manage_admins")),
    service: AdminAccountService = Depends(get_admin_account_service)
):
    """Give an existing member access to the admin console under role_id"""
    return service.create_admin(request, admin["id"])


@router.get("/roles", response_model=List[AdminRole])
async def list_roles(
    admin: Dict = Depends(require_admin_permission("system.manage_admins")),
    service: AdminAccountService = Depends(get_admin_account_service)
):
    return service.list_roles()


@router.post("/roles", response_model=AdminRole)
async def create_role(
    role: RoleCreate,
    admin: Dict = Depends(require_admin_permission("system.manage_admins")),
    service: AdminAccountService = Depends(get_admin_account_service)
):
    return service.create_role(role, admin["id"])


@router.patch("/{admin_user_id}/status", response_model=AdminAccount)
async def update_admin_status(
    admin_user_id: str,
    update: AdminStatusUpdate,
    admin: Dict = Depends(require_admin_permission("system.manage_admins")),
    service: AdminAccountService = Depends(get_admin_account_service)
):
    return service.update_status(admin_user_id, update, admin["id"])
