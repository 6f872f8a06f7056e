from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.admin_dashboard.schemas import AdminDashboardResponse
from referralhub.modules.admin_dashboard.service import AdminDashboardService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/dashboard", tags=["admin"])


def get_admin_dashboard_service(supabase: Client = Depends(get_service_supabase)) -> AdminDashboardService:
    return AdminDashboardService(supabase)


@router.get("", response_model=AdminDashboardResponse)
async def get_admin_dashboard(
    admin: Dict = Depends(require_admin_permission("finances.view")),
    service: AdminDashboardService = Depends(get_admin_dashboard_service)
):
    """Platform totals plus the latest registrations, withdrawals and deposits"""
    return service.get_dashboard()
