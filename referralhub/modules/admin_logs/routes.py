from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.reporting import csv_response, dated_filename
from referralhub.modules.admin_logs.schemas import ActivityLogFilters, ActivityLogList
from referralhub.modules.admin_logs.service import AdminLogService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/logs", tags=["admin"])


def get_admin_log_service(supabase: Client = Depends(get_service_supabase)) -> AdminLogService:
    return AdminLogService(supabase)


@router.get("", response_model=ActivityLogList)
async def list_logs(
    filters: ActivityLogFilters = Depends(),
    admin: Dict = Depends(require_admin_permission("system.view_logs")),
    service: AdminLogService = Depends(get_admin_log_service)
):
    """Admin activity within the last `days` days, searchable by action, admin and resource"""
    return service.list_logs(filters)


@router.get("/export")
async def export_logs(
    filters: ActivityLogFilters = Depends(),
    admin: Dict = Depends(require_admin_permission("system.view_logs")),
    service: AdminLogService = Depends(get_admin_log_service)
):
    return csv_response(service.export_csv(filters), dated_filename("admin_activity_logs", "csv"))
