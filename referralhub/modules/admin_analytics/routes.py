from fastapi import APIRouter, Depends, Query
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.reporting import csv_response
from referralhub.modules.admin_analytics.schemas import AnalyticsResponse
from referralhub.modules.admin_analytics.service import AnalyticsService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/analytics", tags=["admin"])


def get_analytics_service(supabase: Client = Depends(get_service_supabase)) -> AnalyticsService:
    return AnalyticsService(supabase)


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    days: int = Query(30, ge=1, le=365),
    admin: Dict = Depends(require_admin_permission("analytics.view_all")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return service.get_analytics(days)


@router.get("/export/{kind}")
async def export_analytics(
    kind: str,
    days: int = Query(30, ge=1, le=365),
    admin: Dict = Depends(require_admin_permission("analytics.export_data")),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """CSV of one series: users, revenue or performers"""
    content, filename = service.export(kind, days)
    return csv_response(content, filename)
