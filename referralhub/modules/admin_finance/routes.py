from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.reporting import dated_filename, json_download_response
from referralhub.modules.admin_finance.schemas import FinanceOverview
from referralhub.modules.admin_finance.service import FinanceService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/finance", tags=["admin"])


def get_finance_service(supabase: Client = Depends(get_service_supabase)) -> FinanceService:
    return FinanceService(supabase)


@router.get("", response_model=FinanceOverview)
async def get_finance_overview(
    admin: Dict = Depends(require_admin_permission("finances.view")),
    service: FinanceService = Depends(get_finance_service)
):
    return service.get_overview()


@router.get("/report")
async def download_financial_report(
    admin: Dict = Depends(require_admin_permission("finances.view_reports")),
    service: FinanceService = Depends(get_finance_service)
):
    """Financial summary as a JSON download"""
    report = service.build_report()
    return json_download_response(report.model_dump(), dated_filename("financial_report", "json"))
