from fastapi import APIRouter, Depends
from referralhub.database.supabase_client import get_service_supabase
from referralhub.core.reporting import csv_response, dated_filename
from referralhub.modules.transactions.schemas import TransactionFilters, TransactionList
from referralhub.modules.transactions.service import TransactionService
from referralhub.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_transaction_service(supabase: Client = Depends(get_service_supabase)) -> TransactionService:
    return TransactionService(supabase)


@router.get("", response_model=TransactionList)
async def list_transactions(
    filters: TransactionFilters = Depends(),
    user_data: Dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    """Bonuses, pool rewards, fund wallet movements, withdrawals and P2P transfers in one list.
    Stats are computed over the unfiltered ledger."""
    return service.list_transactions(user_data["id"], filters)


@router.get("/export")
async def export_transactions(
    filters: TransactionFilters = Depends(),
    user_data: Dict = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service)
):
    content = service.export_csv(user_data["id"], filters)
    return csv_response(content, dated_filename("transactions", "csv"))
