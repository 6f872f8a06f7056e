from supabase import Client
from referralhub.core.audit import log_admin_activity
from referralhub.core.utils import utcnow
from referralhub.modules.admin_withdrawals.models import ALLOWED_TRANSITIONS
from referralhub.modules.admin_withdrawals.schemas import (
    AdminWithdrawal, WithdrawalList, WithdrawalStats, WithdrawalStatusUpdate
)
from fastapi import HTTPException
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def to_withdrawal(row: Dict[str, Any]) -> AdminWithdrawal:
    data = {k: v for k, v in row.items() if k != "profiles"}
    profile = row.get("profiles") or {}
    return AdminWithdrawal(
        **data,
        username=profile.get("username"),
        email=profile.get("email"),
        rank=profile.get("rank"),
    )


def compute_withdrawal_stats(withdrawals: List[AdminWithdrawal]) -> WithdrawalStats:
    pending = [w for w in withdrawals if w.status == "pending"]
    completed = [w for w in withdrawals if w.status == "completed"]
    durations = [
        (w.processed_at - w.created_at).total_seconds() / 3600
        for w in completed
        if w.processed_at and w.created_at
    ]
    return WithdrawalStats(
        total_pending=len(pending),
        total_processing=len([w for w in withdrawals if w.status == "processing"]),
        total_completed=len(completed),
        total_failed=len([w for w in withdrawals if w.status == "failed"]),
        total_amount_pending=sum(w.amount for w in pending),
        total_amount_completed=sum(w.amount for w in completed),
        total_fees_collected=sum(w.fee for w in completed),
        avg_processing_time=sum(durations) / len(durations) if durations else 0,
    )


def filter_withdrawals(
    withdrawals: List[AdminWithdrawal],
    tab: str = "pending",
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[AdminWithdrawal]:
    filtered = withdrawals
    if tab and tab != "all":
        filtered = [w for w in filtered if w.status == tab]
    if search:
        needle = search.lower()
        filtered = [
            w for w in filtered
            if needle in (w.username or "").lower()
            or needle in (w.email or "").lower()
            or needle in (w.withdrawal_address or "").lower()
            or needle in w.id.lower()
        ]
    if status and status != "all":
        filtered = [w for w in filtered if w.status == status]
    return filtered


class AdminWithdrawalService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_withdrawals(self, tab: str = "pending", status: Optional[str] = None, search: Optional[str] = None) -> WithdrawalList:
        """Withdrawals with requester details; stats cover every withdrawal"""
        try:
            result = self.supabase.table("withdrawals")\
                .select("*, profiles!inner(username, email, rank)")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading withdrawals: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load withdrawals: {str(e)}")
        withdrawals = [to_withdrawal(row) for row in result.data or []]
        return WithdrawalList(
            withdrawals=filter_withdrawals(withdrawals, tab, status, search),
            stats=compute_withdrawal_stats(withdrawals),
        )

    def update_status(self, withdrawal_id: str, update: WithdrawalStatusUpdate, admin_id: str) -> AdminWithdrawal:
        try:
            current = self.supabase.table("withdrawals")\
                .select("*")\
                .eq("id", withdrawal_id)\
                .execute()
            if not current.data:
                raise HTTPException(status_code=404, detail="Withdrawal not found")
            old_status = current.data[0].get("status")
            if update.status not in ALLOWED_TRANSITIONS.get(old_status, set()):
                raise HTTPException(
                    status_code=400,
                    detail=f"Cannot change withdrawal status from {old_status} to {update.status}"
                )

            update_data = {
                "status": update.status,
                "processed_at": utcnow().isoformat(),
                "admin_notes": update.admin_notes,
            }
            if update.transaction_hash:
                update_data["transaction_hash"] = update.transaction_hash

            # only applies while the row still has the status the transition was checked against
            result = self.supabase.table("withdrawals")\
                .update(update_data)\
                .eq("id", withdrawal_id)\
                .eq("status", old_status)\
                .execute()
            if not result.data:
                raise HTTPException(
                    status_code=409,
                    detail="Withdrawal status changed, reload and try again"
                )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update withdrawal: {str(e)}")

        log_admin_activity(self.supabase, admin_id, "UPDATE_WITHDRAWAL_STATUS", "withdrawal", withdrawal_id, {
            "old_status": old_status,
            "new_status": update.status,
            "notes": update.admin_notes,
            "transaction_hash": update.transaction_hash,
        })
        logger.info(f"Admin {admin_id} moved withdrawal {withdrawal_id} from {old_status} to {update.status}")
        return AdminWithdrawal(**result.data[0])
