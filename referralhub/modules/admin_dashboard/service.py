from supabase import Client
from referralhub.core.utils import format_amount, newest_first
from referralhub.modules.admin_dashboard.models import RECENT_ACTIVITY_LIMIT, RECENT_ACTIVITY_PER_SOURCE
from referralhub.modules.admin_dashboard.schemas import AdminDashboardResponse, RecentActivity
from fastapi import HTTPException
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


def joined_username(row: Dict[str, Any]) -> Any:
    profile = row.get("profiles") or {}
    return profile.get("username") if isinstance(profile, dict) else None


class AdminDashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_platform_stats(self) -> Dict[str, Any]:
        try:
            result = self.supabase.rpc("get_admin_dashboard_stats", {}).execute()
        except Exception as e:
            logger.error(f"get_admin_dashboard_stats failed: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load dashboard stats: {str(e)}")
        return result.data or {}

    def get_recent_activity(self) -> List[RecentActivity]:
        """Latest registrations, withdrawals and deposits merged into one feed.
        A failing lookup yields an empty feed."""
        try:
            registrations = self.supabase.table("profiles")\
                .select("id, username, created_at")\
                .order("created_at", desc=True)\
                .limit(RECENT_ACTIVITY_PER_SOURCE)\
                .execute()
            withdrawals = self.supabase.table("withdrawals")\
                .select("id, amount, status, created_at, profiles!inner(username)")\
                .order("created_at", desc=True)\
                .limit(RECENT_ACTIVITY_PER_SOURCE)\
                .execute()
            deposits = self.supabase.table("fund_wallet_transactions")\
                .select("id, amount, created_at, description, profiles!inner(username)")\
                .eq("transaction_type", "deposit")\
                .order("created_at", desc=True)\
                .limit(RECENT_ACTIVITY_PER_SOURCE)\
                .execute()
        except Exception as e:
            logger.error(f"Recent activity loading error: {e}")
            return []

        activity: List[Dict[str, Any]] = []
        for reg in registrations.data or []:
            activity.append({
                "id": reg["id"],
                "type": "registration",
                "description": f"New user registered: {reg.get('username')}",
                "created_at": reg.get("created_at"),
                "username": reg.get("username"),
            })
        for withdrawal in withdrawals.data or []:
            activity.append({
                "id": withdrawal["id"],
                "type": "withdrawal",
                "description": f"Withdrawal request: ${format_amount(withdrawal.get('amount'))}",
                "amount": withdrawal.get("amount"),
                "status": withdrawal.get("status"),
                "created_at": withdrawal.get("created_at"),
                "username": joined_username(withdrawal),
            })
        for deposit in deposits.data or []:
            activity.append({
                "id": deposit["id"],
                "type": "deposit",
                "description": f"Deposit: ${format_amount(deposit.get('amount'))}",
                "amount": deposit.get("amount"),
                "created_at": deposit.get("created_at"),
                "username": joined_username(deposit),
            })
        return [RecentActivity(**item) for item in newest_first(activity)[:RECENT_ACTIVITY_LIMIT]]

    def get_dashboard(self) -> AdminDashboardResponse:
        return AdminDashboardResponse(
            stats=self.get_platform_stats(),
            recent_activity=self.get_recent_activity(),
        )
