from supabase import Client
from referralhub.core.utils import newest_first, sum_field, utcnow
from referralhub.modules.admin_dashboard.service import AdminDashboardService, joined_username
from referralhub.modules.admin_finance.models import (
    BONUS_STREAMS, RECENT_BONUSES, RECENT_DEPOSITS, RECENT_TRANSACTIONS_LIMIT,
    RECENT_WITHDRAWALS, REPORT_TRANSACTIONS_LIMIT
)
from referralhub.modules.admin_finance.schemas import (
    FinanceOverview, FinancialReport, IncomeStreamStats, RecentTransaction
)
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class FinanceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_income_streams(self) -> IncomeStreamStats:
        """Completed bonus totals per stream plus completed pool rewards"""
        try:
            bonuses = self.supabase.table("referral_bonuses")\
                .select("bonus_type, amount")\
                .eq("status", "completed")\
                .execute()
            pools = self.supabase.table("pool_progress")\
                .select("reward_paid")\
                .eq("status", "completed")\
                .execute()
        except Exception as e:
            logger.error(f"Error loading income stream stats: {e}")
            return IncomeStreamStats()

        totals: Dict[str, float] = {}
        for bonus in bonuses.data or []:
            totals[bonus.get("bonus_type")] = totals.get(bonus.get("bonus_type"), 0.0) + float(bonus.get("amount") or 0)
        streams = {name: totals.get(name, 0.0) for name in BONUS_STREAMS}
        return IncomeStreamStats(pool_income=sum_field(pools.data or [], "reward_paid"), **streams)

    def get_recent_transactions(self) -> List[RecentTransaction]:
        try:
            bonuses = self.supabase.table("referral_bonuses")\
                .select("id, bonus_type, amount, description, created_at, status, profiles!referral_bonuses_user_id_fkey(username)")\
                .order("created_at", desc=True)\
                .limit(RECENT_BONUSES)\
                .execute()
            deposits = self.supabase.table("fund_wallet_transactions")\
                .select("id, transaction_type, amount, description, created_at, profiles!fund_wallet_transactions_user_id_fkey(username)")\
                .eq("transaction_type", "deposit")\
                .order("created_at", desc=True)\
                .limit(RECENT_DEPOSITS)\
                .execute()
            withdrawals = self.supabase.table("withdrawals")\
                .select("id, amount, status, created_at, profiles!withdrawals_user_id_fkey(username)")\
                .order("created_at", desc=True)\
                .limit(RECENT_WITHDRAWALS)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading recent transactions: {e}")
            return []

        merged: List[Dict[str, Any]] = []
        for bonus in bonuses.data or []:
            merged.append({
                "id": bonus["id"],
                "type": bonus.get("bonus_type") or "bonus",
                "amount": bonus.get("amount") or 0,
                "username": joined_username(bonus) or "Unknown",
                "description": bonus.get("description"),
                "created_at": bonus.get("created_at"),
                "status": bonus.get("status"),
            })
        for deposit in deposits.data or []:
            merged.append({
                "id": deposit["id"],
                "type": "deposit",
                "amount": deposit.get("amount") or 0,
                "username": joined_username(deposit) or "Unknown",
                "description": deposit.get("description"),
                "created_at": deposit.get("created_at"),
                "status": "completed",
            })
        for withdrawal in withdrawals.data or []:
            merged.append({
                "id": withdrawal["id"],
                "type": "withdrawal",
                "amount": withdrawal.get("amount") or 0,
                "username": joined_username(withdrawal) or "Unknown",
                "description": "Withdrawal request",
                "created_at": withdrawal.get("created_at"),
                "status": withdrawal.get("status"),
            })
        return [RecentTransaction(**row) for row in newest_first(merged)[:RECENT_TRANSACTIONS_LIMIT]]

    def get_overview(self) -> FinanceOverview:
        return FinanceOverview(
            financial_stats=AdminDashboardService(self.supabase).get_platform_stats(),
            income_streams=self.get_income_streams(),
            recent_transactions=self.get_recent_transactions(),
        )

    def build_report(self, now: Optional[datetime] = None) -> FinancialReport:
        overview = self.get_overview()
        return FinancialReport(
            generated_at=now or utcnow(),
            summary=overview.financial_stats,
            income_streams=overview.income_streams,
            recent_transactions=overview.recent_transactions[:REPORT_TRANSACTIONS_LIMIT],
        )
