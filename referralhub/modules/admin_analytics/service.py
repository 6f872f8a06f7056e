"""
Admin analytics: day series, income breakdowns and referral distribution.

Each section is loaded independently; a failing query is logged and its section
comes back empty instead of failing the whole response.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import HTTPException
from supabase import Client

from referralhub.core.reporting import to_csv
from referralhub.core.utils import day_key, format_amount, utcnow
from referralhub.modules.admin_analytics.models import (
    CHART_COLORS, ESTIMATED_INCOME_PER_REFERRER, EXPORTS, REFERRAL_BUCKETS, TOP_PERFORMERS_LIMIT
)
from referralhub.modules.admin_analytics.schemas import (
    AnalyticsResponse, IncomeStream, PoolPerformance, ReferralBucket, RevenuePoint,
    TopPerformer, UserGrowthPoint
)

logger = logging.getLogger(__name__)


def bonus_type_label(bonus_type: str) -> str:
    """level_income -> Level Income. Only the first underscore becomes a space."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), bonus_type.replace("_", " ", 1))


def referral_bucket(count: int) -> str:
    for label, low, high in REFERRAL_BUCKETS:
        if count >= low and (high is None or count <= high):
            return label
    return REFERRAL_BUCKETS[0][0]


class AnalyticsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _section(self, name: str, loader: Callable[[], List[Any]]) -> List[Any]:
        try:
            return loader()
        except Exception as e:
            logger.error(f"Error loading {name} data: {e}")
            return []

    def _window(self, table: str, columns: str, start: datetime, end: datetime, **eq):
        query = self.supabase.table(table).select(columns)
        for column, value in eq.items():
            query = query.eq(column, value)
        return query.gte("created_at", start.isoformat())\
            .lte("created_at", end.isoformat())\
            .execute()

    def load_user_growth(self, start: datetime, end: datetime) -> List[UserGrowthPoint]:
        result = self._window("profiles", "created_at, account_status", start, end)
        grouped: Dict[str, List[int]] = {}
        for user in result.data or []:
            counts = grouped.setdefault(day_key(user["created_at"]), [0, 0])
            counts[0] += 1
            if user.get("account_status") == "active":
                counts[1] += 1
        return [
            UserGrowthPoint(date=date, users=users, active=active)
            for date, (users, active) in sorted(grouped.items())
        ]

    def load_revenue(self, start: datetime, end: datetime) -> List[RevenuePoint]:
        deposits = self._window(
            "fund_wallet_transactions", "created_at, amount", start, end, transaction_type="deposit"
        )
        withdrawals = self._window("withdrawals", "created_at, amount", start, end, status="completed")
        grouped: Dict[str, List[float]] = {}
        for deposit in deposits.data or []:
            grouped.setdefault(day_key(deposit["created_at"]), [0.0, 0.0])[0] += float(deposit.get("amount") or 0)
        for withdrawal in withdrawals.data or []:
            grouped.setdefault(day_key(withdrawal["created_at"]), [0.0, 0.0])[1] += float(withdrawal.get("amount") or 0)
        return [
            RevenuePoint(date=date, revenue=revenue, withdrawals=paid_out)
            for date, (revenue, paid_out) in sorted(grouped.items())
        ]

    def load_income_streams(self, start: datetime, end: datetime) -> List[IncomeStream]:
        result = self._window("referral_bonuses", "bonus_type, amount", start, end, status="completed")
        totals: Dict[str, float] = {}
        for bonus in result.data or []:
            bonus_type = bonus.get("bonus_type") or "other"
            totals[bonus_type] = totals.get(bonus_type, 0.0) + float(bonus.get("amount") or 0)
        return [
            IncomeStream(name=bonus_type_label(bonus_type), value=amount, color=CHART_COLORS[i % len(CHART_COLORS)])
            for i, (bonus_type, amount) in enumerate(totals.items())
        ]

    def load_pool_performance(self) -> List[PoolPerformance]:
        result = self.supabase.table("pool_progress")\
            .select("pool_number, status, reward_paid")\
            .eq("status", "completed")\
            .execute()
        stats: Dict[int, List[float]] = {}
        for pool in result.data or []:
            entry = stats.setdefault(pool["pool_number"], [0, 0.0])
            entry[0] += 1
            entry[1] += float(pool.get("reward_paid") or 0)
        return [
            PoolPerformance(pool=f"Pool {number}", completions=int(completions), rewards=rewards)
            for number, (completions, rewards) in sorted(stats.items())
        ]

    def load_referral_stats(self) -> List[ReferralBucket]:
        result = self.supabase.table("profiles").select("total_direct_referrals").execute()
        counts = {label: 0 for label, _, _ in REFERRAL_BUCKETS}
        for profile in result.data or []:
            counts[referral_bucket(profile.get("total_direct_referrals") or 0)] += 1
        return [
            ReferralBucket(level=label, count=count, income=count * ESTIMATED_INCOME_PER_REFERRER)
            for label, count in counts.items()
        ]

    def load_top_performers(self) -> List[TopPerformer]:
        result = self.supabase.table("profiles")\
            .select("username, main_wallet_balance, total_direct_referrals")\
            .order("main_wallet_balance", desc=True)\
            .limit(TOP_PERFORMERS_LIMIT)\
            .execute()
        return [
            TopPerformer(
                username=profile.get("username"),
                income=float(profile.get("main_wallet_balance") or 0),
                referrals=profile.get("total_direct_referrals") or 0,
            )
            for profile in result.data or []
        ]

    def get_analytics(self, days: int = 30, now: Optional[datetime] = None) -> AnalyticsResponse:
        end = now or utcnow()
        start = end - timedelta(days=days)
        return AnalyticsResponse(
            days=days,
            user_growth=self._section("user growth", lambda: self.load_user_growth(start, end)),
            revenue_data=self._section("revenue", lambda: self.load_revenue(start, end)),
            income_streams=self._section("income stream", lambda: self.load_income_streams(start, end)),
            pool_performance=self._section("pool performance", self.load_pool_performance),
            referral_stats=self._section("referral stats", self.load_referral_stats),
            top_performers=self._section("top performers", self.load_top_performers),
        )

    def export(self, kind: str, days: int = 30, now: Optional[datetime] = None) -> Tuple[str, str]:
        """(csv text, filename) for one analytics series"""
        if kind not in EXPORTS:
            raise HTTPException(status_code=404, detail=f"Unknown export type: {kind}")
        headers, filename = EXPORTS[kind]
        data = self.get_analytics(days, now)
        if kind == "users":
            rows = [[p.date, p.users, p.active] for p in data.user_growth]
        elif kind == "revenue":
            rows = [[p.date, format_amount(p.revenue), format_amount(p.withdrawals)] for p in data.revenue_data]
        else:
            rows = [[p.username, format_amount(p.income), p.referrals] for p in data.top_performers]
        return to_csv(headers, rows), filename
