from supabase import Client
from referralhub.config import settings
from referralhub.core.utils import fetch_single, parse_timestamp, sum_field, utcnow
from referralhub.modules.dashboard.schemas import DashboardStats
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


def describe_active_pool(pool: Optional[Dict[str, Any]], now: datetime) -> Tuple[str, float]:
    """Countdown text and the percentage of pool time still remaining."""
    if not pool:
        return "No active pool", 0.0
    remaining = (parse_timestamp(pool["timer_end"]) - now).total_seconds()
    if remaining <= 0:
        return "Expired", 0.0
    total_seconds = int(remaining)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    total_time = (pool.get("time_limit_minutes") or 0) * 60
    progress = (remaining / total_time) * 100 if total_time > 0 else 0.0
    return f"{hours}h {minutes}m {seconds}s", progress


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_stats(self, profile: Dict[str, Any], now: Optional[datetime] = None) -> DashboardStats:
        """Headline numbers for the user dashboard"""
        now = now or utcnow()
        user_id = profile["id"]
        try:
            bonuses = self.supabase.table("referral_bonuses")\
                .select("amount")\
                .eq("user_id", user_id)\
                .eq("status", "completed")\
                .execute()

            team = self.supabase.table("profiles")\
                .select("id")\
                .eq("referred_by", profile.get("referral_code"))\
                .execute()

            active_pool = fetch_single(
                self.supabase.table("pool_progress")
                .select("*")
                .eq("user_id", user_id)
                .eq("status", "active")
            )

            time_text, progress = describe_active_pool(active_pool, now)
            status = profile.get("account_status")
            return DashboardStats(
                total_earnings=sum_field(bonuses.data or [], "amount"),
                direct_referrals=profile.get("total_direct_referrals") or 0,
                active_referrals=profile.get("active_direct_referrals") or 0,
                current_pool=profile.get("current_pool") or 0,
                pool_time_remaining=time_text,
                pool_progress=progress,
                next_pool_reward=(active_pool or {}).get("pool_amount") or 0,
                team_size=len(team.data or []),
                rank=profile.get("rank"),
                account_status=status,
                needs_activation=status == "inactive",
                activation_fee=settings.activation_fee,
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to load dashboard for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load dashboard data: {str(e)}")
