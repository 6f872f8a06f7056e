from supabase import Client
from referralhub.core.utils import format_time_remaining, parse_timestamp, sum_field, utcnow
from referralhub.modules.pools.models import FAILED_STATUSES, POOL_REQUIREMENTS
from referralhub.modules.pools.schemas import (
    CurrentPool, PoolActionResult, PoolOverview, PoolProgress, PoolRequirement, PoolStats
)
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def build_current_pool(pool: Dict[str, Any], now: datetime) -> CurrentPool:
    remaining = max(0.0, (parse_timestamp(pool["timer_end"]) - now).total_seconds())
    total = (pool.get("time_limit_minutes") or 0) * 60
    progress = ((total - remaining) / total) * 100 if total > 0 else 0.0
    return CurrentPool(
        **pool,
        time_remaining_seconds=int(remaining),
        time_remaining_text=format_time_remaining(remaining),
        progress_percentage=min(100.0, max(0.0, progress)),
    )


def average_completion_minutes(completed: List[Dict[str, Any]]) -> float:
    durations = []
    for pool in completed:
        started = parse_timestamp(pool.get("started_at"))
        finished = parse_timestamp(pool.get("completed_at"))
        if started and finished:
            durations.append((finished - started).total_seconds() / 60)
    return sum(durations) / len(durations) if durations else 0.0


def needs_referral_cta(history: List[Dict[str, Any]], current: Optional[CurrentPool], active_referrals: int) -> bool:
    if any(p.get("status") in FAILED_STATUSES for p in history):
        return True
    if current is None:
        return False
    requirement = current.direct_referral_requirement or 0
    return current.progress_percentage > 50 and active_referrals < requirement


class PoolService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_history(self, user_id: str) -> List[Dict[str, Any]]:
        result = self.supabase.table("pool_progress")\
            .select("*")\
            .eq("user_id", user_id)\
            .order("created_at", desc=True)\
            .execute()
        return result.data or []

    def get_overview(self, profile: Dict[str, Any], now: Optional[datetime] = None) -> PoolOverview:
        """History, the active pool countdown and summary stats for the pools page"""
        now = now or utcnow()
        try:
            history = self.get_history(profile["id"])
        except Exception as e:
            logger.error(f"Failed to load pool history for {profile['id']}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load pool history: {str(e)}")

        active = next((p for p in history if p.get("status") == "active"), None)
        current = build_current_pool(active, now) if active else None
        completed = [p for p in history if p.get("status") == "completed"]

        stats = PoolStats(
            total_pools_completed=len(completed),
            total_rewards_earned=sum_field(completed, "reward_paid"),
            current_pool=profile.get("current_pool") or 0,
            pools_failed=len([p for p in history if p.get("status") in FAILED_STATUSES]),
            average_completion_time=average_completion_minutes(completed),
        )
        return PoolOverview(
            history=[PoolProgress(**p) for p in history],
            current_pool=current,
            stats=stats,
            show_referral_cta=needs_referral_cta(
                history, current, profile.get("active_direct_referrals") or 0
            ),
        )

    def get_requirements(self) -> List[PoolRequirement]:
        return [PoolRequirement(**tier) for tier in POOL_REQUIREMENTS]

    def check_progression(self, user_id: str) -> PoolActionResult:
        """Ask the database to complete or expire the caller's active pool"""
        try:
            result = self.supabase.rpc("check_pool_progression", {"user_id_param": user_id}).execute()
        except Exception as e:
            logger.error(f"check_pool_progression failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        data = result.data or {}
        if not data.get("success"):
            raise HTTPException(status_code=400, detail=data.get("message") or data.get("error") or "Pool progression check failed")

        if data.get("pool_completed"):
            if data.get("cycle_completed"):
                message = "Pool 4 completed. Your cycle is complete and the account is now inactive."
            else:
                message = f"Pool {data['pool_completed']} completed! You earned your reward!"
            logger.info(f"User {user_id} completed pool {data['pool_completed']}")
        elif data.get("pool_expired"):
            message = f"Pool {data['pool_expired']} expired: {data.get('reason') or 'time limit reached'}"
            logger.info(f"Pool {data['pool_expired']} expired for user {user_id}")
        else:
            message = "No pool changes"
        return PoolActionResult(success=True, message=message, data=data)

    def reset_expired(self, user_id: str) -> PoolActionResult:
        try:
            result = self.supabase.rpc("reset_expired_pool", {"user_id_param": user_id}).execute()
        except Exception as e:
            logger.error(f"reset_expired_pool failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        data = result.data or {}
        if not data.get("success"):
            raise HTTPException(status_code=400, detail=data.get("message") or "Failed to reset pool")
        logger.info(f"Reset expired pool for user {user_id}")
        return PoolActionResult(
            success=True,
            message=(
                f"Pool reset with a new timer! You have until {data.get('new_timer_end')} "
                f"to get {data.get('required_referrals')} active referrals."
            ),
            data=data,
        )
