from supabase import Client
from referralhub.core.utils import parse_timestamp, sum_field, utcnow
from referralhub.modules.global_turnover.models import (
    HISTORY_LIMIT, PERCENTAGE_PATTERN, TURNOVER_BONUS_TYPE, TURNOVER_LEVELS, TURNOVER_PATTERN
)
from referralhub.modules.global_turnover.schemas import (
    GlobalTurnoverStatus, TurnoverHistoryItem, TurnoverLevelProgress
)
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def parse_turnover_description(description: Optional[str]) -> tuple:
    """(percentage, company turnover) from a payout description; zeros when absent"""
    text = description or ""
    percentage = PERCENTAGE_PATTERN.search(text)
    turnover = TURNOVER_PATTERN.search(text)
    return (
        int(percentage.group(1)) if percentage else 0,
        float(turnover.group(1).replace(",", "")) if turnover else 0.0,
    )


def whole_days_between(start: Optional[datetime], end: datetime) -> int:
    if start is None:
        return 0
    return max(0, int((end - start).total_seconds() // SECONDS_PER_DAY))


def level_progress(active_referrals: int, days_since_join: int) -> List[TurnoverLevelProgress]:
    return [
        TurnoverLevelProgress(
            level=level,
            required_referrals=required,
            time_limit_days=days,
            percentage=percentage,
            referral_progress=min(100.0, active_referrals / required * 100),
            time_progress=min(100.0, days_since_join / days * 100),
            days_left_to_qualify=max(0, days - days_since_join),
        )
        for level, required, days, percentage in TURNOVER_LEVELS
    ]


class GlobalTurnoverService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _earnings(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = self.supabase.table("referral_bonuses")\
            .select("id, amount, description, created_at")\
            .eq("user_id", user_id)\
            .eq("bonus_type", TURNOVER_BONUS_TYPE)\
            .order("created_at", desc=True)
        if limit:
            query = query.limit(limit)
        return query.execute().data or []

    def get_status(self, profile: Dict[str, Any], now: Optional[datetime] = None) -> GlobalTurnoverStatus:
        now = now or utcnow()
        user_id = profile["id"]
        try:
            check = self.supabase.rpc("check_global_turnover_eligibility", {"user_id_param": user_id}).execute()
            window = self.supabase.table("global_turnover_eligibility")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("status", "active")\
                .order("created_at", desc=True)\
                .limit(1)\
                .execute()
            earnings = self._earnings(user_id)
        except Exception as e:
            logger.error(f"Error checking global turnover for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load global turnover data: {str(e)}")

        data = check.data or {}
        eligible = bool(data.get("success"))
        message = data.get("message") or ""
        if eligible:
            status = "active"
        elif "paused" in message.lower():
            status = "paused"
        else:
            status = "not_eligible"

        current = window.data[0] if window.data else {}
        end_date = parse_timestamp(current.get("end_date"))
        total = sum_field(earnings, "amount")
        active_referrals = int(profile.get("active_direct_referrals") or 0)
        days_since_join = whole_days_between(parse_timestamp(profile.get("created_at")), now)
        return GlobalTurnoverStatus(
            eligible=eligible,
            status=status,
            level=data.get("level"),
            percentage=data.get("percentage"),
            message=message or None,
            start_date=current.get("start_date"),
            end_date=end_date,
            days_remaining=whole_days_between(now, end_date) if end_date else 0,
            total_earned=total,
            daily_average=total / len(earnings) if earnings else 0,
            active_direct_referrals=active_referrals,
            days_from_registration=days_since_join,
            levels=level_progress(active_referrals, days_since_join),
        )

    def get_history(self, user_id: str) -> List[TurnoverHistoryItem]:
        try:
            rows = self._earnings(user_id, HISTORY_LIMIT)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to load turnover history: {str(e)}")
        history = []
        for row in rows:
            percentage, turnover = parse_turnover_description(row.get("description"))
            history.append(TurnoverHistoryItem(
                id=row["id"],
                amount=float(row.get("amount") or 0),
                percentage=percentage,
                company_turnover=turnover,
                description=row.get("description"),
                date=row.get("created_at"),
            ))
        return history
