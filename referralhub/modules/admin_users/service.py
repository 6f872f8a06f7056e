from supabase import Client
from referralhub.core.audit import log_admin_activity
from referralhub.core.reporting import to_csv
from referralhub.core.utils import day_key, is_same_day, paginate, parse_timestamp, utcnow
from referralhub.modules.admin_users.models import CSV_HEADERS, SORT_FIELDS, USER_COLUMNS
from referralhub.modules.admin_users.schemas import (
    AdminUser, AdminUserDetail, AdminUserUpdate, BalanceAdjustment, BalanceAdjustmentResult,
    UserFilters, UserPage, UserStats
)
from fastapi import HTTPException
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def compute_user_stats(users: List[AdminUser], now: datetime) -> UserStats:
    return UserStats(
        total_users=len(users),
        active_users=len([u for u in users if u.account_status == "active"]),
        inactive_users=len([u for u in users if u.account_status == "inactive"]),
        pending_users=len([u for u in users if u.account_status == "pending"]),
        total_main_balance=sum(u.main_wallet_balance for u in users),
        total_fund_balance=sum(u.fund_wallet_balance for u in users),
        today_registrations=len([u for u in users if is_same_day(u.created_at, now)]),
        today_activations=len([u for u in users if is_same_day(u.activation_date, now)]),
    )


def _sort_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, datetime):
        return parse_timestamp(value)
    return value


def filter_and_sort(users: List[AdminUser], filters: UserFilters) -> List[AdminUser]:
    """Search, status/rank filters, then sort with missing values last"""
    if filters.sort_field not in SORT_FIELDS:
        raise HTTPException(status_code=400, detail=f"Invalid sort field: {filters.sort_field}")

    filtered = users
    if filters.search:
        needle = filters.search.lower()
        filtered = [
            u for u in filtered
            if needle in (u.username or "").lower()
            or needle in (u.email or "").lower()
            or needle in (u.referral_code or "").lower()
        ]
    if filters.status and filters.status != "all":
        filtered = [u for u in filtered if u.account_status == filters.status]
    if filters.rank and filters.rank != "all":
        filtered = [u for u in filtered if u.rank == filters.rank]

    present = [u for u in filtered if getattr(u, filters.sort_field) is not None]
    missing = [u for u in filtered if getattr(u, filters.sort_field) is None]
    present.sort(
        key=lambda u: _sort_value(getattr(u, filters.sort_field)),
        reverse=filters.sort_direction == "desc",
    )
    return present + missing


class AdminUserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def load_all_users(self) -> List[AdminUser]:
        try:
            result = self.supabase.table("profiles")\
                .select(USER_COLUMNS)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading profiles: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load users: {str(e)}")
        return [AdminUser(**row) for row in result.data or []]

    def list_users(self, filters: UserFilters, now: Optional[datetime] = None) -> UserPage:
        """One page of the filtered list; stats always cover every user"""
        now = now or utcnow()
        users = self.load_all_users()
        filtered = filter_and_sort(users, filters)
        page_items, total_pages = paginate(filtered, filters.page, filters.page_size)
        return UserPage(
            users=page_items,
            total=len(filtered),
            page=filters.page,
            total_pages=total_pages,
            stats=compute_user_stats(users, now),
        )

    def export_csv(self, filters: UserFilters) -> str:
        users = filter_and_sort(self.load_all_users(), filters)
        rows = [
            [
                u.username,
                u.email,
                u.rank,
                u.account_status,
                f"{u.main_wallet_balance:.2f}",
                f"{u.fund_wallet_balance:.2f}",
                u.total_direct_referrals,
                day_key(u.created_at) if u.created_at else "",
            ]
            for u in users
        ]
        return to_csv(CSV_HEADERS, rows)

    def get_user(self, user_id: str) -> AdminUserDetail:
        result = self.supabase.table("profiles")\
            .select(USER_COLUMNS)\
            .eq("id", user_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="User not found")
        row = result.data[0]

        sponsor_name = None
        if row.get("referred_by"):
            sponsor = self.supabase.table("profiles")\
                .select("username")\
                .eq("referral_code", row["referred_by"])\
                .execute()
            if sponsor.data:
                sponsor_name = sponsor.data[0].get("username")
        return AdminUserDetail(**row, referred_by_username=sponsor_name)

    def update_user(self, user_id: str, update: AdminUserUpdate, admin_id: str) -> AdminUser:
        update_data = update.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")

        log_admin_activity(self.supabase, admin_id, "UPDATE_USER_PROFILE", "user", user_id, update_data)
        logger.info(f"Admin {admin_id} updated user {user_id}: {sorted(update_data)}")
        return AdminUser(**result.data[0])

    def adjust_balance(self, user_id: str, adjustment: BalanceAdjustment, admin_id: str) -> BalanceAdjustmentResult:
        """Credit or debit a user's main or fund wallet"""
        try:
            result = self.supabase.rpc("admin_update_user_balance", {
                "admin_id_param": admin_id,
                "user_id_param": user_id,
                "wallet_type_param": adjustment.wallet_type,
                "amount_param": adjustment.amount,
                "reason_param": adjustment.reason,
            }).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to adjust balance: {str(e)}")

        data = result.data or {}
        if data.get("success") is False:
            raise HTTPException(status_code=400, detail=data.get("message") or data.get("error") or "Failed to adjust balance")
        new_balance = float(data.get("new_balance") or 0)

        log_admin_activity(self.supabase, admin_id, "ADJUST_USER_BALANCE", "user", user_id, {
            "wallet_type": adjustment.wallet_type,
            "amount": adjustment.amount,
            "reason": adjustment.reason,
            "new_balance": new_balance,
        })
        logger.info(f"Admin {admin_id} adjusted {adjustment.wallet_type} wallet of {user_id} by {adjustment.amount}")
        return BalanceAdjustmentResult(
            user_id=user_id,
            wallet_type=adjustment.wallet_type,
            new_balance=new_balance,
            message=f"Balance adjusted successfully! New balance: ${new_balance:.2f}",
        )
