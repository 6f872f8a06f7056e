from supabase import Client
from referralhub.config import settings
from referralhub.core.utils import format_amount, sum_field
from referralhub.modules.account.models import RECYCLE_BONUS_TYPE
from referralhub.modules.account.schemas import (
    ActivationResponse, ReactivationResponse, RecycleHistoryItem, RecycleOverview, RecycleStats
)
from fastapi import HTTPException
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _call(self, function: str, user_id: str, failure: str) -> Dict[str, Any]:
        try:
            result = self.supabase.rpc(function, {"user_id_param": user_id}).execute()
        except Exception as e:
            logger.error(f"{function} failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"{failure}: {str(e)}")
        data = result.data or {}
        if not data.get("success"):
            raise HTTPException(status_code=400, detail=data.get("message") or f"{failure}. Please try again.")
        return data

    def activate(self, profile: Dict[str, Any]) -> ActivationResponse:
        """Pay the activation fee from the fund wallet and distribute it upline"""
        if profile.get("account_status") == "active":
            raise HTTPException(status_code=400, detail="Account is already active")
        fee = settings.activation_fee
        if float(profile.get("fund_wallet_balance") or 0) < fee:
            raise HTTPException(
                status_code=400,
                detail=f"Insufficient fund wallet balance. You need ${format_amount(fee)} to activate your account."
            )
        data = self._call("process_account_activation", profile["id"], "Activation failed")
        logger.info(f"Account {profile['id']} activated")
        return ActivationResponse(
            success=True,
            message="Your account has been successfully activated!",
            activation_fee=fee,
            income_distributed=data.get("income_distributed"),
        )

    def get_recycle(self, profile: Dict[str, Any]) -> RecycleOverview:
        try:
            result = self.supabase.table("referral_bonuses")\
                .select("*")\
                .eq("user_id", profile["id"])\
                .eq("bonus_type", RECYCLE_BONUS_TYPE)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to load recycle data: {str(e)}")
        rows = result.data or []
        total = len(rows)
        history = [
            RecycleHistoryItem(
                id=row["id"],
                cycle_number=total - index,
                amount=float(row.get("amount") or 0),
                description=row.get("description"),
                created_at=row.get("created_at"),
            )
            for index, row in enumerate(rows)
        ]
        return RecycleOverview(
            account_status=profile.get("account_status"),
            cycle_completed_at=profile.get("cycle_completed_at"),
            stats=RecycleStats(
                total_cycles=total,
                total_earned=sum_field(rows, "amount"),
                current_cycle=total + 1,
                last_reactivation=rows[0].get("created_at") if rows else None,
                can_reactivate=profile.get("account_status") == "inactive" and bool(profile.get("cycle_completed_at")),
            ),
            history=history,
        )

    def reactivate(self, profile: Dict[str, Any]) -> ReactivationResponse:
        """Start a new cycle once the previous one is complete"""
        if profile.get("account_status") != "inactive":
            raise HTTPException(status_code=400, detail="Account must be inactive to reactivate")
        if not profile.get("cycle_completed_at"):
            raise HTTPException(status_code=400, detail="Must complete a full cycle before reactivating")
        data = self._call("process_account_reactivation", profile["id"], "Failed to reactivate account")
        bonus = float(data.get("recycle_bonus") or 0)
        message = "Account reactivated successfully!"
        if bonus > 0:
            message += f" You earned ${format_amount(bonus)} recycle income!"
        logger.info(f"Account {profile['id']} reactivated (recycle bonus {bonus})")
        return ReactivationResponse(success=True, message=message, recycle_bonus=bonus)
