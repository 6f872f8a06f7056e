from supabase import Client
from referralhub.config import settings
from referralhub.core.utils import format_amount
from referralhub.modules.p2p.schemas import (
    FundBalance, TransferHistoryItem, TransferRequest, TransferResponse, UserSearchResult
)
from fastapi import HTTPException
from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)


class P2PService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_balance(self, profile: Dict[str, Any]) -> FundBalance:
        return FundBalance(fund_wallet_balance=float(profile.get("fund_wallet_balance") or 0))

    def get_history(self, user_id: str, limit: int = 50) -> List[TransferHistoryItem]:
        try:
            result = self.supabase.rpc("get_user_transfer_history", {
                "user_id_param": user_id,
                "limit_param": limit,
            }).execute()
            return [TransferHistoryItem(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Failed to load transfer history for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load P2P data: {str(e)}")

    def search_users(self, user_id: str, term: str, search_type: str) -> List[UserSearchResult]:
        """Find transfer recipients; the RPC excludes the caller"""
        term = (term or "").strip()
        if not term:
            raise HTTPException(status_code=400, detail="Search term is required")
        try:
            result = self.supabase.rpc("search_users_for_p2p", {
                "search_term": term,
                "search_type": search_type,
                "current_user_id": user_id,
            }).execute()
            return [UserSearchResult(**row) for row in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Search failed: {str(e)}")

    def transfer(self, profile: Dict[str, Any], request: TransferRequest) -> TransferResponse:
        """Validate and submit a fund wallet transfer to another user"""
        amount = request.amount
        balance = float(profile.get("fund_wallet_balance") or 0)
        if amount <= 0:
            raise HTTPException(status_code=400, detail="Please enter a valid amount")
        if amount < settings.p2p_min_transfer_amount:
            raise HTTPException(
                status_code=400,
                detail=f"Minimum transfer amount is ${format_amount(settings.p2p_min_transfer_amount)}"
            )
        if amount > balance:
            raise HTTPException(status_code=400, detail="Insufficient balance in your fund wallet")
        if request.receiver_id == profile["id"]:
            raise HTTPException(status_code=400, detail="You cannot transfer to yourself")

        try:
            receiver = self.supabase.table("profiles")\
                .select("id, username, email, referral_code")\
                .eq("id", request.receiver_id)\
                .execute()
            if not receiver.data:
                raise HTTPException(status_code=404, detail="Recipient not found")
            receiver_row = receiver.data[0]

            result = self.supabase.rpc("process_p2p_transfer", {
                "sender_id_param": profile["id"],
                "receiver_id_param": receiver_row["id"],
                "amount_param": amount,
                "transfer_type_param": request.search_type,
                "receiver_identifier_param": receiver_row.get(request.search_type),
                "description_param": request.description or f"P2P transfer to {receiver_row.get('username')}",
            }).execute()
            data = result.data or {}
            if not data.get("success"):
                raise HTTPException(status_code=400, detail=data.get("message") or "Transfer failed")

            logger.info(f"P2P transfer {data.get('transfer_id')}: {profile['id']} -> {receiver_row['id']} ${amount:.2f}")
            return TransferResponse(
                success=True,
                transfer_id=data.get("transfer_id"),
                amount=amount,
                receiver_username=receiver_row.get("username"),
                message=f"Successfully sent ${amount:.2f} to {receiver_row.get('username')}",
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"P2P transfer from {profile['id']} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Transfer failed: {str(e)}")
