from supabase import Client
from referralhub.config import settings
from referralhub.core.utils import format_amount
from referralhub.modules.withdrawals.models import BALANCE_FIELDS, HISTORY_LIMIT
from referralhub.modules.withdrawals.schemas import (
    FeeQuote, Withdrawal, WithdrawalAddress, WithdrawalOverview, WithdrawalRequest, WithdrawalResponse
)
from fastapi import HTTPException
from typing import Any, Dict
import hmac
import logging

logger = logging.getLogger(__name__)


def quote_fees(amount: float, source_wallet: str) -> FeeQuote:
    """Fees for a payout of amount from source_wallet.

    Main wallet payouts pay the withdrawal fee. Fund wallet payouts first pay the
    transfer fee to move into the main wallet, then the withdrawal fee on what is left.
    """
    if amount <= 0:
        return FeeQuote(amount=amount, source_wallet=source_wallet, withdrawal_fee=0,
                        transfer_fee=0, total_fees=0, net_amount=0)
    transfer_fee = amount * settings.fund_transfer_fee_rate if source_wallet == "fund" else 0.0
    withdrawal_fee = (amount - transfer_fee) * settings.withdrawal_fee_rate
    total_fees = withdrawal_fee + transfer_fee
    return FeeQuote(
        amount=amount,
        source_wallet=source_wallet,
        withdrawal_fee=withdrawal_fee,
        transfer_fee=transfer_fee,
        total_fees=total_fees,
        net_amount=max(0.0, amount - total_fees),
    )


class WithdrawalService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_overview(self, profile: Dict[str, Any]) -> WithdrawalOverview:
        """Balances, verified payout addresses and the latest requests"""
        user_id = profile["id"]
        try:
            addresses = self.supabase.table("withdrawal_addresses")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("is_verified", True)\
                .order("created_at", desc=True)\
                .execute()
            history = self.supabase.table("withdrawals")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(HISTORY_LIMIT)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading withdrawal data for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load withdrawal data: {str(e)}")
        return WithdrawalOverview(
            main_wallet_balance=float(profile.get("main_wallet_balance") or 0),
            fund_wallet_balance=float(profile.get("fund_wallet_balance") or 0),
            has_transaction_pin=bool(profile.get("transaction_pin")),
            min_amount=settings.withdrawal_min_amount,
            addresses=[WithdrawalAddress(**row) for row in addresses.data or []],
            history=[Withdrawal(**row) for row in history.data or []],
        )

    def _verify_pin(self, profile: Dict[str, Any], pin: str):
        if len(pin) != 4 or not pin.isdigit():
            raise HTTPException(status_code=400, detail="Transaction PIN must be 4 digits")
        stored = profile.get("transaction_pin")
        if not stored:
            raise HTTPException(
                status_code=400,
                detail="Transaction PIN not set. Please set it in Settings first."
            )
        if not hmac.compare_digest(str(stored), pin):
            raise HTTPException(status_code=400, detail="Invalid transaction PIN")

    def _get_address(self, user_id: str, address_id: str) -> Dict[str, Any]:
        result = self.supabase.table("withdrawal_addresses")\
            .select("*")\
            .eq("id", address_id)\
            .eq("user_id", user_id)\
            .eq("is_verified", True)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Selected withdrawal address not found")
        return result.data[0]

    def _set_balance(self, user_id: str, field: str, expected: float, new_balance: float) -> bool:
        # compare-and-set: a concurrent debit or credit leaves the row untouched
        result = self.supabase.table("profiles")\
            .update({field: new_balance})\
            .eq("id", user_id)\
            .eq(field, expected)\
            .execute()
        return bool(result.data)

    def request_withdrawal(self, profile: Dict[str, Any], request: WithdrawalRequest) -> WithdrawalResponse:
        user_id = profile["id"]
        self._verify_pin(profile, request.transaction_pin)

        amount = request.amount
        field = BALANCE_FIELDS[request.source_wallet]
        balance = float(profile.get(field) or 0)
        if amount <= 0:
            raise HTTPException(status_code=400, detail="Please enter a valid withdrawal amount")
        if amount > balance:
            raise HTTPException(status_code=400, detail=f"Insufficient balance in {request.source_wallet} wallet")
        if amount < settings.withdrawal_min_amount:
            raise HTTPException(
                status_code=400,
                detail=f"Minimum withdrawal amount is ${format_amount(settings.withdrawal_min_amount)} USDT"
            )

        quote = quote_fees(amount, request.source_wallet)
        new_balance = balance - amount
        try:
            address = self._get_address(user_id, request.address_id)
            if not self._set_balance(user_id, field, profile.get(field), new_balance):
                raise HTTPException(status_code=409, detail="Balance changed, reload and try again")

            try:
                inserted = self.supabase.table("withdrawals").insert({
                    "user_id": user_id,
                    "amount": amount,
                    "fee": quote.total_fees,
                    "net_amount": quote.net_amount,
                    "withdrawal_address": address["address"],
                    "address_label": address.get("label"),
                    "source_wallet": request.source_wallet,
                    "status": "pending",
                    "withdrawal_fee": quote.withdrawal_fee,
                    "transfer_fee": quote.transfer_fee,
                }).execute()
                withdrawal = inserted.data[0]
            except Exception:
                if not self._set_balance(user_id, field, new_balance, balance):
                    logger.error(f"Could not restore {field} for {user_id} after a failed withdrawal insert")
                raise
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Withdrawal request for {user_id} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create withdrawal: {str(e)}")

        try:
            self.supabase.table("fund_wallet_transactions").insert({
                "user_id": user_id,
                "transaction_type": "withdrawal",
                "amount": -amount,
                "balance_before": balance,
                "balance_after": new_balance,
                "reference_id": withdrawal["id"],
                "description": f"Withdrawal to {address.get('label')} ({address['address'][:10]}...)",
            }).execute()
        except Exception as e:
            logger.warning(f"Ledger row for withdrawal {withdrawal['id']} not written: {e}")

        logger.info(f"Withdrawal {withdrawal['id']} requested by {user_id}: ${amount:.2f} from {request.source_wallet}")
        return WithdrawalResponse(
            success=True,
            message=f"Withdrawal request submitted successfully! Reference: {withdrawal['id'][:8]}",
            withdrawal=Withdrawal(**withdrawal),
            quote=quote,
        )
