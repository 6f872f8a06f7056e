from supabase import Client
from referralhub.config import settings
from referralhub.core.bscscan import BscScanClient, from_wei
from referralhub.core.utils import fetch_single, format_amount, utcnow
from referralhub.modules.deposits.models import HISTORY_LIMIT
from referralhub.modules.deposits.schemas import (
    ChainDeposit, Deposit, DepositOverview, ProcessDepositRequest, ProcessDepositResponse
)
from referralhub.modules.wallets.service import explorer_tx_url
from fastapi import HTTPException
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def to_chain_deposit(tx: Dict[str, Any], processed_hashes: set) -> ChainDeposit:
    amount = float(from_wei(tx.get("value") or 0, 6))
    confirmations = int(tx.get("confirmations") or 0)
    status = "confirmed" if confirmations >= settings.deposit_confirmations else "pending"
    is_processed = tx["hash"].lower() in processed_hashes
    timestamp = int(tx.get("timeStamp") or 0)
    return ChainDeposit(
        hash=tx["hash"],
        amount=amount,
        block_number=int(tx.get("blockNumber") or 0),
        confirmations=confirmations,
        status=status,
        is_processed=is_processed,
        can_process=not is_processed and status == "confirmed" and amount >= settings.deposit_min_amount,
        timestamp=datetime.fromtimestamp(timestamp, tz=timezone.utc) if timestamp else None,
        explorer_url=explorer_tx_url(tx["hash"]),
    )


class DepositService:
    def __init__(self, supabase: Client, bscscan: Optional[BscScanClient] = None):
        self.supabase = supabase
        self.bscscan = bscscan or BscScanClient()

    def _wallet_address(self, user_id: str) -> Optional[str]:
        row = fetch_single(
            self.supabase.table("user_wallets")
            .select("wallet_address")
            .eq("user_id", user_id)
        )
        return row["wallet_address"] if row else None

    def _processed_hashes(self, user_id: str) -> set:
        result = self.supabase.table("deposits")\
            .select("transaction_hash")\
            .eq("user_id", user_id)\
            .execute()
        return {(row.get("transaction_hash") or "").lower() for row in result.data or []}

    def get_overview(self, profile: Dict[str, Any]) -> DepositOverview:
        """Recorded deposits plus incoming on-chain transfers and whether each can be credited"""
        user_id = profile["id"]
        try:
            address = self._wallet_address(user_id)
            deposits = self.supabase.table("deposits")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(HISTORY_LIMIT)\
                .execute()
            processed = self._processed_hashes(user_id)
        except Exception as e:
            logger.error(f"Error loading deposits for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load deposits: {str(e)}")

        chain: List[ChainDeposit] = []
        if address:
            chain = [to_chain_deposit(tx, processed) for tx in self.bscscan.get_usdt_transfers(address)]
        return DepositOverview(
            wallet_address=address,
            fund_wallet_balance=float(profile.get("fund_wallet_balance") or 0),
            required_confirmations=settings.deposit_confirmations,
            min_amount=settings.deposit_min_amount,
            deposits=[Deposit(**row) for row in deposits.data or []],
            chain_transactions=chain,
        )

    def process_deposit(self, profile: Dict[str, Any], request: ProcessDepositRequest) -> ProcessDepositResponse:
        """Record a confirmed incoming transfer and credit it to the fund wallet"""
        user_id = profile["id"]
        tx_hash = request.transaction_hash.strip()
        try:
            address = self._wallet_address(user_id)
            if not address:
                raise HTTPException(status_code=404, detail="Wallet not found")
            if tx_hash.lower() in self._processed_hashes(user_id):
                raise HTTPException(status_code=409, detail="This deposit has already been processed")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to process transaction: {str(e)}")

        match = next(
            (tx for tx in self.bscscan.get_usdt_transfers(address) if tx["hash"].lower() == tx_hash.lower()),
            None,
        )
        if match is None:
            raise HTTPException(status_code=404, detail="Transaction not found for your deposit address")
        tx = to_chain_deposit(match, set())
        if tx.status != "confirmed":
            raise HTTPException(
                status_code=400,
                detail=f"Transaction has {tx.confirmations} confirmations. "
                       f"Waiting for {settings.deposit_confirmations} confirmations."
            )
        if tx.amount < settings.deposit_min_amount:
            raise HTTPException(
                status_code=400,
                detail=f"Minimum deposit amount is {format_amount(settings.deposit_min_amount)} USDT"
            )

        balance_before = profile.get("fund_wallet_balance")
        balance_after = float(balance_before or 0) + tx.amount
        try:
            inserted = self.supabase.table("deposits").insert({
                "user_id": user_id,
                "wallet_address": address,
                "amount": tx.amount,
                "status": "confirmed",
                "transaction_hash": tx.hash,
                "confirmations": tx.confirmations,
                "block_number": tx.block_number,
                "confirmed_at": utcnow().isoformat(),
            }).execute()
            deposit = inserted.data[0]

            # compare-and-set against the balance the credit was computed from
            credited = self.supabase.table("profiles")\
                .update({"fund_wallet_balance": balance_after})\
                .eq("id", user_id)\
                .eq("fund_wallet_balance", balance_before)\
                .execute()
            if not credited.data:
                self.supabase.table("deposits").delete().eq("id", deposit["id"]).execute()
                raise HTTPException(status_code=409, detail="Balance changed, reload and try again")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Deposit {tx_hash} for {user_id} failed: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to process transaction: {str(e)}")

        try:
            self.supabase.table("fund_wallet_transactions").insert({
                "user_id": user_id,
                "transaction_type": "deposit",
                "amount": tx.amount,
                "balance_before": float(balance_before or 0),
                "balance_after": balance_after,
                "reference_id": deposit["id"],
                "description": f"BEP20 USDT Deposit - TX: {tx.hash} (Block: {tx.block_number})",
            }).execute()
        except Exception as e:
            logger.warning(f"Ledger row for deposit {deposit['id']} not written: {e}")

        logger.info(f"Deposit {tx.hash} credited to {user_id}: {tx.amount} USDT")
        return ProcessDepositResponse(
            success=True,
            message=f"Successfully processed {format_amount(tx.amount)} USDT deposit! Your fund wallet has been updated.",
            deposit=Deposit(**deposit),
            fund_wallet_balance=balance_after,
        )
