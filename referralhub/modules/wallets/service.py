from supabase import Client
from referralhub.config import settings
from referralhub.core.bscscan import BscScanClient, BscScanError, from_wei
from referralhub.core.utils import fetch_single
from referralhub.modules.wallets.models import SECRET_COLUMNS
from referralhub.modules.wallets.schemas import (
    ChainTransfer, UserWallet, WalletBalance, WalletCreateResponse, WalletResponse
)
from fastapi import HTTPException
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def explorer_address_url(address: str) -> str:
    return f"{settings.bsc_explorer_url.rstrip('/')}/address/{address}"


def explorer_tx_url(tx_hash: str) -> str:
    return f"{settings.bsc_explorer_url.rstrip('/')}/tx/{tx_hash}"


def to_wallet(row: Dict[str, Any]) -> UserWallet:
    public = {k: v for k, v in row.items() if k not in SECRET_COLUMNS}
    return UserWallet(**public, explorer_url=explorer_address_url(row["wallet_address"]))


class WalletService:
    def __init__(self, supabase: Client, bscscan: Optional[BscScanClient] = None):
        self.supabase = supabase
        self.bscscan = bscscan

    def _chain(self) -> BscScanClient:
        if self.bscscan is None:
            self.bscscan = BscScanClient()
        return self.bscscan

    def get_wallet_row(self, user_id: str) -> Optional[Dict[str, Any]]:
        return fetch_single(
            self.supabase.table("user_wallets")
            .select("*")
            .eq("user_id", user_id)
        )

    def get_wallet(self, user_id: str) -> WalletResponse:
        try:
            row = self.get_wallet_row(user_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to load wallet: {str(e)}")
        return WalletResponse(wallet=to_wallet(row) if row else None)

    def create_wallet(self, user_id: str) -> WalletCreateResponse:
        """Provision (or return the existing) custodial BEP20 wallet"""
        try:
            result = self.supabase.rpc("get_or_create_user_wallet", {"user_id_param": user_id}).execute()
            data = result.data or {}
            if not data.get("success"):
                raise HTTPException(status_code=400, detail=data.get("error") or "Failed to generate wallet")
            row = self.get_wallet_row(user_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to generate wallet: {str(e)}")
        logger.info(f"Wallet ready for user {user_id}")
        return WalletCreateResponse(
            success=True,
            message="New BEP20 wallet generated successfully!",
            wallet=to_wallet(row) if row else None,
        )

    def _require_address(self, user_id: str) -> str:
        row = self.get_wallet_row(user_id)
        if not row:
            raise HTTPException(status_code=404, detail="Wallet not found")
        return row["wallet_address"]

    def get_balance(self, user_id: str) -> WalletBalance:
        address = self._require_address(user_id)
        try:
            chain = self._chain()
            return WalletBalance(
                address=address,
                bnb_balance=chain.get_bnb_balance(address),
                usdt_balance=chain.get_usdt_balance(address),
            )
        except BscScanError as e:
            logger.error(f"Balance lookup failed for {address}: {e}")
            raise HTTPException(status_code=502, detail=str(e))

    def get_incoming_transfers(self, user_id: str) -> List[ChainTransfer]:
        """Incoming USDT transfers to the caller's deposit address"""
        address = self._require_address(user_id)
        transfers = self._chain().get_usdt_transfers(address)
        return [
            ChainTransfer(
                hash=tx["hash"],
                amount=from_wei(tx.get("value") or 0, 2),
                block_number=int(tx.get("blockNumber") or 0),
                timestamp=datetime.fromtimestamp(int(tx.get("timeStamp") or 0), tz=timezone.utc),
                network=settings.bsc_network_name,
                explorer_url=explorer_tx_url(tx["hash"]),
            )
            for tx in transfers
        ]
