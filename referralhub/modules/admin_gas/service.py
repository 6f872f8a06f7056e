from supabase import Client
from referralhub.config import settings
from referralhub.core.audit import log_admin_activity
from referralhub.core.bscscan import BscScanClient, BscScanError
from referralhub.core.utils import sum_field, utcnow
from referralhub.modules.admin_gas.models import (
    PRIORITY_LABELS, RECENT_OPERATIONS_LIMIT, SWEEP_SCHEDULE_LIMIT
)
from referralhub.modules.admin_gas.schemas import (
    GasOperation, GasOverview, HotWalletStatus, MasterWalletConfig,
    MasterWalletConfigUpdate, SweepSchedule, WalletStats
)
from fastapi import HTTPException
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


def priority_label(priority: Any) -> str:
    return PRIORITY_LABELS.get(priority, "Unknown")


class GasService:
    def __init__(self, supabase: Client, bscscan: Optional[BscScanClient] = None):
        self.supabase = supabase
        self.bscscan = bscscan

    def get_master_config(self) -> Optional[MasterWalletConfig]:
        result = self.supabase.table("master_wallet_config")\
            .select("*")\
            .limit(1)\
            .execute()
        return MasterWalletConfig(**result.data[0]) if result.data else None

    def get_overview(self, days: int = 7) -> GasOverview:
        try:
            operations = self.supabase.table("gas_operations")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(RECENT_OPERATIONS_LIMIT)\
                .execute()
            stats = self.supabase.rpc("get_gas_operation_stats", {"days_param": days}).execute()
            schedules = self.supabase.table("sweep_schedules")\
                .select("*")\
                .order("priority")\
                .order("usdt_balance", desc=True)\
                .limit(SWEEP_SCHEDULE_LIMIT)\
                .execute()
            config = self.get_master_config()
        except Exception as e:
            logger.error(f"Error loading gas management data: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load gas management data: {str(e)}")

        return GasOverview(
            operations=[GasOperation(**row) for row in operations.data or []],
            stats=stats.data or None,
            config=config,
            sweep_schedules=[
                SweepSchedule(**row, priority_label=priority_label(row.get("priority")))
                for row in schedules.data or []
            ],
        )

    def update_config(self, update: MasterWalletConfigUpdate, admin_id: str) -> MasterWalletConfig:
        changes = update.model_dump(exclude_none=True)
        if not changes:
            raise HTTPException(status_code=400, detail="No configuration changes provided")
        try:
            current = self.get_master_config()
            if not current:
                raise HTTPException(status_code=404, detail="Master wallet config not found")
            result = self.supabase.table("master_wallet_config")\
                .update(changes)\
                .eq("id", current.id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to update master wallet config")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update master wallet config: {str(e)}")

        log_admin_activity(self.supabase, admin_id, "UPDATE_MASTER_WALLET_CONFIG", "master_wallet_config", current.id, changes)
        logger.info(f"Admin {admin_id} updated master wallet config: {sorted(changes)}")
        return MasterWalletConfig(**result.data[0])

    def toggle_auto_sweep(self, admin_id: str) -> MasterWalletConfig:
        current = self.get_master_config()
        if not current:
            raise HTTPException(status_code=404, detail="Master wallet config not found")
        return self.update_config(
            MasterWalletConfigUpdate(auto_sweep_enabled=not current.auto_sweep_enabled),
            admin_id,
        )

    def get_sweep_statistics(self) -> Dict[str, Any]:
        try:
            result = self.supabase.rpc("get_sweep_statistics", {}).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to get sweep statistics: {str(e)}")
        return result.data or {}

    def get_hot_wallet_status(self, now: Optional[datetime] = None) -> HotWalletStatus:
        """Live hot wallet balances. Raises BscScanError when they cannot be read."""
        now = now or utcnow()
        address = settings.hot_wallet_address
        if not address:
            raise BscScanError("Hot wallet address is not configured")
        return HotWalletStatus(
            address=address,
            bnb_balance=self.bscscan.get_bnb_balance(address),
            usdt_balance=self.bscscan.get_usdt_balance(address),
            is_connected=True,
            last_update=now,
        )

    def get_wallet_stats(self, now: Optional[datetime] = None) -> WalletStats:
        now = now or utcnow()
        try:
            wallets = self.supabase.table("user_wallets")\
                .select("id", count="exact")\
                .execute()
            swept = self.supabase.table("deposits")\
                .select("amount")\
                .eq("status", "swept")\
                .execute()
            pending = self.supabase.table("withdrawals")\
                .select("amount")\
                .eq("status", "pending")\
                .execute()
            recent = self.supabase.table("deposits")\
                .select("amount, created_at")\
                .eq("status", "swept")\
                .gte("created_at", (now - timedelta(hours=24)).isoformat())\
                .execute()
        except Exception as e:
            logger.error(f"Failed to fetch wallet statistics: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to fetch statistics: {str(e)}")

        total_wallets = wallets.count if wallets.count is not None else len(wallets.data or [])
        return WalletStats(
            total_wallets=total_wallets,
            total_deposits=len(swept.data or []),
            total_deposit_amount=sum_field(swept.data or [], "amount"),
            pending_withdrawals=len(pending.data or []),
            pending_withdrawal_amount=sum_field(pending.data or [], "amount"),
            recent_deposits=len(recent.data or []),
            recent_deposit_amount=sum_field(recent.data or [], "amount"),
            last_update=now,
        )
