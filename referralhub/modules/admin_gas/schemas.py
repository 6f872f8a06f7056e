from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime


class GasOperation(BaseModel):
    id: str
    operation_type: Optional[str] = None
    wallet_address: Optional[str] = None
    bnb_amount: float = 0
    gas_used: float = 0
    cost_usd: float = 0
    status: str
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MasterWalletConfig(BaseModel):
    id: str
    wallet_address: Optional[str] = None
    min_bnb_reserve: float = 0
    gas_distribution_amount: float = 0
    sweep_threshold_high: float = 0
    sweep_threshold_medium: float = 0
    sweep_threshold_low: float = 0
    auto_sweep_enabled: bool = False
    max_daily_operations: int = 0

    class Config:
        from_attributes = True


class MasterWalletConfigUpdate(BaseModel):
    wallet_address: Optional[str] = None
    min_bnb_reserve: Optional[float] = None
    gas_distribution_amount: Optional[float] = None
    sweep_threshold_high: Optional[float] = None
    sweep_threshold_medium: Optional[float] = None
    sweep_threshold_low: Optional[float] = None
    auto_sweep_enabled: Optional[bool] = None
    max_daily_operations: Optional[int] = None


class SweepSchedule(BaseModel):
    id: str
    user_id: Optional[str] = None
    wallet_address: Optional[str] = None
    usdt_balance: float = 0
    bnb_balance: float = 0
    priority: Optional[int] = None
    priority_label: str = "Unknown"
    next_sweep_at: Optional[datetime] = None
    status: Optional[str] = None


class GasOverview(BaseModel):
    operations: List[GasOperation]
    stats: Optional[Dict[str, Any]] = None
    config: Optional[MasterWalletConfig] = None
    sweep_schedules: List[SweepSchedule]


class HotWalletStatus(BaseModel):
    address: str
    bnb_balance: str = "0"
    usdt_balance: str = "0"
    is_connected: bool = False
    last_update: datetime


class HotWalletStatusResponse(BaseModel):
    success: bool
    data: HotWalletStatus
    error: Optional[str] = None


class WalletStats(BaseModel):
    total_wallets: int = 0
    total_deposits: int = 0
    total_deposit_amount: float = 0
    pending_withdrawals: int = 0
    pending_withdrawal_amount: float = 0
    recent_deposits: int = 0
    recent_deposit_amount: float = 0
    last_update: datetime
