from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

WithdrawalStatus = Literal["pending", "processing", "completed", "failed", "cancelled"]


class AdminWithdrawal(BaseModel):
    id: str
    user_id: str
    amount: float = 0
    fee: float = 0
    net_amount: Optional[float] = None
    withdrawal_address: Optional[str] = None
    address_label: Optional[str] = None
    status: str
    transaction_hash: Optional[str] = None
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    username: Optional[str] = None
    email: Optional[str] = None
    rank: Optional[str] = None

    class Config:
        from_attributes = True


class WithdrawalStats(BaseModel):
    total_pending: int = 0
    total_processing: int = 0
    total_completed: int = 0
    total_failed: int = 0
    total_amount_pending: float = 0
    total_amount_completed: float = 0
    total_fees_collected: float = 0
    avg_processing_time: float = 0  # hours


class WithdrawalList(BaseModel):
    withdrawals: List[AdminWithdrawal]
    stats: WithdrawalStats


class WithdrawalStatusUpdate(BaseModel):
    status: WithdrawalStatus
    admin_notes: Optional[str] = None
    transaction_hash: Optional[str] = None
