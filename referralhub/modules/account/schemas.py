from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime


class ActivationResponse(BaseModel):
    success: bool
    message: str
    activation_fee: float
    income_distributed: Optional[Any] = None


class RecycleHistoryItem(BaseModel):
    id: str
    cycle_number: int
    amount: float
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class RecycleStats(BaseModel):
    total_cycles: int
    total_earned: float
    current_cycle: int
    last_reactivation: Optional[datetime] = None
    can_reactivate: bool


class RecycleOverview(BaseModel):
    account_status: Optional[str] = None
    cycle_completed_at: Optional[datetime] = None
    stats: RecycleStats
    history: List[RecycleHistoryItem]


class ReactivationResponse(BaseModel):
    success: bool
    message: str
    recycle_bonus: float = 0
