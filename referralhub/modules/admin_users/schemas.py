from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime


class AdminUser(BaseModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    rank: Optional[str] = None
    account_status: Optional[str] = None
    main_wallet_balance: float = 0
    fund_wallet_balance: float = 0
    total_direct_referrals: int = 0
    active_direct_referrals: int = 0
    current_pool: Optional[int] = None
    referral_code: Optional[str] = None
    referred_by: Optional[str] = None
    created_at: Optional[datetime] = None
    activation_date: Optional[datetime] = None
    cycle_completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminUserDetail(AdminUser):
    referred_by_username: Optional[str] = None


class UserStats(BaseModel):
    total_users: int = 0
    active_users: int = 0
    inactive_users: int = 0
    pending_users: int = 0
    total_main_balance: float = 0
    total_fund_balance: float = 0
    today_registrations: int = 0
    today_activations: int = 0


class UserFilters(BaseModel):
    search: Optional[str] = None
    status: Optional[str] = None
    rank: Optional[str] = None
    sort_field: str = "created_at"
    sort_direction: Literal["asc", "desc"] = "desc"
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=200)


class UserPage(BaseModel):
    users: List[AdminUser]
    total: int
    page: int
    total_pages: int
    stats: UserStats


class AdminUserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    rank: Optional[str] = None
    account_status: Optional[Literal["active", "inactive", "pending"]] = None


class BalanceAdjustment(BaseModel):
    wallet_type: Literal["main", "fund"]
    amount: float
    reason: str

    @field_validator("amount")
    @classmethod
    def non_zero(cls, value: float) -> float:
        if value == 0:
            raise ValueError("Amount must be non-zero")
        return value

    @field_validator("reason")
    @classmethod
    def reason_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Reason is required")
        return value.strip()


class BalanceAdjustmentResult(BaseModel):
    user_id: str
    wallet_type: str
    new_balance: float
    message: str
