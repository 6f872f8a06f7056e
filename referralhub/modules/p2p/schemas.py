from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

SearchType = Literal["username", "referral_code", "email"]


class FundBalance(BaseModel):
    fund_wallet_balance: float


class UserSearchResult(BaseModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    referral_code: Optional[str] = None
    rank: Optional[str] = None
    account_status: Optional[str] = None


class TransferRequest(BaseModel):
    receiver_id: str
    amount: float
    search_type: SearchType = "username"
    description: Optional[str] = None


class TransferResponse(BaseModel):
    success: bool
    transfer_id: Optional[str] = None
    amount: float
    receiver_username: Optional[str] = None
    message: str


class TransferHistoryItem(BaseModel):
    id: str
    sender_id: Optional[str] = None
    receiver_id: Optional[str] = None
    sender_username: Optional[str] = None
    receiver_username: Optional[str] = None
    amount: float = 0
    fee: float = 0
    net_amount: float = 0
    description: Optional[str] = None
    status: Optional[str] = None
    is_sender: bool = False
    created_at: Optional[datetime] = None
