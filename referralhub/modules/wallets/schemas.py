from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class UserWallet(BaseModel):
    id: str
    user_id: str
    wallet_address: str
    network: Optional[str] = None
    is_monitored: Optional[bool] = None
    created_at: Optional[datetime] = None
    explorer_url: Optional[str] = None

    class Config:
        from_attributes = True


class WalletResponse(BaseModel):
    wallet: Optional[UserWallet] = None


class WalletCreateResponse(BaseModel):
    success: bool
    message: str
    wallet: Optional[UserWallet] = None


class WalletBalance(BaseModel):
    address: str
    bnb_balance: str
    usdt_balance: str


class ChainTransfer(BaseModel):
    hash: str
    amount: str
    block_number: int
    timestamp: datetime
    network: str
    explorer_url: str
