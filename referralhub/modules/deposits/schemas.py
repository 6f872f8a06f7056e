from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class Deposit(BaseModel):
    id: str
    wallet_address: Optional[str] = None
    amount: float
    status: str
    transaction_hash: Optional[str] = None
    confirmations: int = 0
    block_number: Optional[int] = None
    confirmed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChainDeposit(BaseModel):
    hash: str
    amount: float
    block_number: int
    confirmations: int
    status: str  # pending | confirmed
    is_processed: bool
    can_process: bool
    timestamp: Optional[datetime] = None
    explorer_url: str


class DepositOverview(BaseModel):
    wallet_address: Optional[str] = None
    fund_wallet_balance: float
    required_confirmations: int
    min_amount: float
    deposits: List[Deposit]
    chain_transactions: List[ChainDeposit]


class ProcessDepositRequest(BaseModel):
    transaction_hash: str = Field(..., min_length=1)


class ProcessDepositResponse(BaseModel):
    success: bool
    message: str
    deposit: Deposit
    fund_wallet_balance: float
