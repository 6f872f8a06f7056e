from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

SourceWallet = Literal["main", "fund"]


class WithdrawalAddress(BaseModel):
    id: str
    address: str
    label: Optional[str] = None
    is_verified: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Withdrawal(BaseModel):
    id: str
    amount: float
    fee: float = 0
    net_amount: float = 0
    withdrawal_address: Optional[str] = None
    address_label: Optional[str] = None
    source_wallet: Optional[str] = None
    status: str
    withdrawal_fee: float = 0
    transfer_fee: float = 0
    transaction_hash: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FeeQuote(BaseModel):
    amount: float
    source_wallet: SourceWallet
    withdrawal_fee: float
    transfer_fee: float
    total_fees: float
    net_amount: float


class WithdrawalOverview(BaseModel):
    main_wallet_balance: float
    fund_wallet_balance: float
    has_transaction_pin: bool
    min_amount: float
    addresses: List[WithdrawalAddress]
    history: List[Withdrawal]


class WithdrawalRequest(BaseModel):
    amount: float
    source_wallet: SourceWallet = "main"
    address_id: str
    transaction_pin: str = Field(..., min_length=1)


class WithdrawalResponse(BaseModel):
    success: bool
    message: str
    withdrawal: Withdrawal
    quote: FeeQuote
