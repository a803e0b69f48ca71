"""Wallet, asset, transaction and purchase schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class WalletResponse(BaseModel):
    id: UUID
    user_id: UUID
    address: str
    balance_inr: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CreateWalletResponse(BaseModel):
    """`success` is only present when a new wallet was created"""
    success: Optional[bool] = None
    wallet: WalletResponse


class AssetResponse(BaseModel):
    id: UUID
    wallet_id: UUID
    name: str
    symbol: str
    balance: float
    inr_value: float
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class TransactionResponse(BaseModel):
    id: UUID
    wallet_id: UUID
    type: str
    token: str
    amount: float
    inr_value: float
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class PurchaseRequest(BaseModel):
    credits: Optional[float] = Field(None, description="Number of BCC credits to buy")
    price_per_credit: Optional[float] = Field(None, description="INR price per credit")


class PurchaseResponse(BaseModel):
    id: UUID
    user_id: UUID
    wallet_id: UUID
    credits: float
    price_per_credit: float
    inr_amount: float
    wallet_hash: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class PurchaseEnvelope(BaseModel):
    success: bool = True
    purchase: PurchaseResponse


class MarketPriceResponse(BaseModel):
    symbol: str = "BCC"
    price_inr: float
