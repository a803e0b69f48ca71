"""Wallet, asset and transaction models"""

import enum
from sqlalchemy import Column, String, Float, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from bluechain_mrv.models.base import BaseModel


class TransactionType(str, enum.Enum):
    RECEIVED = "received"
    SENT = "sent"
    SWAP = "swap"
    BUY = "buy"


class TransactionStatus(str, enum.Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class Wallet(BaseModel):
    """Custodial wallet, one per user"""

    __tablename__ = "wallets"

    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, unique=True, index=True
    )
    address = Column(String(42), nullable=False, unique=True)
    balance_inr = Column(Float, default=0, nullable=False)

    # Relationships
    assets = relationship("Asset", back_populates="wallet", cascade="all, delete-orphan")
    transactions = relationship(
        "WalletTransaction", back_populates="wallet", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Wallet(id={self.id}, address={self.address})>"


class Asset(BaseModel):
    """Token balance held in a wallet, mirrored in INR"""

    __tablename__ = "assets"

    wallet_id = Column(
        Uuid(as_uuid=True), ForeignKey("wallets.id"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    symbol = Column(String(20), nullable=False)
    balance = Column(Float, default=0, nullable=False)
    inr_value = Column(Float, default=0, nullable=False)
    icon = Column(String(16), nullable=True)

    wallet = relationship("Wallet", back_populates="assets")

    def __repr__(self):
        return f"<Asset(symbol={self.symbol}, balance={self.balance})>"


class WalletTransaction(BaseModel):
    """Ledger entry for a wallet"""

    __tablename__ = "transactions"

    wallet_id = Column(
        Uuid(as_uuid=True), ForeignKey("wallets.id"), nullable=False, index=True
    )
    type = Column(String(20), nullable=False)  # received, sent, swap, buy
    token = Column(String(50), nullable=False)
    amount = Column(Float, nullable=False)
    inr_value = Column(Float, nullable=False)
    from_address = Column(String(42), nullable=True)
    to_address = Column(String(42), nullable=True)
    status = Column(String(20), default=TransactionStatus.COMPLETED.value, nullable=False)

    wallet = relationship("Wallet", back_populates="transactions")

    def __repr__(self):
        return f"<WalletTransaction(id={self.id}, type={self.type}, token={self.token})>"
