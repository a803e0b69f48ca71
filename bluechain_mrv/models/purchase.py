"""Carbon credit purchase model"""

import enum
from sqlalchemy import Column, String, Float, ForeignKey, Uuid
from bluechain_mrv.models.base import BaseModel


class PurchaseStatus(str, enum.Enum):
    COMPLETED = "completed"
    PENDING = "pending"


class Purchase(BaseModel):
    """BCC purchase made by a user into their wallet"""

    __tablename__ = "purchases"

    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    wallet_id = Column(
        Uuid(as_uuid=True), ForeignKey("wallets.id"), nullable=False, index=True
    )
    credits = Column(Float, nullable=False)
    price_per_credit = Column(Float, nullable=False)
    inr_amount = Column(Float, nullable=False)
    wallet_hash = Column(String(42), nullable=False)
    status = Column(String(20), default=PurchaseStatus.COMPLETED.value, nullable=False)

    def __repr__(self):
        return f"<Purchase(id={self.id}, credits={self.credits})>"
