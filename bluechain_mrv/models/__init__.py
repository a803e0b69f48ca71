"""Database models package"""

from bluechain_mrv.models.base import BaseModel
from bluechain_mrv.models.user import User
from bluechain_mrv.models.profile import Profile, UserRole, VerificationStatus
from bluechain_mrv.models.project import Project, ProjectStatus
from bluechain_mrv.models.sensor_reading import SensorReading
from bluechain_mrv.models.wallet import (
    Wallet,
    Asset,
    WalletTransaction,
    TransactionType,
    TransactionStatus,
)
from bluechain_mrv.models.purchase import Purchase, PurchaseStatus

# Export all models
__all__ = [
    "BaseModel",
    "User",
    "Profile",
    "UserRole",
    "VerificationStatus",
    "Project",
    "ProjectStatus",
    "SensorReading",
    "Wallet",
    "Asset",
    "WalletTransaction",
    "TransactionType",
    "TransactionStatus",
    "Purchase",
    "PurchaseStatus",
]
