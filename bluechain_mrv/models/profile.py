"""Role profile model"""

import enum
from sqlalchemy import CheckConstraint, Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from bluechain_mrv.models.base import BaseModel


class UserRole(str, enum.Enum):
    """Marketplace roles; fixed when the profile is created"""
    GENERATOR = "generator"
    VALIDATOR = "validator"
    CONSUMER = "consumer"


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Profile(BaseModel):
    """
    One profile per identity, sharing the identity's primary key.
    Consulted by the role gate on every role-scoped operation.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('generator', 'validator', 'consumer')", name="ck_profiles_role"
        ),
    )

    id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )
    role = Column(String(20), nullable=False, index=True)  # generator, validator, consumer
    organization_name = Column(String(255), nullable=False)
    registration_number = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    verification_status = Column(
        String(20), default=VerificationStatus.PENDING.value, nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile(id={self.id}, role={self.role})>"
