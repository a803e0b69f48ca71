"""User (identity) model"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from bluechain_mrv.models.base import BaseModel


class User(BaseModel):
    """
    Identity record used to sign in.
    Everything role-related lives on the one-to-one Profile.
    """

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    profile = relationship(
        "Profile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
