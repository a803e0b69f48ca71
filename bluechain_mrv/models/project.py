"""Project model"""

import enum
from sqlalchemy import CheckConstraint, Column, String, Text, Float, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from bluechain_mrv.models.base import BaseModel


class ProjectStatus(str, enum.Enum):
    """Project lifecycle status"""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Project(BaseModel):
    """
    Blue-carbon restoration project submitted by a generator.
    Status, CO2 tonnage and validator fields are written by validators.
    """

    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(
            "status IN ('submitted', 'under-review', 'verified', 'rejected')",
            name="ck_projects_status",
        ),
    )

    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    hectares = Column(Float, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(Text, nullable=True)
    photo_urls = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    video_url = Column(Text, nullable=True)
    status = Column(
        String(20),
        default=ProjectStatus.SUBMITTED.value,
        server_default=ProjectStatus.SUBMITTED.value,
        nullable=False,
        index=True,
    )
    co2_tons = Column(Float, nullable=True)  # only set by a "verified" decision
    validator_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    validator_notes = Column(Text, nullable=True)
    verified_at = Column(DateTime, nullable=True)

    # Relationships
    sensor_readings = relationship(
        "SensorReading", back_populates="project", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, status={self.status})>"
