"""Sensor reading model"""

from datetime import datetime
from sqlalchemy import Column, Float, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from bluechain_mrv.models.base import BaseModel


class SensorReading(BaseModel):
    """
    Water-quality reading recorded by a validator against a project.
    Append-only: rows are never updated or deleted by the API.
    """

    __tablename__ = "sensor_data"

    project_id = Column(
        Uuid(as_uuid=True), ForeignKey("projects.id"), nullable=False, index=True
    )
    validator_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    temperature = Column(Float, nullable=True)
    salinity = Column(Float, nullable=True)
    ph = Column(Float, nullable=True)
    dissolved_o2 = Column(Float, nullable=True)
    turbidity = Column(Float, nullable=True)
    recorded_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    project = relationship("Project", back_populates="sensor_readings")

    def __repr__(self):
        return f"<SensorReading(id={self.id}, project_id={self.project_id})>"
