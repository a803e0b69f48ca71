"""Sensor data schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class SensorDataRequest(BaseModel):
    project_id: Optional[str] = Field(None, description="Project UUID")
    temperature: Optional[float] = Field(None, description="Water temperature, °C")
    salinity: Optional[float] = Field(None, description="Salinity, PSU")
    ph: Optional[float] = Field(None, description="pH")
    dissolved_o2: Optional[float] = Field(None, description="Dissolved oxygen, mg/L")
    turbidity: Optional[float] = Field(None, description="Turbidity, NTU")


class SensorDataResponse(BaseModel):
    id: UUID
    project_id: UUID
    validator_id: UUID
    temperature: Optional[float] = None
    salinity: Optional[float] = None
    ph: Optional[float] = None
    dissolved_o2: Optional[float] = None
    turbidity: Optional[float] = None
    recorded_at: datetime
    created_at: datetime

    class Config:
        from_attributes = True


class SensorDataEnvelope(BaseModel):
    success: bool = True
    sensor_data: SensorDataResponse
