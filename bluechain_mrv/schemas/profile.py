"""Profile schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class ProfileResponse(BaseModel):
    id: UUID
    role: str
    organization_name: str
    registration_number: str
    email: str
    verification_status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    """Profile update schema; role and email cannot be changed"""
    organization_name: Optional[str] = Field(None, min_length=1, max_length=255)
    registration_number: Optional[str] = Field(None, min_length=1, max_length=100)
