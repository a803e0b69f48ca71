"""Project schemas"""

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class ProjectSubmitRequest(BaseModel):
    """
    Project submission payload.
    Required fields are optional here so the workflow can report which one
    is missing after the caller's role has been checked.
    """
    name: Optional[str] = Field(None, max_length=255, description="Project name")
    hectares: Optional[float] = Field(None, description="Restored area in hectares")
    latitude: Optional[float] = Field(None, description="Site latitude")
    longitude: Optional[float] = Field(None, description="Site longitude")
    address: Optional[str] = Field(None, description="Human readable location")
    photo_urls: Optional[List[str]] = Field(default_factory=list, description="Uploaded photo URLs")
    video_url: Optional[str] = Field(None, description="Uploaded video URL")


class ProjectDecisionRequest(BaseModel):
    """Validator decision payload"""
    project_id: Optional[str] = Field(None, description="Project UUID")
    status: Optional[str] = Field(None, description="under-review, verified or rejected")
    co2_tons: Optional[float] = Field(None, description="Sequestered CO2 in tonnes (verified only)")
    validator_notes: Optional[str] = Field(None, description="Free-text review notes")


class ProjectResponse(BaseModel):
    """Project response schema"""
    id: UUID
    user_id: UUID
    name: str
    hectares: float
    latitude: float
    longitude: float
    address: Optional[str] = None
    photo_urls: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    status: str
    co2_tons: Optional[float] = None
    validator_id: Optional[UUID] = None
    validator_notes: Optional[str] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectEnvelope(BaseModel):
    """Success envelope returned by submit-project and validate-project"""
    success: bool = True
    project: ProjectResponse


class ProjectListResponse(BaseModel):
    """List of projects response"""
    projects: list[ProjectResponse]
    total: int = Field(..., description="Total number of matching projects")
    limit: int = Field(default=50, description="Page size")
    offset: int = Field(default=0, description="Rows skipped")
