"""Project lifecycle endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.api.dependencies import get_current_user, role_required
from bluechain_mrv.database import get_db
from bluechain_mrv.models import UserRole
from bluechain_mrv.schemas.project import (
    ProjectDecisionRequest,
    ProjectEnvelope,
    ProjectListResponse,
    ProjectResponse,
    ProjectSubmitRequest,
)
from bluechain_mrv.services.project_workflow_service import ProjectWorkflowService
from bluechain_mrv.services.realtime_service import EventBroker, get_event_broker
from bluechain_mrv.services.role_gate import Caller

router = APIRouter(prefix="/api/v1", tags=["Projects"])


@router.post("/submit-project", response_model=ProjectEnvelope, status_code=status.HTTP_200_OK)
async def submit_project(
    payload: ProjectSubmitRequest,
    caller: Caller = Depends(role_required(UserRole.GENERATOR, "submit projects")),
    db: AsyncSession = Depends(get_db),
    broker: EventBroker = Depends(get_event_broker),
):
    """
    Submit a restoration project for validation (generators only)

    - **name**, **hectares**, **latitude**, **longitude** are required
    - **photo_urls** / **video_url** come from the media upload endpoint
    """
    project = await ProjectWorkflowService(db, broker).submit(
        caller,
        name=payload.name,
        hectares=payload.hectares,
        latitude=payload.latitude,
        longitude=payload.longitude,
        address=payload.address,
        photo_urls=payload.photo_urls,
        video_url=payload.video_url,
    )
    return ProjectEnvelope(success=True, project=ProjectResponse.model_validate(project))


@router.post("/validate-project", response_model=ProjectEnvelope, status_code=status.HTTP_200_OK)
async def validate_project(
    payload: ProjectDecisionRequest,
    caller: Caller = Depends(role_required(UserRole.VALIDATOR, "validate projects")),
    db: AsyncSession = Depends(get_db),
    broker: EventBroker = Depends(get_event_broker),
):
    """
    Record a validator decision: under-review, verified or rejected

    **co2_tons** is stored only with a verified decision
    """
    project = await ProjectWorkflowService(db, broker).decide(
        caller,
        project_id=payload.project_id,
        status=payload.status,
        co2_tons=payload.co2_tons,
        validator_notes=payload.validator_notes,
    )
    return ProjectEnvelope(success=True, project=ProjectResponse.model_validate(project))


@router.get("/projects", response_model=ProjectListResponse, status_code=status.HTTP_200_OK)
async def list_projects(
    project_status: Optional[str] = Query(None, alias="status", description="Filter by status"),
    limit: int = Query(50, ge=1, le=100, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List projects, newest first

    Generators see their own projects; validators and consumers see all
    """
    projects, total = await ProjectWorkflowService(db).list_projects(
        caller, status=project_status, limit=limit, offset=offset
    )
    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/projects/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: str,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get a single project"""
    project = await ProjectWorkflowService(db).get_project(caller, project_id)
    return ProjectResponse.model_validate(project)
