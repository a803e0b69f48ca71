"""Project lifecycle workflow: submission and validator decisions"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.database import commit_or_raise
from bluechain_mrv.exceptions import NotFoundError, ValidationError
from bluechain_mrv.models import Project, ProjectStatus, UserRole
from bluechain_mrv.monitoring.metrics import project_decisions_total, project_submissions_total
from bluechain_mrv.schemas.project import ProjectResponse
from bluechain_mrv.services.realtime_service import EventBroker, event_broker
from bluechain_mrv.services.role_gate import Caller, require_role
from bluechain_mrv.services.validation import (
    optional_number,
    parse_uuid,
    require_number,
    require_text,
)

logger = logging.getLogger(__name__)

# Statuses a validator may move a project to, keyed by its current status.
# Terminal states only accept a repeat of the same decision.
ALLOWED_TRANSITIONS: Dict[str, Set[str]] = {
    ProjectStatus.SUBMITTED.value: {
        ProjectStatus.UNDER_REVIEW.value,
        ProjectStatus.REJECTED.value,
    },
    ProjectStatus.UNDER_REVIEW.value: {
        ProjectStatus.UNDER_REVIEW.value,
        ProjectStatus.VERIFIED.value,
        ProjectStatus.REJECTED.value,
    },
    ProjectStatus.VERIFIED.value: {ProjectStatus.VERIFIED.value},
    ProjectStatus.REJECTED.value: {ProjectStatus.REJECTED.value},
}

DECISION_STATUSES = (
    ProjectStatus.UNDER_REVIEW.value,
    ProjectStatus.VERIFIED.value,
    ProjectStatus.REJECTED.value,
)


class ProjectWorkflowService:
    """
    Role-gated project lifecycle.

    Generators submit projects; validators move them through review to a
    verified or rejected decision. Every successful change is published on
    the event broker.
    """

    def __init__(self, db: AsyncSession, broker: Optional[EventBroker] = None):
        """Initialize with database session and event broker"""
        self.db = db
        self.broker = broker or event_broker

    async def submit(
        self,
        caller: Caller,
        name,
        hectares,
        latitude,
        longitude,
        address: Optional[str] = None,
        photo_urls: Optional[List[str]] = None,
        video_url: Optional[str] = None,
    ) -> Project:
        """
        Create a project in status `submitted` owned by the caller.

        Identical payloads submitted twice create two projects.

        Raises:
            AuthorizationError: caller is not a generator
            ValidationError: a required field is missing or invalid
            StoreError: the insert failed
        """
        require_role(caller, UserRole.GENERATOR, "submit projects")

        name = require_text(name, "name")
        hectares = require_number(hectares, "hectares")
        if hectares <= 0:
            raise ValidationError("hectares must be a positive number", field="hectares")
        latitude = require_number(latitude, "latitude")
        longitude = require_number(longitude, "longitude")

        project = Project(
            user_id=caller.user_id,
            name=name,
            hectares=hectares,
            latitude=latitude,
            longitude=longitude,
            address=address or None,
            photo_urls=list(photo_urls or []),
            video_url=video_url or None,
            status=ProjectStatus.SUBMITTED.value,
        )
        self.db.add(project)
        await commit_or_raise(self.db)
        await self.db.refresh(project)

        project_submissions_total.inc()
        logger.info(f"Project {project.id} submitted by generator {caller.user_id}")

        await self._publish("project.submitted", project)
        return project

    async def decide(
        self,
        caller: Caller,
        project_id,
        status,
        co2_tons=None,
        validator_notes: Optional[str] = None,
    ) -> Project:
        """
        Record a validator decision on a project.

        A `verified` decision stamps `verified_at` and stores `co2_tons` when
        supplied; an omitted tonnage keeps whatever was recorded before.
        A `rejected` decision never touches either field.

        Raises:
            AuthorizationError: caller is not a validator
            ValidationError: missing fields, unknown status or disallowed transition
            NotFoundError: project does not exist
            StoreError: the update failed
        """
        require_role(caller, UserRole.VALIDATOR, "validate projects")

        if not project_id:
            raise ValidationError("project_id is required", field="project_id")
        if not status:
            raise ValidationError("status is required", field="status")

        project_uuid = parse_uuid(project_id, "project_id")
        if status not in DECISION_STATUSES:
            raise ValidationError(
                f"status must be one of: {', '.join(DECISION_STATUSES)}", field="status"
            )
        co2_tons = optional_number(co2_tons, "co2_tons")
        if co2_tons is not None and co2_tons < 0:
            raise ValidationError("co2_tons cannot be negative", field="co2_tons")

        project = await self.db.get(Project, project_uuid)
        if project is None:
            raise NotFoundError(f"Project with id {project_uuid} not found")

        previous_status = project.status
        if status not in ALLOWED_TRANSITIONS.get(previous_status, set()):
            raise ValidationError(
                f"Cannot change project status from {previous_status} to {status}",
                field="status",
            )

        now = datetime.utcnow()
        project.status = status
        project.validator_id = caller.user_id
        if validator_notes is not None:
            project.validator_notes = validator_notes

        if status == ProjectStatus.VERIFIED.value:
            project.verified_at = now
            if co2_tons is not None:
                project.co2_tons = co2_tons

        project.updated_at = now
        await commit_or_raise(self.db)
        await self.db.refresh(project)

        project_decisions_total.labels(status=status).inc()
        logger.info(
            f"Project {project.id} moved {previous_status} -> {status} by validator {caller.user_id}"
        )

        await self._publish("project.status_changed", project, previous_status=previous_status)
        return project

    async def get_project(self, caller: Caller, project_id) -> Project:
        """
        Fetch a project visible to the caller.

        Generators only see their own projects; other roles see all.
        """
        project_uuid = parse_uuid(project_id, "project_id")
        project = await self.db.get(Project, project_uuid)

        if project is None or not self._can_view(caller, project):
            raise NotFoundError(f"Project with id {project_uuid} not found")

        return project

    async def list_projects(
        self,
        caller: Caller,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Project], int]:
        """Return a page of projects visible to the caller, newest first, and the total"""
        query = select(Project)
        count_query = select(func.count(Project.id))

        if caller.role == UserRole.GENERATOR.value:
            query = query.where(Project.user_id == caller.user_id)
            count_query = count_query.where(Project.user_id == caller.user_id)

        if status:
            if status not in ALLOWED_TRANSITIONS:
                raise ValidationError(
                    f"status must be one of: {', '.join(ALLOWED_TRANSITIONS)}", field="status"
                )
            query = query.where(Project.status == status)
            count_query = count_query.where(Project.status == status)

        total = (await self.db.execute(count_query)).scalar_one()
        result = await self.db.execute(
            query.order_by(Project.created_at.desc()).limit(limit).offset(offset)
        )
        return list(result.scalars().all()), total

    @staticmethod
    def _can_view(caller: Caller, project: Project) -> bool:
        if caller.role == UserRole.GENERATOR.value:
            return project.user_id == caller.user_id
        return caller.profile is not None

    async def _publish(self, event_type: str, project: Project, **extra) -> None:
        data = ProjectResponse.model_validate(project).model_dump(mode="json")
        data.update(extra)
        await self.broker.publish_project_event(
            event_type, data, project_id=project.id, owner_id=project.user_id
        )
