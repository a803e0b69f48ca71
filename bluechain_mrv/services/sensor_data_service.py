"""Sensor reading ingestion"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.database import commit_or_raise
from bluechain_mrv.exceptions import NotFoundError, ValidationError
from bluechain_mrv.models import Project, SensorReading, UserRole
from bluechain_mrv.monitoring.metrics import sensor_readings_total
from bluechain_mrv.schemas.sensor_data import SensorDataResponse
from bluechain_mrv.services.project_workflow_service import ProjectWorkflowService
from bluechain_mrv.services.realtime_service import EventBroker, event_broker
from bluechain_mrv.services.role_gate import Caller, require_role
from bluechain_mrv.services.validation import optional_number, parse_uuid

logger = logging.getLogger(__name__)

READING_FIELDS = ("temperature", "salinity", "ph", "dissolved_o2", "turbidity")


class SensorDataService:
    """Append-only sensor readings recorded by validators"""

    def __init__(self, db: AsyncSession, broker: Optional[EventBroker] = None):
        self.db = db
        self.broker = broker or event_broker

    async def record(self, caller: Caller, project_id, **readings) -> SensorReading:
        """
        Append a reading for a project. The project's status is not changed.

        Args:
            caller: Authenticated validator
            project_id: Target project UUID
            **readings: Any of temperature, salinity, ph, dissolved_o2, turbidity

        Raises:
            AuthorizationError: caller is not a validator
            ValidationError: missing project id or non-numeric reading
            NotFoundError: project does not exist
        """
        require_role(caller, UserRole.VALIDATOR, "submit sensor data")

        if not project_id:
            raise ValidationError("Project ID is required", field="project_id")
        project_uuid = parse_uuid(project_id, "project_id")

        unknown = sorted(set(readings) - set(READING_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown reading field: {unknown[0]}", field=unknown[0])
        values = {
            field: optional_number(readings.get(field), field) for field in READING_FIELDS
        }

        project = await self.db.get(Project, project_uuid)
        if project is None:
            raise NotFoundError(f"Project with id {project_uuid} not found")

        reading = SensorReading(
            project_id=project_uuid,
            validator_id=caller.user_id,
            **values,
        )
        self.db.add(reading)
        await commit_or_raise(self.db)
        await self.db.refresh(reading)

        sensor_readings_total.inc()
        logger.info(f"Sensor reading {reading.id} recorded for project {project_uuid} by {caller.user_id}")

        await self.broker.publish_project_event(
            "sensor_data.recorded",
            SensorDataResponse.model_validate(reading).model_dump(mode="json"),
            project_id=project.id,
            owner_id=project.user_id,
        )
        return reading

    async def list_for_project(self, caller: Caller, project_id) -> List[SensorReading]:
        """Readings for a project visible to the caller, newest first"""
        project = await ProjectWorkflowService(self.db, self.broker).get_project(caller, project_id)

        result = await self.db.execute(
            select(SensorReading)
            .where(SensorReading.project_id == project.id)
            .order_by(SensorReading.recorded_at.desc())
        )
        return list(result.scalars().all())
