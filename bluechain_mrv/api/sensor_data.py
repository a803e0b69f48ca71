"""Sensor data endpoints"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.api.dependencies import get_current_user, role_required
from bluechain_mrv.database import get_db
from bluechain_mrv.models import UserRole
from bluechain_mrv.schemas.sensor_data import (
    SensorDataEnvelope,
    SensorDataRequest,
    SensorDataResponse,
)
from bluechain_mrv.services.realtime_service import EventBroker, get_event_broker
from bluechain_mrv.services.role_gate import Caller
from bluechain_mrv.services.sensor_data_service import SensorDataService

router = APIRouter(prefix="/api/v1", tags=["Sensor Data"])


@router.post("/submit-sensor-data", response_model=SensorDataEnvelope, status_code=status.HTTP_200_OK)
async def submit_sensor_data(
    payload: SensorDataRequest,
    caller: Caller = Depends(role_required(UserRole.VALIDATOR, "submit sensor data")),
    db: AsyncSession = Depends(get_db),
    broker: EventBroker = Depends(get_event_broker),
):
    """Attach a water-quality reading to a project (validators only)"""
    reading = await SensorDataService(db, broker).record(
        caller,
        payload.project_id,
        **payload.model_dump(exclude={"project_id"}),
    )
    return SensorDataEnvelope(success=True, sensor_data=SensorDataResponse.model_validate(reading))


@router.get(
    "/projects/{project_id}/sensor-data",
    response_model=List[SensorDataResponse],
    status_code=status.HTTP_200_OK,
)
async def list_sensor_data(
    project_id: str,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Readings for a project, newest first"""
    readings = await SensorDataService(db).list_for_project(caller, project_id)
    return [SensorDataResponse.model_validate(r) for r in readings]
