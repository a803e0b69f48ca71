"""API schemas package"""

from .profile import ProfileResponse, ProfileUpdate
from .auth import SignupRequest, LoginRequest, TokenResponse, RefreshTokenResponse
from .project import (
    ProjectSubmitRequest,
    ProjectDecisionRequest,
    ProjectResponse,
    ProjectEnvelope,
    ProjectListResponse,
)
from .sensor_data import SensorDataRequest, SensorDataResponse, SensorDataEnvelope

__all__ = [
    "ProfileResponse",
    "ProfileUpdate",
    "SignupRequest",
    "LoginRequest",
    "TokenResponse",
    "RefreshTokenResponse",
    "ProjectSubmitRequest",
    "ProjectDecisionRequest",
    "ProjectResponse",
    "ProjectEnvelope",
    "ProjectListResponse",
    "SensorDataRequest",
    "SensorDataResponse",
    "SensorDataEnvelope",
]
