"""Services package"""

from .auth_service import AuthService
from .project_workflow_service import ProjectWorkflowService
from .sensor_data_service import SensorDataService
from .wallet_service import WalletService
from .realtime_service import EventBroker, event_broker

__all__ = [
    "AuthService",
    "ProjectWorkflowService",
    "SensorDataService",
    "WalletService",
    "EventBroker",
    "event_broker",
]
