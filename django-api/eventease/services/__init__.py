from eventease.services.app_logger import ApplicationLogger
from eventease.services.attendance_service import AttendanceService
from eventease.services.config_service import ConfigurationService
from eventease.services.event_service import EventService
from eventease.services.health_service import HealthCheckService
from eventease.services.session_service import KeepAlive, SessionTrackingService
from eventease.services.state_service import StateManagementService

__all__ = [
    "ApplicationLogger",
    "AttendanceService",
    "ConfigurationService",
    "EventService",
    "HealthCheckService",
    "KeepAlive",
    "SessionTrackingService",
    "StateManagementService",
]
