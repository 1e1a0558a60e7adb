"""Health checks over the configured services."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from django.utils import timezone

from eventease.services.app_logger import ApplicationLogger
from eventease.services.attendance_service import AttendanceService
from eventease.services.config_service import ConfigurationService
from eventease.services.event_service import EventService

HEALTHY = "Healthy"
DEGRADED = "Degraded"
CRITICAL = "Critical"
UNKNOWN = "Unknown"


@dataclass
class HealthCheckResult:
    """Outcome of a single probe."""

    name: str
    status: str = UNKNOWN
    description: str | None = None
    duration: timedelta = timedelta()
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class HealthStatus:
    """Roll-up of every probe run in one health check."""

    status: str
    timestamp: datetime
    response_time: timedelta
    checks: list[HealthCheckResult] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return self.status == HEALTHY


class HealthCheckService:
    """Runs the named service probes and rolls them up into one HealthStatus."""

    def __init__(
        self,
        config: ConfigurationService,
        events: EventService,
        attendance: AttendanceService,
        app_logger: ApplicationLogger,
    ) -> None:
        self._config = config
        self._events = events
        self._attendance = attendance
        self._logger = app_logger
        self._checks: dict[str, Callable[[HealthCheckResult], None]] = {
            "configuration": self._check_configuration,
            "eventservice": self._check_events,
            "attendanceservice": self._check_attendance,
            "applicationlogger": self._check_logger,
        }

    def get_health_status(self) -> HealthStatus:
        started = time.perf_counter()
        self._logger.info("Starting health check")
        results = [
            self.check_service(name)
            for name in ("Configuration", "EventService", "AttendanceService", "ApplicationLogger")
        ]
        failed = [r for r in results if r.status != HEALTHY]
        if not failed:
            status = HEALTHY
        elif any(r.status == CRITICAL for r in failed):
            status = CRITICAL
        else:
            status = DEGRADED

        health = HealthStatus(
            status=status,
            timestamp=timezone.now(),
            response_time=timedelta(seconds=time.perf_counter() - started),
            checks=results,
            details={
                "total_checks": len(results),
                "failed_checks": len(failed),
                "environment": self._config.environment,
            },
        )
        self._logger.log_performance("health_check", health.response_time, {"status": status})
        return health

    def check_service(self, name: str) -> HealthCheckResult:
        result = HealthCheckResult(name=name)
        started = time.perf_counter()
        check = self._checks.get(name.lower())
        try:
            if check is None:
                result.description = f"Unknown service: {name}"
            else:
                check(result)
        except Exception as exc:
            # A failing probe is reported, not raised.
            result.status = CRITICAL
            result.description = f"Health check failed: {exc}"
            result.data["exception"] = type(exc).__name__
        finally:
            result.duration = timedelta(seconds=time.perf_counter() - started)
        return result

    def is_system_healthy(self) -> bool:
        return self.get_health_status().is_healthy

    def _check_configuration(self, result: HealthCheckResult) -> None:
        result.data["application_name"] = self._config.get_setting("application.name", UNKNOWN)
        result.data["environment"] = self._config.environment
        result.status = HEALTHY
        result.description = "Configuration service is responsive"

    def _check_events(self, result: HealthCheckResult) -> None:
        result.data["event_count"] = len(self._events.list_events())
        result.status = HEALTHY
        result.description = "Event service is responsive"

    def _check_attendance(self, result: HealthCheckResult) -> None:
        dashboard = self._attendance.dashboard()
        result.data["total_attendees"] = dashboard["total_attendees"]
        result.data["today_check_ins"] = dashboard["today_check_ins"]
        result.status = HEALTHY
        result.description = "Attendance service is responsive"

    def _check_logger(self, result: HealthCheckResult) -> None:
        try:
            self._logger.debug("Health check test log entry")
        except Exception as exc:
            result.status = DEGRADED
            result.description = f"Application logger issue: {exc}"
            return
        result.status = HEALTHY
        result.description = "Application logger is responsive"
