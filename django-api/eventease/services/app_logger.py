"""Audit and performance logging on top of the standard logging module."""

import logging
from datetime import timedelta
from typing import Any

from eventease.services.config_service import ConfigurationService


class ApplicationLogger:
    """Logging facade that adds audit and performance entries to eventease.audit."""

    def __init__(
        self,
        config: ConfigurationService,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._logger = logger or logging.getLogger("eventease.audit")

    def info(self, message: str, *args: Any) -> None:
        self._logger.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        self._logger.warning(message, *args)

    def error(self, message: str, *args: Any, exc_info: Any = None) -> None:
        self._logger.error(message, *args, exc_info=exc_info)

    def debug(self, message: str, *args: Any) -> None:
        # Debug output is for development only.
        if self._config.is_development:
            self._logger.debug(message, *args)

    def log_user_action(self, action: str, details: str, user_id: str | None = None) -> bool:
        """Emit an audit record. Returns False when audit logging is disabled."""
        if not self._config.get_bool("security.enable_audit_logging", True):
            return False
        self._logger.info(
            "User Action: %s - %s",
            action,
            details,
            extra={"user_id": user_id or "Anonymous", "log_type": "UserAction"},
        )
        return True

    def log_performance(
        self,
        operation: str,
        duration: timedelta,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self._logger.info(
            "Performance: %s completed in %.2fms",
            operation,
            duration.total_seconds() * 1000,
            extra={"log_type": "Performance", "metadata": metadata or {}},
        )
