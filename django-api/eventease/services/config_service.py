"""Application configuration lookups over the EVENTEASE settings dict."""

import logging
from collections.abc import Mapping
from typing import Any

from django.conf import settings

logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigurationService:
    """Dotted-key access to nested configuration with default fallback.

    Lookups never raise: a missing key or an unparsable value returns the
    supplied default.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = values if values is not None else getattr(settings, "EVENTEASE", {})

    def _lookup(self, key: str) -> Any:
        current: Any = self._values
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def get_setting(self, key: str, default: str = "") -> str:
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return default
        return str(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._lookup(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        if value is not _MISSING:
            logger.warning("Setting %r is not a boolean, using default", key)
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._lookup(key)
        if value is _MISSING or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Setting %r is not an integer, using default", key)
            return default

    def get_section(self, key: str) -> dict[str, Any]:
        value = self._lookup(key)
        if isinstance(value, Mapping):
            return dict(value)
        logger.warning("Configuration section %r not found, returning empty section", key)
        return {}

    @property
    def environment(self) -> str:
        return self.get_setting("application.environment", "Development")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"
