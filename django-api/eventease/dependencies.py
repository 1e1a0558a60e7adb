"""Service wiring for the HTTP handlers.

Each getter builds its object once per process; reset() drops them so the
next call rebuilds from current settings.
"""

import logging
from datetime import timedelta
from functools import lru_cache

from django.utils import timezone

from eventease.services import (
    ApplicationLogger,
    AttendanceService,
    ConfigurationService,
    EventService,
    HealthCheckService,
    KeepAlive,
    SessionTrackingService,
)
from eventease.stores import sample_data
from eventease.stores.cache_store import CacheKeyValueStore
from eventease.stores.django_store import DjangoAttendeeStore, DjangoEventStore
from eventease.stores.interfaces import AttendeeStore, EventStore
from eventease.stores.memory import InMemoryAttendeeStore, InMemoryEventStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_config() -> ConfigurationService:
    return ConfigurationService()


@lru_cache(maxsize=1)
def get_app_logger() -> ApplicationLogger:
    return ApplicationLogger(get_config())


def _use_database() -> bool:
    return get_config().get_setting("storage.backend", "memory").lower() == "django"


@lru_cache(maxsize=1)
def get_event_store() -> EventStore:
    if _use_database():
        return DjangoEventStore()
    config = get_config()
    if not config.get_bool("features.enable_sample_data", True):
        return InMemoryEventStore()
    count = config.get_int("features.sample_event_count", 50)
    seed = config.get_int("features.sample_seed", sample_data.DEFAULT_SEED)
    logger.info("Generating %d sample events", count)
    return InMemoryEventStore(sample_data.generate_events(count, timezone.now(), seed))


@lru_cache(maxsize=1)
def get_attendee_store() -> AttendeeStore:
    if _use_database():
        return DjangoAttendeeStore()
    config = get_config()
    if not config.get_bool("features.enable_sample_data", True):
        return InMemoryAttendeeStore()
    seed = config.get_int("features.sample_seed", sample_data.DEFAULT_SEED)
    return InMemoryAttendeeStore(sample_data.generate_attendees(timezone.now(), seed=seed))


@lru_cache(maxsize=1)
def get_event_service() -> EventService:
    return EventService(get_event_store())


@lru_cache(maxsize=1)
def get_attendance_service() -> AttendanceService:
    return AttendanceService(get_attendee_store(), get_event_service())


@lru_cache(maxsize=1)
def get_health_service() -> HealthCheckService:
    return HealthCheckService(
        get_config(), get_event_service(), get_attendance_service(), get_app_logger()
    )


def build_session_service(prefix: str = "") -> SessionTrackingService:
    """A session tracker persisting through the cache, one per visitor prefix."""
    config = get_config()
    return SessionTrackingService(
        CacheKeyValueStore(prefix=prefix),
        timeout=timedelta(minutes=config.get_int("session.timeout_minutes", 30)),
        search_history_limit=config.get_int("session.search_history_limit", 20),
        event_log_limit=config.get_int("session.event_log_limit", 100),
    )


def start_keep_alive(sessions: SessionTrackingService) -> KeepAlive:
    keep_alive = KeepAlive(sessions, interval=get_config().get_int("session.keep_alive_seconds", 60))
    keep_alive.start()
    return keep_alive


def reset() -> None:
    for getter in (
        get_config,
        get_app_logger,
        get_event_store,
        get_attendee_store,
        get_event_service,
        get_attendance_service,
        get_health_service,
    ):
        getter.cache_clear()
