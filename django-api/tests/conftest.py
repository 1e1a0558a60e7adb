"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from eventease import dependencies
from eventease.domain import Capacity, EventCategory, EventRecord, Money
from eventease.services import AttendanceService, EventService, SessionTrackingService
from eventease.stores.memory import (
    InMemoryAttendeeStore,
    InMemoryEventStore,
    InMemoryKeyValueStore,
)

T0 = datetime(2025, 3, 10, 9, 0, tzinfo=dt_timezone.utc)


class FrozenClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_event(event_id: int, **overrides) -> EventRecord:
    fields = {
        "id": event_id,
        "name": f"Event {event_id:02d}",
        "description": "An event",
        "date": T0 + timedelta(days=event_id),
        "location": "Main Hall",
        "price": Money(Decimal("50.00")),
        "capacity": Capacity(100),
        "current_registrations": 0,
        "category": EventCategory.CORPORATE,
        "organizer": "EventEase Team",
    }
    fields.update(overrides)
    return EventRecord(**fields)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def reset_dependencies():
    dependencies.reset()
    yield
    dependencies.reset()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def events() -> list[EventRecord]:
    return [
        make_event(1, name="Quarterly Summit", price=Money(Decimal("200.00"))),
        make_event(2, name="garden party", category=EventCategory.SOCIAL, tags=("outdoor",)),
        make_event(3, name="Annual Gala", category=EventCategory.GALA, price=Money(Decimal("150.00"))),
        make_event(4, name="Python Workshop", category=EventCategory.WORKSHOP, location="Lab 2"),
        make_event(5, name="Closed Mixer", category=EventCategory.NETWORKING, is_active=False),
        make_event(6, name="Full House", capacity=Capacity(2), current_registrations=2),
    ]


@pytest.fixture
def event_store(events) -> InMemoryEventStore:
    return InMemoryEventStore(events)


@pytest.fixture
def event_service(event_store, clock) -> EventService:
    return EventService(event_store, clock=clock)


@pytest.fixture
def attendee_store() -> InMemoryAttendeeStore:
    return InMemoryAttendeeStore()


@pytest.fixture
def attendance_service(attendee_store, event_service, clock) -> AttendanceService:
    return AttendanceService(attendee_store, event_service, clock=clock)


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def session_service(storage, clock) -> SessionTrackingService:
    return SessionTrackingService(storage, clock=clock)
