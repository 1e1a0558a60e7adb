"""In-memory store implementations.

These back the demo catalog and are what tests inject fixture data into.
"""

import itertools
import threading
from collections.abc import Iterable
from dataclasses import replace

from eventease.domain import AttendeeRecord, EventRecord, Registration
from eventease.stores.interfaces import AttendeeStore, EventStore, KeyValueStore


class InMemoryEventStore(EventStore):
    """List-backed event store."""

    def __init__(self, events: Iterable[EventRecord] = ()) -> None:
        self._events = list(events)
        self._registrations: list[Registration] = []
        self._lock = threading.Lock()

    def list_events(self) -> list[EventRecord]:
        return list(self._events)

    def get_event(self, event_id: int) -> EventRecord | None:
        return next((e for e in self._events if e.id == event_id), None)

    def add_registration(self, registration: Registration) -> Registration | None:
        with self._lock:
            index = next(
                (i for i, e in enumerate(self._events) if e.id == registration.event_id),
                None,
            )
            if index is None:
                return None
            event = self._events[index]
            if not event.is_active or event.is_full:
                return None
            self._events[index] = replace(
                event, current_registrations=event.current_registrations + 1
            )
            stored = replace(registration, id=len(self._registrations) + 1)
            self._registrations.append(stored)
            return stored

    def registrations_for_event(self, event_id: int) -> list[Registration]:
        return [r for r in self._registrations if r.event_id == event_id]


class InMemoryAttendeeStore(AttendeeStore):
    """List-backed attendee store. IDs are assigned sequentially."""

    def __init__(self, attendees: Iterable[AttendeeRecord] = ()) -> None:
        self._attendees: list[AttendeeRecord] = []
        self._ids = itertools.count(1)
        for attendee in attendees:
            self.add_attendee(attendee)

    def list_attendees(self) -> list[AttendeeRecord]:
        return list(self._attendees)

    def get_attendee(self, attendee_id: int) -> AttendeeRecord | None:
        return next((a for a in self._attendees if a.id == attendee_id), None)

    def add_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord:
        stored = replace(attendee, id=next(self._ids))
        self._attendees.append(stored)
        return stored

    def save_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord | None:
        for index, existing in enumerate(self._attendees):
            if existing.id == attendee.id:
                self._attendees[index] = attendee
                return attendee
        return None

    def delete_attendee(self, attendee_id: int) -> bool:
        before = len(self._attendees)
        self._attendees = [a for a in self._attendees if a.id != attendee_id]
        return len(self._attendees) != before


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed key/value store."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
