"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from eventease.domain import AttendeeRecord, EventRecord, Registration


class EventStore(ABC):
    """Interface for event catalog persistence operations."""

    @abstractmethod
    def list_events(self) -> list[EventRecord]:
        """Return all events, active or not, in insertion order."""
        ...

    @abstractmethod
    def get_event(self, event_id: int) -> EventRecord | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def add_registration(self, registration: Registration) -> Registration | None:
        """Record a registration and increment the event's count.

        The capacity check and the increment happen as one step. Returns
        None when the event is missing, inactive or already full.
        """
        ...

    @abstractmethod
    def registrations_for_event(self, event_id: int) -> list[Registration]:
        """Return registrations for an event in the order they were made."""
        ...


class AttendeeStore(ABC):
    """Interface for attendee persistence operations."""

    @abstractmethod
    def list_attendees(self) -> list[AttendeeRecord]:
        """Return all attendees in insertion order."""
        ...

    @abstractmethod
    def get_attendee(self, attendee_id: int) -> AttendeeRecord | None:
        ...

    @abstractmethod
    def add_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord:
        """Store a new attendee and return it with its assigned ID."""
        ...

    @abstractmethod
    def save_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord | None:
        """Replace an existing attendee. Returns None if the ID is unknown."""
        ...

    @abstractmethod
    def delete_attendee(self, attendee_id: int) -> bool:
        ...


class KeyValueStore(ABC):
    """String blobs by string key, the shape of browser local storage.

    Implementations raise PersistenceFailureError when the backing fails.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...
