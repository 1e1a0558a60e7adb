"""Event service - catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from django.utils import timezone

from eventease.domain import (
    EventCategory,
    EventQuery,
    EventRecord,
    PagedResult,
    PageRequest,
    Registration,
    SortDirection,
    SortField,
)
from eventease.domain.errors import CapacityExceededError, EventNotFoundError
from eventease.domain.models import CORPORATE_CATEGORIES, SOCIAL_CATEGORIES
from eventease.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

_SORT_KEYS: dict[SortField, Callable[[EventRecord], object]] = {
    SortField.NAME: lambda e: e.name.casefold(),
    SortField.DATE: lambda e: e.date,
    SortField.PRICE: lambda e: e.price.amount,
}


def _by_date(events: Iterable[EventRecord]) -> list[EventRecord]:
    return sorted(events, key=_SORT_KEYS[SortField.DATE])


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, clock: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._clock = clock

    def list_events(self) -> list[EventRecord]:
        """Return active events ordered by date."""
        return _by_date(e for e in self._store.list_events() if e.is_active)

    def find_event(self, event_id: int) -> EventRecord | None:
        return self._store.get_event(event_id)

    def get_event(self, event_id: int) -> EventRecord:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self.find_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def events_by_category(self, category: EventCategory) -> list[EventRecord]:
        return [e for e in self.list_events() if e.category == category]

    def corporate_events(self) -> list[EventRecord]:
        return [e for e in self.list_events() if e.category in CORPORATE_CATEGORIES]

    def social_events(self) -> list[EventRecord]:
        return [e for e in self.list_events() if e.category in SOCIAL_CATEGORIES]

    def search_events(self, term: str) -> list[EventRecord]:
        """Return active events matching `term`; a blank term matches all."""
        query = EventQuery(search=term)
        return [e for e in self.list_events() if query.matches(e)]

    def query(
        self,
        query: EventQuery | None = None,
        page: PageRequest | None = None,
    ) -> PagedResult[EventRecord]:
        """Filter, sort and slice the catalog.

        Sorting is stable, so events with equal keys keep their store order
        in both directions.
        """
        query = query or EventQuery()
        page = page or PageRequest()
        matched = [e for e in self._store.list_events() if query.matches(e)]
        ordered = sorted(
            matched,
            key=_SORT_KEYS[page.sort_by],
            reverse=page.direction is SortDirection.DESCENDING,
        )
        window = ordered[page.offset : page.offset + page.page_size]
        return PagedResult(
            items=tuple(window),
            total_count=len(ordered),
            page=page.page,
            page_size=page.page_size,
        )

    def register_attendee(self, event_id: int, registration: Registration) -> Registration:
        """Take one seat on an event.

        Raises:
            EventNotFoundError: If the event does not exist.
            CapacityExceededError: If the event is inactive or full.
        """
        event = self.get_event(event_id)
        if not event.is_active or event.is_full:
            raise CapacityExceededError(event_id)

        pending = replace(
            registration,
            event_id=event_id,
            registered_at=registration.registered_at or self._clock(),
        )
        # The store repeats the capacity check atomically with the increment.
        stored = self._store.add_registration(pending)
        if stored is None:
            raise CapacityExceededError(event_id)
        logger.info("Registered %s for event %s", stored.email, event_id)
        return stored

    def registrations_for_event(self, event_id: int) -> list[Registration]:
        """Raises EventNotFoundError if the event does not exist."""
        self.get_event(event_id)
        return self._store.registrations_for_event(event_id)
