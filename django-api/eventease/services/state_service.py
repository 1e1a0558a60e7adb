"""UI-facing view state composed from the session and catalog services.

Each field write is compared with the current value; only a real change
updates the field and sends state_changed(field=..., value=...). Cart and
preference operations delegate to the session service and then re-pull the
session before notifying.
"""

import logging
import weakref
from collections import Counter
from collections.abc import Callable
from typing import Any

from eventease.domain import (
    EventQuery,
    EventRecord,
    PagedResult,
    PageRequest,
    Registration,
    SessionEventType,
    ShoppingCart,
    UserPreferences,
    UserSession,
)
from eventease.domain.errors import CapacityExceededError, DomainError, EventNotFoundError
from eventease.services.event_service import EventService
from eventease.services.session_service import SessionTrackingService
from eventease.signals import session_updated, state_changed

logger = logging.getLogger(__name__)


class StateManagementService:
    """Aggregated view state with change notification through state_changed."""

    def __init__(self, sessions: SessionTrackingService, events: EventService) -> None:
        self._sessions = sessions
        self._events = events
        self._state: dict[str, Any] = {
            "current_session": None,
            "current_events": None,
            "selected_event": None,
            "search_term": "",
            "event_type": "",
            "is_loading": False,
            "error_message": None,
        }
        session_updated.connect(self._on_session_updated, sender=sessions)

    @property
    def current_session(self) -> UserSession | None:
        return self._state["current_session"]

    @property
    def current_events(self) -> PagedResult[EventRecord] | None:
        return self._state["current_events"]

    @property
    def selected_event(self) -> EventRecord | None:
        return self._state["selected_event"]

    @property
    def search_term(self) -> str:
        return self._state["search_term"]

    @property
    def event_type(self) -> str:
        return self._state["event_type"]

    @property
    def is_loading(self) -> bool:
        return self._state["is_loading"]

    @property
    def error_message(self) -> str | None:
        return self._state["error_message"]

    @property
    def cart(self) -> ShoppingCart | None:
        session = self.current_session
        return session.cart if session else None

    @property
    def preferences(self) -> UserPreferences | None:
        session = self.current_session
        return session.preferences if session else None

    def subscribe(self, field: str, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Call `callback(value)` whenever `field` changes. Returns an unsubscribe function.

        The subscription is also dropped when this aggregator is garbage collected.
        """
        owner = weakref.ref(self)

        def receiver(sender, field: str, value: Any, **kwargs) -> None:
            if sender is owner() and field == wanted:
                callback(value)

        wanted = field
        state_changed.connect(receiver, weak=False)
        return weakref.finalize(self, state_changed.disconnect, receiver)

    def _notify(self, field: str, value: Any) -> None:
        state_changed.send(sender=self, field=field, value=value)

    def _set(self, field: str, value: Any) -> bool:
        if self._state[field] == value:
            return False
        self._state[field] = value
        self._notify(field, value)
        return True

    def _refresh(self, *fields: str) -> None:
        self._set("current_session", self._sessions.get_current_session())
        for field in fields:
            self._notify(field, getattr(self, field))

    def _on_session_updated(self, sender, session: UserSession, **kwargs) -> None:
        self._set("current_session", session)

    def initialize(self) -> UserSession:
        self._sessions.initialize()
        self._refresh("cart", "preferences")
        return self.current_session

    def load_events(
        self, query: EventQuery | None = None, page: PageRequest | None = None
    ) -> PagedResult[EventRecord] | None:
        self.set_loading(True)
        try:
            result = self._events.query(query, page)
        except DomainError as exc:
            self.set_loading(False)
            self.set_error(exc.message)
            return None
        self._set("current_events", result)
        self.set_loading(False)

        by_category = Counter(e.category.value for e in result.items)
        self._sessions.track_event(
            SessionEventType.NAVIGATION,
            "events",
            "events_loaded",
            {"event_count": len(result.items), "event_types": dict(by_category)},
        )
        return result

    def select_event(self, event: EventRecord) -> None:
        self._set("selected_event", event)
        self._sessions.track_event_view(event.id, event.name, event.category.value)

    def update_search_term(self, search_term: str) -> None:
        self._set("search_term", search_term)
        if search_term:
            results = self.current_events
            self._sessions.track_search(search_term, results.total_count if results else 0)

    def update_event_type(self, event_type: str) -> None:
        self._set("event_type", event_type)
        self._sessions.track_event(
            SessionEventType.FILTER_APPLIED, "events", "filter_event_type", {"event_type": event_type}
        )

    def set_loading(self, is_loading: bool) -> None:
        self._set("is_loading", is_loading)
        if is_loading:
            self.clear_error()

    def set_error(self, error_message: str | None) -> None:
        self._set("error_message", error_message)
        if error_message:
            session = self.current_session
            page = session.current_page if session and session.current_page else "unknown"
            self._sessions.track_event(
                SessionEventType.ERROR, page, "error_occurred", {"error_message": error_message}
            )

    def clear_error(self) -> None:
        self._set("error_message", None)

    def add_to_cart(self, event: EventRecord) -> None:
        self._sessions.add_to_cart(event.id, event.name, event.price.amount)
        self._refresh("cart")

    def remove_from_cart(self, event_id: int) -> None:
        self._sessions.remove_from_cart(event_id)
        self._refresh("cart")

    def clear_cart(self) -> None:
        self._sessions.clear_cart()
        self._refresh("cart")

    def update_preferences(self, preferences: UserPreferences) -> None:
        self._sessions.update_preferences(preferences)
        self._refresh("preferences")

    def save_preference(self, key: str, value: Any) -> None:
        self._sessions.set_session_value(key, value)
        self._refresh("preferences")

    def get_preference(self, key: str, default: Any = None, cast: Callable[[Any], Any] | None = None) -> Any:
        session = self.current_session
        if session is None or key not in session.session_data:
            return default
        value = session.session_data[key]
        if cast is None:
            return value
        try:
            return cast(value)
        except (TypeError, ValueError):
            return default

    def register(self, event_id: int, registration: Registration) -> bool:
        """Register for an event, recording the outcome in the session.

        Failures are reported through error_message rather than raised.
        """
        try:
            self._events.register_attendee(event_id, registration)
        except (EventNotFoundError, CapacityExceededError) as exc:
            logger.info("Registration for event %s failed: %s", event_id, exc)
            self.set_error(exc.message)
            self._sessions.track_registration(event_id, False)
            return False
        self._sessions.track_registration(event_id, True)
        return True
