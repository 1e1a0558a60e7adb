"""Unit tests for StateManagementService.

Run with: pytest tests/test_state.py -v
"""

import gc
from decimal import Decimal

import pytest

from eventease.domain import (
    EventCategory,
    EventQuery,
    PageRequest,
    Registration,
    SessionEventType,
    UserPreferences,
)
from eventease.domain.errors import PersistenceFailureError
from eventease.services import EventService, StateManagementService
from eventease.signals import state_changed
from eventease.stores.memory import InMemoryEventStore


class UnavailableCatalog(InMemoryEventStore):
    def list_events(self):
        raise PersistenceFailureError("events", "offline")


@pytest.fixture
def state(session_service, event_service) -> StateManagementService:
    return StateManagementService(session_service, event_service)


@pytest.fixture
def changes(state):
    """Record every notification as (field, value)."""
    seen: list[tuple[str, object]] = []
    unsubscribers = [
        state.subscribe(field, lambda value, field=field: seen.append((field, value)))
        for field in (
            "current_session",
            "current_events",
            "selected_event",
            "search_term",
            "event_type",
            "is_loading",
            "error_message",
            "cart",
            "preferences",
        )
    ]
    yield seen
    for unsubscribe in unsubscribers:
        unsubscribe()


def _fields(changes, name):
    return [value for field, value in changes if field == name]


def _tracked(session_service, event_type):
    return [e for e in session_service.session_events() if e.event_type is event_type]


class TestNotifications:
    """Tests for change-only notification."""

    def test_initialize_publishes_session_cart_and_preferences(self, state, changes):
        session = state.initialize()
        assert _fields(changes, "current_session") == [session]
        assert _fields(changes, "cart") == [session.cart]
        assert _fields(changes, "preferences") == [session.preferences]

    def test_setting_the_same_value_notifies_once(self, state, changes):
        state.update_search_term("gala")
        state.update_search_term("gala")
        assert _fields(changes, "search_term") == ["gala"]

    def test_unsubscribe_stops_notifications(self, state):
        seen = []
        unsubscribe = state.subscribe("event_type", seen.append)
        state.update_event_type("Gala")
        unsubscribe()
        state.update_event_type("Social")
        assert seen == ["Gala"]

    def test_subscribers_only_hear_their_own_instance(self, state, session_service, event_service):
        other = StateManagementService(session_service, event_service)
        seen = []
        unsubscribe = state.subscribe("search_term", seen.append)
        try:
            other.update_search_term("elsewhere")
        finally:
            unsubscribe()
        assert seen == []

    def test_subscriptions_end_with_the_aggregator(self, session_service, event_service):
        before = len(state_changed.receivers)
        other = StateManagementService(session_service, event_service)
        unsubscribe = other.subscribe("search_term", lambda value: None)
        assert len(state_changed.receivers) == before + 1

        del other
        gc.collect()
        assert len(state_changed.receivers) == before
        unsubscribe()

    def test_loading_clears_the_error(self, state, changes):
        state.set_error("boom")
        state.set_loading(True)
        assert state.error_message is None
        assert _fields(changes, "error_message") == ["boom", None]

    def test_session_writes_flow_into_state(self, state, session_service):
        state.initialize()
        session_service.track_page_view("events")
        assert state.current_session.current_page == "events"


class TestOperations:
    def test_load_events_sets_results_and_tracks_counts(self, state, changes, session_service):
        result = state.load_events(
            EventQuery(categories=frozenset({EventCategory.GALA, EventCategory.SOCIAL})),
            PageRequest(page_size=5),
        )
        assert state.current_events == result
        assert [e.id for e in result.items] == [2, 3]
        assert _fields(changes, "is_loading") == [True, False]

        loaded = [e for e in _tracked(session_service, SessionEventType.NAVIGATION) if e.action == "events_loaded"]
        assert loaded[0].data == {"event_count": 2, "event_types": {"Social": 1, "Gala": 1}}

    def test_load_events_failure_sets_error(self, session_service):
        state = StateManagementService(session_service, EventService(UnavailableCatalog()))
        assert state.load_events() is None
        assert not state.is_loading
        assert state.error_message == "Storage operation failed for events"
        errors = _tracked(session_service, SessionEventType.ERROR)
        assert errors[-1].page == "unknown"

    def test_select_event_tracks_a_view(self, state, event_service, session_service):
        event = event_service.get_event(3)
        state.select_event(event)
        assert state.selected_event == event
        assert state.current_session.viewed_events == [3]
        viewed = _tracked(session_service, SessionEventType.EVENT_VIEW)
        assert viewed[0].data["category"] == "Gala"

    def test_search_term_is_tracked_with_result_count(self, state, session_service):
        state.load_events(EventQuery(search="gala"))
        state.update_search_term("gala")
        searches = _tracked(session_service, SessionEventType.SEARCH)
        assert searches[0].data == {"search_term": "gala", "result_count": 1}

    def test_cart_operations_always_notify(self, state, changes, event_service):
        event = event_service.get_event(1)
        state.add_to_cart(event)
        state.add_to_cart(event)
        state.remove_from_cart(1)
        assert len(_fields(changes, "cart")) == 3
        assert state.cart.items == []

    def test_preferences(self, state, changes):
        state.update_preferences(UserPreferences(theme="dark"))
        assert state.preferences.theme == "dark"
        state.save_preference("page_size", "25")
        assert state.get_preference("page_size", cast=int) == 25
        assert state.get_preference("missing", default="x") == "x"
        state.save_preference("broken", "many")
        assert state.get_preference("broken", default=10, cast=int) == 10
        assert len(_fields(changes, "preferences")) == 3

    def test_unstorable_preference_is_not_kept(self, state):
        state.initialize()
        state.save_preference("tags", {"vip"})
        state.update_preferences(UserPreferences(max_price=Decimal("1e12")))
        assert state.get_preference("tags") is None
        assert state.preferences == UserPreferences()

    def test_register_success_and_failure(self, state, session_service):
        registration = Registration(event_id=0, first_name="Ada", last_name="L", email="ada@example.com")
        assert state.register(1, registration)
        assert not state.register(6, registration)
        assert state.error_message == "Event is full or not accepting registrations"
        actions = [e.action for e in _tracked(session_service, SessionEventType.REGISTRATION)]
        assert actions == ["registration_success", "registration_failed"]
