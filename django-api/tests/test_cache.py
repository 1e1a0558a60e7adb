"""Tests for the key/value backings and the stored session documents.

Run with: pytest tests/test_cache.py -v
"""

import json
from decimal import Decimal

import pytest

from conftest import T0
from eventease.domain import CartItem, SessionEvent, SessionEventType, UserSession
from eventease.domain.errors import ErrorCode, PersistenceFailureError
from eventease.stores import documents
from eventease.stores.cache_store import CacheKeyValueStore
from eventease.stores.memory import InMemoryKeyValueStore


class TestCacheKeyValueStore:
    """Tests for the cache-backed key/value store."""

    def test_set_get_remove(self):
        store = CacheKeyValueStore()
        store.set("greeting", "hello")
        assert store.get("greeting") == "hello"
        store.remove("greeting")
        assert store.get("greeting") is None

    def test_prefixes_isolate_visitors(self):
        alice = CacheKeyValueStore(prefix="visitor:alice:")
        bob = CacheKeyValueStore(prefix="visitor:bob:")
        alice.set("eventease_session", "a")
        assert bob.get("eventease_session") is None
        assert alice.get("eventease_session") == "a"

    def test_backend_errors_become_persistence_failures(self):
        store = CacheKeyValueStore(alias="does-not-exist")
        with pytest.raises(PersistenceFailureError) as info:
            store.set("eventease_session", "{}")
        assert info.value.code is ErrorCode.PERSISTENCE_FAILED
        assert info.value.key == "eventease_session"


class TestInMemoryKeyValueStore:
    def test_remove_missing_key_is_a_no_op(self):
        store = InMemoryKeyValueStore()
        store.remove("nothing")
        assert store.get("nothing") is None


class TestSessionDocuments:
    """Tests for the persisted JSON form of sessions and event logs."""

    def test_session_survives_a_round_trip(self):
        session = UserSession(created_at=T0, last_activity=T0, current_page="events")
        session.search_history.append("gala")
        session.viewed_events.extend([3, 1])
        session.session_data["theme_override"] = "dark"
        session.cart.items.append(
            CartItem(event_id=3, event_name="Annual Gala", price=Decimal("150.00"), quantity=2)
        )

        restored = documents.load_session(documents.dump_session(session))

        assert restored == session
        assert restored.cart.total_amount == Decimal("300.00")

    @pytest.mark.parametrize(
        "text",
        [None, "", "not json", json.dumps({"session_id": "abc"}), json.dumps([1, 2])],
    )
    def test_unusable_session_documents_load_as_absent(self, text):
        assert documents.load_session(text) is None

    def test_event_log_round_trip_keeps_types(self):
        event = SessionEvent(
            session_id="s1",
            timestamp=T0,
            event_type=SessionEventType.SEARCH,
            page="events",
            action="search",
            data={"search_term": "gala", "result_count": 2},
        )
        restored = documents.load_events(documents.dump_events([event]))
        assert restored == [event]

    def test_invalid_event_log_loads_as_empty(self):
        assert documents.load_events(json.dumps([{"event_type": "Teleport"}])) == []
