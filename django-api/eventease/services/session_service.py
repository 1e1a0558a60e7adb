"""Visitor session tracking persisted to a key/value store.

The tracked session moves between three states: absent (nothing loaded),
active, and expired (no activity for longer than the timeout). An expired
session is never revived; the next access replaces it with a fresh one.

Every session write goes through update_session(), which stamps activity,
persists the whole document and sends session_updated. Storage failures are
logged and recorded as Error session events; the service keeps working in
memory. An update that produces a value the document cannot hold is rolled
back, so memory never holds state that storage could not accept.

State changes are serialized by a reentrant lock, so a KeepAlive thread can
tick the same tracker that request code writes to.
"""

import copy
import logging
import threading
from collections import Counter
from collections.abc import Callable, Mapping
from dataclasses import asdict, fields
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from django.utils import timezone

from eventease.domain import (
    CartItem,
    SessionAnalytics,
    SessionEvent,
    SessionEventType,
    UserPreferences,
    UserSession,
)
from eventease.domain.errors import PersistenceFailureError
from eventease.domain.session import SESSION_TIMEOUT
from eventease.signals import event_tracked, session_updated
from eventease.stores import documents
from eventease.stores.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

SESSION_KEY = "eventease_session"
EVENTS_KEY = "eventease_session_events"
SEARCH_HISTORY_LIMIT = 20
EVENT_LOG_LIMIT = 100
KEEP_ALIVE_SECONDS = 60


class SessionTrackingService:
    """Tracks one visitor session and persists it through a KeyValueStore."""

    def __init__(
        self,
        storage: KeyValueStore,
        clock: Callable[[], datetime] = timezone.now,
        timeout: timedelta = SESSION_TIMEOUT,
        search_history_limit: int = SEARCH_HISTORY_LIMIT,
        event_log_limit: int = EVENT_LOG_LIMIT,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self._timeout = timeout
        self._search_history_limit = search_history_limit
        self._event_log_limit = event_log_limit
        self._session: UserSession | None = None
        self._events: list[SessionEvent] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> str:
        if self._session is None:
            return "absent"
        return "expired" if self.is_expired else "active"

    @property
    def is_expired(self) -> bool:
        return self._session is None or self._session.is_expired(self._clock(), self._timeout)

    def _new_session(self) -> UserSession:
        now = self._clock()
        return UserSession(created_at=now, last_activity=now)

    def initialize(self) -> UserSession:
        """Resume the persisted session if it is still live, else start a new one."""
        with self._lock:
            try:
                existing = documents.load_session(self._storage.get(SESSION_KEY))
                history = documents.load_events(self._storage.get(EVENTS_KEY)) if existing else []
            except PersistenceFailureError as exc:
                logger.warning("Could not load stored session: %s", exc)
                self._session = self._new_session()
                self._events = []
                self._record(
                    SessionEventType.ERROR, "session", "initialization_failed", {"error": exc.message}
                )
                return self._session

            if existing is not None and not existing.is_expired(self._clock(), self._timeout):
                existing.last_activity = self._clock()
                self._session = existing
                self._events = [e for e in history if e.session_id == existing.session_id]
                self._save_session()
                self._record(SessionEventType.NAVIGATION, "session", "resumed")
                logger.debug("Resumed session %s", existing.session_id)
                return existing

            self._session = self._new_session()
            self._events = []
            self._save_session()
            self._record(SessionEventType.NAVIGATION, "session", "started")
            logger.debug("Started session %s", self._session.session_id)
            return self._session

    def get_current_session(self) -> UserSession:
        """Return the live session, replacing an expired one first."""
        with self._lock:
            if self._session is None:
                return self.initialize()
            if self.is_expired:
                logger.info("Session %s expired, starting a new one", self._session.session_id)
                self.clear_session()
                return self.initialize()
            return self._session

    def update_session(self, update: Callable[[UserSession], None]) -> UserSession:
        """Apply an in-place update, stamp activity, persist and notify.

        If the updated session cannot be serialized the update is undone and
        recorded as a save_failed error; nothing is raised.
        """
        with self._lock:
            session = self.get_current_session()
            before = copy.deepcopy(session)
            update(session)
            session.last_activity = self._clock()
            try:
                document = documents.dump_session(session)
            except PersistenceFailureError as exc:
                _restore(session, before)
                self._persistence_failed("save_failed", exc)
                return session
            self._write(SESSION_KEY, document, "save_failed")
            session_updated.send(sender=self, session=session)
            return session

    def track_event(
        self,
        event_type: SessionEventType,
        page: str,
        action: str,
        data: Mapping[str, Any] | None = None,
    ) -> SessionEvent:
        with self._lock:
            self.get_current_session()
            return self._record(event_type, page, action, data)

    def _record(
        self,
        event_type: SessionEventType,
        page: str,
        action: str,
        data: Mapping[str, Any] | None = None,
    ) -> SessionEvent:
        session = self._session
        event = SessionEvent(
            session_id=session.session_id,
            timestamp=self._clock(),
            event_type=event_type,
            page=page,
            action=action,
            data=dict(data or {}),
            user_id=session.user_id,
        )
        self._events.append(event)
        try:
            document = documents.dump_events(self._events[-self._event_log_limit :])
        except PersistenceFailureError as exc:
            # Unstorable data would poison every later write of the log.
            self._events.pop()
            self._persistence_failed("events_save_failed", exc)
            return event
        self._write(EVENTS_KEY, document, "events_save_failed")
        session.last_activity = event.timestamp
        self._save_session()
        event_tracked.send(sender=self, event=event)
        return event

    def track_page_view(self, page: str) -> None:
        def visit(session: UserSession) -> None:
            session.previous_page = session.current_page
            session.current_page = page
            session.page_views += 1

        self.update_session(visit)
        self.track_event(SessionEventType.PAGE_VIEW, page, "view")

    def track_event_view(self, event_id: int, event_name: str, category: str | None = None) -> None:
        def view(session: UserSession) -> None:
            if event_id not in session.viewed_events:
                session.viewed_events.append(event_id)

        self.update_session(view)
        data = {"event_id": event_id, "event_name": event_name}
        if category:
            data["category"] = category
        self.track_event(SessionEventType.EVENT_VIEW, "event_details", "view", data)

    def track_search(self, search_term: str, result_count: int) -> None:
        def remember(session: UserSession) -> None:
            history = session.search_history
            if search_term and search_term not in history:
                history.append(search_term)
                while len(history) > self._search_history_limit:
                    history.pop(0)

        self.update_session(remember)
        self.track_event(
            SessionEventType.SEARCH,
            "events",
            "search",
            {"search_term": search_term, "result_count": result_count},
        )

    def track_registration(self, event_id: int, successful: bool) -> None:
        self.track_event(
            SessionEventType.REGISTRATION,
            "event_details",
            "registration_success" if successful else "registration_failed",
            {"event_id": event_id, "successful": successful},
        )

    def add_to_cart(
        self,
        event_id: int,
        event_name: str,
        price: Decimal,
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        def add(session: UserSession) -> None:
            now = self._clock()
            item = session.cart.find(event_id)
            if item is not None:
                item.quantity += 1
            else:
                session.cart.items.append(
                    CartItem(
                        event_id=event_id,
                        event_name=event_name,
                        price=price,
                        date_added=now,
                        metadata=dict(metadata or {}),
                    )
                )
            session.cart.last_updated = now

        self.update_session(add)
        self.track_event(
            SessionEventType.ADD_TO_CART,
            "event_details",
            "add_to_cart",
            {"event_id": event_id, "event_name": event_name, "price": str(price)},
        )

    def remove_from_cart(self, event_id: int) -> None:
        def remove(session: UserSession) -> None:
            item = session.cart.find(event_id)
            if item is not None:
                session.cart.items.remove(item)
                session.cart.last_updated = self._clock()

        self.update_session(remove)
        self.track_event(
            SessionEventType.REMOVE_FROM_CART, "cart", "remove_from_cart", {"event_id": event_id}
        )

    def clear_cart(self) -> None:
        def empty(session: UserSession) -> None:
            session.cart.items.clear()
            session.cart.last_updated = self._clock()

        self.update_session(empty)
        self.track_event(SessionEventType.REMOVE_FROM_CART, "cart", "clear_cart")

    def update_preferences(self, preferences: UserPreferences) -> None:
        def apply(session: UserSession) -> None:
            session.preferences = preferences

        self.update_session(apply)
        self.track_event(
            SessionEventType.PREFERENCE_CHANGED,
            "preferences",
            "update",
            {"preferences": asdict(preferences)},
        )

    def set_session_value(self, key: str, value: Any) -> None:
        def store(session: UserSession) -> None:
            session.session_data[key] = value

        self.update_session(store)

    def session_events(self) -> list[SessionEvent]:
        session_id = self.get_current_session().session_id
        return [e for e in self._events if e.session_id == session_id]

    def analytics(self) -> SessionAnalytics:
        session = self.get_current_session()
        events = self.session_events()

        def of_type(event_type: SessionEventType) -> list[SessionEvent]:
            return [e for e in events if e.event_type is event_type]

        page_views = of_type(SessionEventType.PAGE_VIEW)
        registrations = of_type(SessionEventType.REGISTRATION)
        completed = [e for e in registrations if e.data.get("successful") is True]
        categories = Counter(
            e.data["category"] for e in of_type(SessionEventType.EVENT_VIEW) if e.data.get("category")
        )
        return SessionAnalytics(
            session_id=session.session_id,
            total_page_views=len(page_views),
            unique_events_viewed=len(session.viewed_events),
            search_queries=len(of_type(SessionEventType.SEARCH)),
            registration_attempts=len(registrations),
            completed_registrations=len(completed),
            first_activity=session.created_at,
            last_activity=session.last_activity,
            converted_to_registration=bool(completed),
            cart_value=session.cart.total_amount,
            entry_page=page_views[0].page if page_views else "",
            exit_page=page_views[-1].page if page_views else "",
            most_viewed_event_type=categories.most_common(1)[0][0] if categories else "",
            popular_search_terms=tuple(session.search_history[:5]),
        )

    def clear_session(self) -> None:
        """Log out the current session and remove it from storage."""
        with self._lock:
            if self._session is not None:
                self._record(SessionEventType.LOGOUT, "session", "cleared")
            self._session = None
            self._events = []
            for key in (SESSION_KEY, EVENTS_KEY):
                try:
                    self._storage.remove(key)
                except PersistenceFailureError as exc:
                    logger.warning("Could not remove %s from storage: %s", key, exc)

    def extend_session(self) -> None:
        with self._lock:
            if self._session is None:
                return
            self._session.last_activity = self._clock()
            self._save_session()

    def tick(self) -> bool:
        """Keep-alive step. Extends only a live session; returns whether it did."""
        with self._lock:
            if self._session is None or self.is_expired:
                return False
            self.extend_session()
            return True

    def _save_session(self) -> None:
        try:
            document = documents.dump_session(self._session)
        except PersistenceFailureError as exc:
            self._persistence_failed("save_failed", exc)
            return
        self._write(SESSION_KEY, document, "save_failed")

    def _write(self, key: str, document: str, action: str) -> None:
        try:
            self._storage.set(key, document)
        except PersistenceFailureError as exc:
            self._persistence_failed(action, exc)

    def _persistence_failed(self, action: str, exc: PersistenceFailureError) -> None:
        # Kept in memory only; persisting it would hit the same failure.
        logger.warning("Session storage unavailable (%s): %s", action, exc)
        self._events.append(
            SessionEvent(
                session_id=self._session.session_id,
                timestamp=self._clock(),
                event_type=SessionEventType.ERROR,
                page="session",
                action=action,
                data={"error": exc.message},
                user_id=self._session.user_id,
            )
        )


def _restore(session: UserSession, snapshot: UserSession) -> None:
    for f in fields(session):
        setattr(session, f.name, getattr(snapshot, f.name))


class KeepAlive:
    """Calls SessionTrackingService.tick() on a fixed interval in a daemon thread.

    Meant for long-lived trackers held in process; the HTTP views build a
    tracker per request, so the served app does not start one.
    """

    def __init__(self, service: SessionTrackingService, interval: float = KEEP_ALIVE_SECONDS) -> None:
        self._service = service
        self._interval = interval
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="session-keep-alive", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._service.tick()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
