"""Visitor session models.

Unlike the catalog models these are mutable: the session service applies
in-place updates and persists the whole document afterwards.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any

SESSION_TIMEOUT = timedelta(minutes=30)


class SessionEventType(Enum):
    """Kinds of tracked session activity."""

    PAGE_VIEW = "PageView"
    EVENT_VIEW = "EventView"
    SEARCH = "Search"
    REGISTRATION = "Registration"
    ADD_TO_CART = "AddToCart"
    REMOVE_FROM_CART = "RemoveFromCart"
    FILTER_APPLIED = "FilterApplied"
    PREFERENCE_CHANGED = "PreferenceChanged"
    LOGIN = "Login"
    LOGOUT = "Logout"
    ERROR = "Error"
    DOWNLOAD = "Download"
    SHARE = "Share"
    NAVIGATION = "Navigation"


@dataclass
class CartItem:
    """A cart line; quantity grows when the same event is added again."""

    event_id: int
    event_name: str
    price: Decimal
    quantity: int = 1
    date_added: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class ShoppingCart:
    """Cart of events; totals are derived from the items."""

    items: list[CartItem] = field(default_factory=list)
    last_updated: datetime | None = None

    @property
    def total_amount(self) -> Decimal:
        return sum((item.price * item.quantity for item in self.items), Decimal("0"))

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def find(self, event_id: int) -> CartItem | None:
        return next((item for item in self.items if item.event_id == event_id), None)


@dataclass
class UserPreferences:
    """Visitor preferences stored with the session."""

    preferred_event_type: str = ""
    preferred_location: str = ""
    max_price: Decimal = Decimal("1000")
    preferred_page_size: int = 10
    email_notifications: bool = True
    theme: str = "light"
    favorite_event_types: list[str] = field(default_factory=list)
    favorite_locations: list[str] = field(default_factory=list)


@dataclass
class UserSession:
    """One visitor's tracked interaction context."""

    created_at: datetime
    last_activity: datetime
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str | None = None
    user_email: str | None = None
    user_name: str | None = None
    is_authenticated: bool = False
    session_data: dict[str, Any] = field(default_factory=dict)
    viewed_events: list[int] = field(default_factory=list)
    search_history: list[str] = field(default_factory=list)
    current_page: str | None = None
    previous_page: str | None = None
    page_views: int = 0
    preferences: UserPreferences = field(default_factory=UserPreferences)
    cart: ShoppingCart = field(default_factory=ShoppingCart)

    def is_expired(self, now: datetime, timeout: timedelta = SESSION_TIMEOUT) -> bool:
        return now - self.last_activity > timeout

    def duration(self, now: datetime) -> timedelta:
        return now - self.created_at


@dataclass(frozen=True)
class SessionEvent:
    """Immutable record of one tracked interaction."""

    session_id: str
    timestamp: datetime
    event_type: SessionEventType
    page: str
    action: str
    data: dict[str, Any] = field(default_factory=dict)
    user_id: str | None = None
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass(frozen=True)
class SessionAnalytics:
    """Figures derived from a session and its event log."""

    session_id: str
    total_page_views: int
    unique_events_viewed: int
    search_queries: int
    registration_attempts: int
    completed_registrations: int
    first_activity: datetime
    last_activity: datetime
    converted_to_registration: bool
    cart_value: Decimal
    entry_page: str = ""
    exit_page: str = ""
    most_viewed_event_type: str = ""
    popular_search_terms: tuple[str, ...] = ()
