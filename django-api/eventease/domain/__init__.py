from eventease.domain.models import (
    AttendanceReport,
    AttendanceStats,
    AttendanceStatus,
    AttendeeRecord,
    CheckInRequest,
    CheckOutRequest,
    EventCategory,
    EventQuery,
    EventRecord,
    PagedResult,
    Registration,
)
from eventease.domain.session import (
    CartItem,
    SessionAnalytics,
    SessionEvent,
    SessionEventType,
    ShoppingCart,
    UserPreferences,
    UserSession,
)
from eventease.domain.value_objects import (
    Capacity,
    DateRange,
    Money,
    PageRequest,
    Rating,
    SortDirection,
    SortField,
)

__all__ = [
    "AttendanceReport",
    "AttendanceStats",
    "AttendanceStatus",
    "AttendeeRecord",
    "CheckInRequest",
    "CheckOutRequest",
    "EventCategory",
    "EventQuery",
    "EventRecord",
    "PagedResult",
    "Registration",
    "CartItem",
    "SessionAnalytics",
    "SessionEvent",
    "SessionEventType",
    "ShoppingCart",
    "UserPreferences",
    "UserSession",
    "Capacity",
    "DateRange",
    "Money",
    "PageRequest",
    "Rating",
    "SortDirection",
    "SortField",
]
