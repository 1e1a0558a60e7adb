"""Domain models representing catalog and attendance state.

These are pure domain objects with no API input rules.
Django ORM models are in eventease/models.py (persistence layer).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Generic, TypeVar

from eventease.domain.value_objects import Capacity, DateRange, Money

T = TypeVar("T")


class EventCategory(Enum):
    """Catalog categories."""

    CORPORATE = "Corporate"
    SOCIAL = "Social"
    WEDDING = "Wedding"
    CONFERENCE = "Conference"
    WORKSHOP = "Workshop"
    NETWORKING = "Networking"
    GALA = "Gala"
    TEAM_BUILDING = "TeamBuilding"


CORPORATE_CATEGORIES = frozenset(
    {
        EventCategory.CORPORATE,
        EventCategory.CONFERENCE,
        EventCategory.WORKSHOP,
        EventCategory.NETWORKING,
        EventCategory.TEAM_BUILDING,
    }
)
SOCIAL_CATEGORIES = frozenset(
    {EventCategory.SOCIAL, EventCategory.GALA, EventCategory.WEDDING}
)


class AttendanceStatus(Enum):
    """Where an attendee is in the check-in lifecycle."""

    REGISTERED = "Registered"
    CHECKED_IN = "CheckedIn"
    CHECKED_OUT = "CheckedOut"
    NO_SHOW = "NoShow"
    CANCELLED = "Cancelled"


ATTENDED_STATUSES = frozenset({AttendanceStatus.CHECKED_IN, AttendanceStatus.CHECKED_OUT})


@dataclass(frozen=True)
class EventRecord:
    """Domain representation of a catalog event."""

    id: int
    name: str
    description: str
    date: datetime
    location: str
    price: Money
    capacity: Capacity
    current_registrations: int
    category: EventCategory
    organizer: str
    tags: tuple[str, ...] = ()
    is_active: bool = True
    image_url: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.current_registrations <= self.capacity.value:
            raise ValueError("Registrations must be between zero and capacity")

    @property
    def is_full(self) -> bool:
        return self.current_registrations >= self.capacity.value

    @property
    def spots_left(self) -> int:
        return self.capacity.value - self.current_registrations


@dataclass(frozen=True)
class Registration:
    """A confirmed seat on an event."""

    event_id: int
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    company: str = ""
    position: str = ""
    special_requests: str = ""
    registered_at: datetime | None = None
    is_confirmed: bool = False
    id: int | None = None


@dataclass(frozen=True)
class EventQuery:
    """Filter half of a catalog query. Both filters combine with AND."""

    categories: frozenset[EventCategory] | None = None
    search: str | None = None

    def matches(self, event: EventRecord) -> bool:
        if self.categories is not None and event.category not in self.categories:
            return False
        term = (self.search or "").strip().lower()
        if not term:
            return True
        haystacks = (event.name, event.description, event.location, *event.tags)
        return any(term in text.lower() for text in haystacks)


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of a larger result set plus the metadata to navigate it."""

    items: tuple[T, ...]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def is_first_page(self) -> bool:
        return self.page == 1

    @property
    def is_last_page(self) -> bool:
        return self.page == self.total_pages

    @property
    def start_item(self) -> int:
        return (self.page - 1) * self.page_size + 1

    @property
    def end_item(self) -> int:
        return min(self.page * self.page_size, self.total_count)

    @property
    def next_page(self) -> int:
        return self.page + 1 if self.has_next_page else self.page

    @property
    def previous_page(self) -> int:
        return self.page - 1 if self.has_previous_page else self.page


@dataclass(frozen=True)
class AttendeeRecord:
    """Domain representation of one attendee of one event."""

    event_id: int
    name: str
    email: str
    phone: str = ""
    company: str = ""
    job_title: str = ""
    registration_date: datetime | None = None
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None
    status: AttendanceStatus = AttendanceStatus.REGISTERED
    is_vip: bool = False
    special_requirements: str | None = None
    notes: str | None = None
    id: int | None = None


@dataclass(frozen=True)
class CheckInRequest:
    """Check-in of one attendee at one event."""

    attendee_id: int
    event_id: int
    check_in_time: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class CheckOutRequest:
    """Check-out with optional feedback and a 1 to 5 rating."""

    attendee_id: int
    event_id: int
    check_out_time: datetime | None = None
    feedback: str | None = None
    rating: int | None = None


@dataclass(frozen=True)
class AttendanceStats:
    """Aggregate attendance counts for one event."""

    event_id: int
    event_name: str
    total_registered: int
    checked_in: int
    checked_out: int
    no_shows: int
    cancelled: int
    average_stay_duration: timedelta | None = None

    @property
    def attendance_rate(self) -> float:
        if not self.total_registered:
            return 0.0
        return self.checked_in / self.total_registered * 100

    @property
    def completion_rate(self) -> float:
        if not self.checked_in:
            return 0.0
        return self.checked_out / self.checked_in * 100


@dataclass(frozen=True)
class AttendanceReport:
    """Attendance across the events in a date range."""

    generated_at: datetime
    period: DateRange
    event_stats: tuple[AttendanceStats, ...]
    total_events: int
    total_attendees: int
    overall_attendance_rate: float
    top_attendees: tuple[AttendeeRecord, ...] = ()
    attendance_by_company: dict[str, int] = field(default_factory=dict)
    attendance_by_day_of_week: dict[str, int] = field(default_factory=dict)
