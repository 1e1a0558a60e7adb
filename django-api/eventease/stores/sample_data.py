"""Deterministic sample catalog and attendance data for the demo backing."""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from eventease.domain import (
    AttendanceStatus,
    AttendeeRecord,
    Capacity,
    EventCategory,
    EventRecord,
    Money,
)

DEFAULT_SEED = 42


@dataclass(frozen=True)
class _Template:
    """Base attributes shared by the sample events generated from it."""

    name: str
    category: EventCategory
    base_price: Decimal
    capacity: int
    location: str
    color: str


TEMPLATES = (
    _Template("Tech Conference", EventCategory.CONFERENCE, Decimal("299.00"), 500,
              "Seattle Convention Center, Seattle, WA", "007bff"),
    _Template("Team Building Retreat", EventCategory.TEAM_BUILDING, Decimal("450.00"), 100,
              "Mountain View Resort, Colorado", "28a745"),
    _Template("Spring Gala", EventCategory.GALA, Decimal("200.00"), 250,
              "Grand Ballroom, Ritz Carlton Downtown", "dc3545"),
    _Template("Workshop Series", EventCategory.WORKSHOP, Decimal("150.00"), 50,
              "Innovation Hub, Austin, TX", "ffc107"),
    _Template("Networking Mixer", EventCategory.NETWORKING, Decimal("75.00"), 150,
              "Rooftop Lounge, Metropolitan Hotel", "17a2b8"),
    _Template("Wedding Showcase", EventCategory.WEDDING, Decimal("25.00"), 300,
              "Crystal Gardens Event Center", "e83e8c"),
    _Template("Corporate Meeting", EventCategory.CORPORATE, Decimal("500.00"), 200,
              "Business District Conference Center", "6c757d"),
    _Template("Social Gathering", EventCategory.SOCIAL, Decimal("50.00"), 120,
              "Community Center, Downtown", "20c997"),
)

ORGANIZERS = (
    "TechEvents Inc.", "EventEase Solutions", "Premium Events Co.",
    "Corporate Gatherings Ltd.", "Social Connections", "Elite Event Planners",
    "Innovation Events", "Luxury Occasions",
)
ADJECTIVES = (
    "Annual", "Exclusive", "Premium", "Elite", "Grand", "Professional",
    "Innovative", "Spectacular", "Ultimate", "Advanced",
)
YEARS = ("2025", "2026")

DESCRIPTIONS = {
    EventCategory.CONFERENCE: "Join industry leaders for cutting-edge discussions, networking opportunities, and keynote presentations from top innovators in the field.",
    EventCategory.TEAM_BUILDING: "A comprehensive team building experience featuring activities, leadership workshops, and collaborative challenges designed to strengthen team bonds.",
    EventCategory.GALA: "An exclusive black-tie event featuring fine dining, live entertainment, and networking in a luxurious setting.",
    EventCategory.WORKSHOP: "Hands-on learning experience with expert instructors, practical exercises, and valuable takeaways for professional development.",
    EventCategory.NETWORKING: "Connect with like-minded professionals across various industries in a relaxed atmosphere with refreshments and meaningful conversations.",
    EventCategory.WEDDING: "Discover the latest trends and vendor showcases with expert consultations and planning resources for your perfect day.",
    EventCategory.CORPORATE: "Professional business gathering focused on strategic planning, team alignment, and organizational objectives.",
    EventCategory.SOCIAL: "Community-focused social event bringing people together for fun, entertainment, and relationship building.",
}

TAGS = {
    EventCategory.CONFERENCE: ("Technology", "Innovation", "Networking", "Professional", "Learning"),
    EventCategory.TEAM_BUILDING: ("Team Building", "Leadership", "Corporate", "Collaboration", "Development"),
    EventCategory.GALA: ("Formal", "Elegant", "Networking", "Entertainment", "Luxury"),
    EventCategory.WORKSHOP: ("Education", "Hands-on", "Skills", "Training", "Professional"),
    EventCategory.NETWORKING: ("Networking", "Professional", "Business", "Connections", "Industry"),
    EventCategory.WEDDING: ("Wedding", "Planning", "Vendors", "Luxury", "Trends"),
    EventCategory.CORPORATE: ("Corporate", "Business", "Strategy", "Professional", "Meeting"),
    EventCategory.SOCIAL: ("Social", "Community", "Fun", "Entertainment", "Casual"),
}

COMPANIES = ("TechCorp", "Innovate Ltd", "Digital Solutions", "Future Systems", "Creative Agency", "Global Enterprises")
JOB_TITLES = ("Software Developer", "Project Manager", "Marketing Director", "Sales Manager", "CEO", "CTO", "Designer", "Analyst")
FIRST_NAMES = ("John", "Jane", "Mike", "Sarah", "David", "Lisa", "Tom", "Emily", "Chris", "Anna")
LAST_NAMES = ("Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez")


def generate_events(count: int, now: datetime, seed: int = DEFAULT_SEED) -> list[EventRecord]:
    """Generate `count` events dated within the year after `now`, in date order."""
    rng = random.Random(seed)
    events = []
    for event_id in range(1, count + 1):
        template = TEMPLATES[event_id % len(TEMPLATES)]
        adjective = rng.choice(ADJECTIVES)
        year = rng.choice(YEARS)
        organizer = rng.choice(ORGANIZERS)

        variation = Decimal(str(rng.uniform(-0.2, 0.2)))
        price = (template.base_price * (1 + variation)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        registrations = int(template.capacity * rng.uniform(0.3, 0.8))

        events.append(
            EventRecord(
                id=event_id,
                name=f"{adjective} {template.name} {year}",
                description=DESCRIPTIONS[template.category],
                date=now + timedelta(days=rng.randint(1, 364)),
                location=template.location,
                price=Money(price),
                capacity=Capacity(template.capacity),
                current_registrations=registrations,
                category=template.category,
                organizer=organizer,
                tags=TAGS[template.category],
                image_url=(
                    f"https://via.placeholder.com/400x250/{template.color}/ffffff"
                    f"?text={template.name.replace(' ', '+')}"
                ),
            )
        )
    return sorted(events, key=lambda e: e.date)


def generate_attendees(
    now: datetime, event_ids=range(1, 11), seed: int = DEFAULT_SEED
) -> list[AttendeeRecord]:
    """Generate attendees for the given events.

    The first five events are treated as already held, so their attendees
    carry check-in and check-out history.
    """
    rng = random.Random(seed)
    attendees = []
    for position, event_id in enumerate(event_ids):
        past_event = position < 5
        for _ in range(rng.randint(15, 39)):
            first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
            company = rng.choice(COMPANIES)
            check_in = check_out = None
            status = AttendanceStatus.REGISTERED
            if past_event:
                if rng.randint(1, 9) <= 8:
                    check_in = now - timedelta(days=rng.randint(1, 13)) + timedelta(hours=rng.randint(8, 9))
                    status = AttendanceStatus.CHECKED_IN
                    if rng.randint(1, 9) <= 7:
                        check_out = check_in + timedelta(hours=rng.randint(2, 7))
                        status = AttendanceStatus.CHECKED_OUT
                elif rng.randint(1, 9) <= 2:
                    status = AttendanceStatus.NO_SHOW
            attendees.append(
                AttendeeRecord(
                    event_id=event_id,
                    name=f"{first} {last}",
                    email=f"{first.lower()}.{last.lower()}@{company.lower().replace(' ', '')}.com",
                    phone=f"({rng.randint(100, 998)}) {rng.randint(100, 998)}-{rng.randint(1000, 9998)}",
                    company=company,
                    job_title=rng.choice(JOB_TITLES),
                    registration_date=now - timedelta(days=rng.randint(1, 29)),
                    check_in_time=check_in,
                    check_out_time=check_out,
                    status=status,
                    is_vip=rng.randint(1, 9) == 1,
                )
            )
    return attendees
