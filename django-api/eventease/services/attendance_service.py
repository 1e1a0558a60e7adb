"""Attendance ledger: attendee CRUD, check-in/out transitions and reporting."""

import calendar
import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from django.utils import timezone

from eventease.domain import (
    AttendanceReport,
    AttendanceStats,
    AttendanceStatus,
    AttendeeRecord,
    CheckInRequest,
    CheckOutRequest,
    DateRange,
    Rating,
)
from eventease.domain.errors import AttendeeNotFoundError, ValidationFailureError
from eventease.domain.models import ATTENDED_STATUSES
from eventease.services.event_service import EventService
from eventease.stores.interfaces import AttendeeStore

logger = logging.getLogger(__name__)

TOP_LIMIT = 10


def _one_month_before(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def average_stay(attendees: Iterable[AttendeeRecord]) -> timedelta | None:
    """Mean of check-out minus check-in, or None when no attendee has both."""
    durations = [
        a.check_out_time - a.check_in_time
        for a in attendees
        if a.check_in_time is not None and a.check_out_time is not None
    ]
    if not durations:
        return None
    total = sum(durations, timedelta())
    return timedelta(microseconds=(total // timedelta(microseconds=1)) // len(durations))


class AttendanceService:
    """Service for attendee tracking."""

    def __init__(
        self,
        store: AttendeeStore,
        events: EventService,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._events = events
        self._clock = clock

    def _find(self, attendee_id: int, event_id: int) -> AttendeeRecord:
        attendee = self._store.get_attendee(attendee_id)
        if attendee is None or attendee.event_id != event_id:
            raise AttendeeNotFoundError(attendee_id, event_id)
        return attendee

    def attendees_for_event(self, event_id: int) -> list[AttendeeRecord]:
        attendees = [a for a in self._store.list_attendees() if a.event_id == event_id]
        return sorted(attendees, key=lambda a: a.name)

    def get_attendee(self, attendee_id: int) -> AttendeeRecord:
        attendee = self._store.get_attendee(attendee_id)
        if attendee is None:
            raise AttendeeNotFoundError(attendee_id)
        return attendee

    def register_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord:
        return self._store.add_attendee(
            replace(
                attendee,
                id=None,
                registration_date=self._clock(),
                status=AttendanceStatus.REGISTERED,
            )
        )

    def update_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord:
        saved = self._store.save_attendee(attendee)
        if saved is None:
            raise AttendeeNotFoundError(attendee.id or 0)
        return saved

    def delete_attendee(self, attendee_id: int) -> bool:
        return self._store.delete_attendee(attendee_id)

    def check_in(self, request: CheckInRequest) -> AttendeeRecord:
        """Mark an attendee as arrived.

        Prior status is not checked: checking in twice overwrites the first
        check-in time.

        Raises:
            AttendeeNotFoundError: If no attendee matches both IDs.
        """
        attendee = self._find(request.attendee_id, request.event_id)
        updated = replace(
            attendee,
            check_in_time=request.check_in_time or self._clock(),
            status=AttendanceStatus.CHECKED_IN,
            notes=request.notes or attendee.notes,
        )
        return self.update_attendee(updated)

    def check_out(self, request: CheckOutRequest) -> AttendeeRecord:
        """Mark an attendee as departed, appending any feedback to notes.

        Raises:
            ValidationFailureError: If the rating is outside 1-5.
            AttendeeNotFoundError: If no attendee matches both IDs.
        """
        if request.rating is not None:
            try:
                Rating(request.rating)
            except ValueError as exc:
                raise ValidationFailureError(str(exc)) from exc

        attendee = self._find(request.attendee_id, request.event_id)
        notes = attendee.notes
        if request.feedback:
            notes = f"{notes or ''}\nFeedback: {request.feedback}"
            if request.rating is not None:
                notes += f" (Rating: {request.rating}/5)"
        updated = replace(
            attendee,
            check_out_time=request.check_out_time or self._clock(),
            status=AttendanceStatus.CHECKED_OUT,
            notes=notes,
        )
        return self.update_attendee(updated)

    def bulk_check_in(self, attendee_ids: Iterable[int], event_id: int) -> bool:
        """Check in the listed attendees that are still Registered.

        Others are skipped. Returns True if at least one was updated.
        """
        check_in_time = self._clock()
        updated = 0
        for attendee_id in attendee_ids:
            attendee = self._store.get_attendee(attendee_id)
            if (
                attendee is None
                or attendee.event_id != event_id
                or attendee.status is not AttendanceStatus.REGISTERED
            ):
                continue
            self._store.save_attendee(
                replace(attendee, check_in_time=check_in_time, status=AttendanceStatus.CHECKED_IN)
            )
            updated += 1
        logger.info("Bulk check-in for event %s updated %d attendees", event_id, updated)
        return updated > 0

    def _transition_from_registered(self, attendee_id: int, status: AttendanceStatus) -> bool:
        attendee = self._store.get_attendee(attendee_id)
        if attendee is None or attendee.status is not AttendanceStatus.REGISTERED:
            return False
        self._store.save_attendee(replace(attendee, status=status))
        return True

    def mark_no_show(self, attendee_id: int) -> bool:
        return self._transition_from_registered(attendee_id, AttendanceStatus.NO_SHOW)

    def cancel(self, attendee_id: int) -> bool:
        return self._transition_from_registered(attendee_id, AttendanceStatus.CANCELLED)

    def vip_attendees(self, event_id: int) -> list[AttendeeRecord]:
        return [a for a in self.attendees_for_event(event_id) if a.is_vip]

    def search_attendees(self, term: str) -> list[AttendeeRecord]:
        term = (term or "").strip().lower()
        if not term:
            return []
        matches = [
            a
            for a in self._store.list_attendees()
            if any(term in text.lower() for text in (a.name, a.email, a.company, a.job_title))
        ]
        return sorted(matches, key=lambda a: a.name)

    def attendees_by_status(self, status: AttendanceStatus) -> list[AttendeeRecord]:
        matches = [a for a in self._store.list_attendees() if a.status is status]
        return sorted(matches, key=lambda a: a.name)

    def stats(self, event_id: int) -> AttendanceStats:
        attendees = [a for a in self._store.list_attendees() if a.event_id == event_id]
        event = self._events.find_event(event_id)
        statuses = Counter(a.status for a in attendees)
        attended = [a for a in attendees if a.status in ATTENDED_STATUSES]
        return AttendanceStats(
            event_id=event_id,
            event_name=event.name if event else "Unknown Event",
            total_registered=len(attendees),
            checked_in=len(attended),
            checked_out=statuses[AttendanceStatus.CHECKED_OUT],
            no_shows=statuses[AttendanceStatus.NO_SHOW],
            cancelled=statuses[AttendanceStatus.CANCELLED],
            average_stay_duration=average_stay(attended),
        )

    def report(self, period: DateRange | None = None) -> AttendanceReport:
        """Aggregate attendance over active events dated within `period`.

        Defaults to the month up to now.
        """
        now = self._clock()
        period = period or DateRange(start=_one_month_before(now), end=now)
        events = [e for e in self._events.list_events() if e.date in period]
        event_ids = {e.id for e in events}
        event_stats = tuple(self.stats(e.id) for e in events)
        attendees = [a for a in self._store.list_attendees() if a.event_id in event_ids]

        overall = (
            sum(s.attendance_rate for s in event_stats) / len(event_stats) if event_stats else 0.0
        )
        return AttendanceReport(
            generated_at=now,
            period=period,
            event_stats=event_stats,
            total_events=len(events),
            total_attendees=len(attendees),
            overall_attendance_rate=overall,
            top_attendees=self._top_attendees(attendees),
            attendance_by_company=self._by_company(attendees),
            attendance_by_day_of_week=self._by_day_of_week(
                attendees, {e.id: e.date for e in events}
            ),
        )

    @staticmethod
    def _top_attendees(attendees: list[AttendeeRecord]) -> tuple[AttendeeRecord, ...]:
        first_seen: dict[tuple[str, str], AttendeeRecord] = {}
        counts: Counter[tuple[str, str]] = Counter()
        for attendee in attendees:
            key = (attendee.name, attendee.email)
            first_seen.setdefault(key, attendee)
            counts[key] += 1
        ranked = sorted(first_seen, key=lambda key: counts[key], reverse=True)
        return tuple(first_seen[key] for key in ranked[:TOP_LIMIT])

    @staticmethod
    def _by_company(attendees: list[AttendeeRecord]) -> dict[str, int]:
        counts = Counter(a.company for a in attendees if a.company)
        return dict(counts.most_common(TOP_LIMIT))

    @staticmethod
    def _by_day_of_week(
        attendees: list[AttendeeRecord], event_dates: dict[int, datetime]
    ) -> dict[str, int]:
        counts = Counter(
            event_dates[a.event_id].weekday()
            for a in attendees
            if a.status in ATTENDED_STATUSES and a.event_id in event_dates
        )
        return {calendar.day_name[day]: counts[day] for day in sorted(counts)}

    def dashboard(self) -> dict[str, Any]:
        now = self._clock()
        today = now.date()
        week_start = now.replace(hour=0, minute=0, second=0, microsecond=0) - timedelta(
            days=(today.weekday() + 1) % 7
        )
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        attendees = self._store.list_attendees()
        checked_in = [a for a in attendees if a.check_in_time is not None]
        attended = sum(1 for a in attendees if a.status in ATTENDED_STATUSES)
        recent = sorted(
            (a for a in checked_in if a.check_in_time >= now - timedelta(hours=24)),
            key=lambda a: a.check_in_time,
            reverse=True,
        )
        upcoming = [
            e for e in self._events.list_events() if now <= e.date <= now + timedelta(days=7)
        ]
        return {
            "total_attendees": len(attendees),
            "today_check_ins": sum(1 for a in checked_in if a.check_in_time.date() == today),
            "weekly_check_ins": sum(1 for a in checked_in if a.check_in_time >= week_start),
            "monthly_check_ins": sum(1 for a in checked_in if a.check_in_time >= month_start),
            "average_attendance_rate": attended / len(attendees) * 100 if attendees else 0.0,
            "upcoming_events": len(upcoming),
            "vip_attendees": sum(1 for a in attendees if a.is_vip),
            "recent_check_ins": recent[:TOP_LIMIT],
        }
