"""Django ORM implementations of the catalog and attendee stores."""

from collections.abc import Iterable
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from eventease import models
from eventease.domain import (
    AttendanceStatus,
    AttendeeRecord,
    Capacity,
    EventCategory,
    EventRecord,
    Money,
    Registration,
)
from eventease.stores.interfaces import AttendeeStore, EventStore


def _to_event(row: models.Event) -> EventRecord:
    return EventRecord(
        id=row.id,
        name=row.name,
        description=row.description,
        date=row.date,
        location=row.location,
        price=Money(Decimal(row.price)),
        capacity=Capacity(row.capacity),
        current_registrations=row.current_registrations,
        category=EventCategory(row.category),
        organizer=row.organizer,
        tags=tuple(row.tags),
        is_active=row.is_active,
        image_url=row.image_url,
    )


def _to_registration(row: models.Registration) -> Registration:
    return Registration(
        id=row.id,
        event_id=row.event_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        phone=row.phone,
        company=row.company,
        position=row.position,
        special_requests=row.special_requests,
        registered_at=row.registered_at,
        is_confirmed=row.is_confirmed,
    )


def _to_attendee(row: models.Attendee) -> AttendeeRecord:
    return AttendeeRecord(
        id=row.id,
        event_id=row.event_id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        company=row.company,
        job_title=row.job_title,
        registration_date=row.registration_date,
        check_in_time=row.check_in_time,
        check_out_time=row.check_out_time,
        status=AttendanceStatus(row.status),
        is_vip=row.is_vip,
        special_requirements=row.special_requirements,
        notes=row.notes,
    )


def _attendee_fields(attendee: AttendeeRecord) -> dict:
    return {
        "event_id": attendee.event_id,
        "name": attendee.name,
        "email": attendee.email,
        "phone": attendee.phone,
        "company": attendee.company,
        "job_title": attendee.job_title,
        "registration_date": attendee.registration_date,
        "check_in_time": attendee.check_in_time,
        "check_out_time": attendee.check_out_time,
        "status": attendee.status.value,
        "is_vip": attendee.is_vip,
        "special_requirements": attendee.special_requirements,
        "notes": attendee.notes,
    }


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def list_events(self) -> list[EventRecord]:
        return [_to_event(row) for row in models.Event.objects.order_by("id")]

    def get_event(self, event_id: int) -> EventRecord | None:
        row = models.Event.objects.filter(pk=event_id).first()
        return _to_event(row) if row else None

    def add_registration(self, registration: Registration) -> Registration | None:
        with transaction.atomic():
            # Capacity is re-checked by the UPDATE itself, so two concurrent
            # registrations cannot both take the last seat.
            updated = models.Event.objects.filter(
                pk=registration.event_id,
                is_active=True,
                current_registrations__lt=F("capacity"),
            ).update(current_registrations=F("current_registrations") + 1)
            if not updated:
                return None
            row = models.Registration.objects.create(
                event_id=registration.event_id,
                first_name=registration.first_name,
                last_name=registration.last_name,
                email=registration.email,
                phone=registration.phone,
                company=registration.company,
                position=registration.position,
                special_requests=registration.special_requests,
                registered_at=registration.registered_at or timezone.now(),
                is_confirmed=registration.is_confirmed,
            )
        return _to_registration(row)

    def registrations_for_event(self, event_id: int) -> list[Registration]:
        rows = models.Registration.objects.filter(event_id=event_id).order_by("id")
        return [_to_registration(row) for row in rows]

    def load_events(self, events: Iterable[EventRecord]) -> int:
        """Bulk insert events, keeping their IDs. Used for seeding."""
        rows = [
            models.Event(
                id=event.id,
                name=event.name,
                description=event.description,
                date=event.date,
                location=event.location,
                image_url=event.image_url,
                price=event.price.amount,
                capacity=event.capacity.value,
                current_registrations=event.current_registrations,
                category=event.category.value,
                organizer=event.organizer,
                tags=list(event.tags),
                is_active=event.is_active,
            )
            for event in events
        ]
        return len(models.Event.objects.bulk_create(rows))


class DjangoAttendeeStore(AttendeeStore):
    """Database-backed attendee store using Django ORM."""

    def list_attendees(self) -> list[AttendeeRecord]:
        return [_to_attendee(row) for row in models.Attendee.objects.order_by("id")]

    def get_attendee(self, attendee_id: int) -> AttendeeRecord | None:
        row = models.Attendee.objects.filter(pk=attendee_id).first()
        return _to_attendee(row) if row else None

    def add_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord:
        row = models.Attendee.objects.create(**_attendee_fields(attendee))
        return _to_attendee(row)

    def save_attendee(self, attendee: AttendeeRecord) -> AttendeeRecord | None:
        if attendee.id is None:
            return None
        updated = models.Attendee.objects.filter(pk=attendee.id).update(
            **_attendee_fields(attendee)
        )
        return attendee if updated else None

    def delete_attendee(self, attendee_id: int) -> bool:
        deleted, _ = models.Attendee.objects.filter(pk=attendee_id).delete()
        return deleted > 0
