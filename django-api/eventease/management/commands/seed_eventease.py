"""Load generated sample events and attendees into the database."""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from eventease import models
from eventease.stores import sample_data
from eventease.stores.django_store import DjangoAttendeeStore, DjangoEventStore


class Command(BaseCommand):
    """Loads generated events and attendees into the database."""

    help = "Seed the catalog with sample events and attendees"

    def add_arguments(self, parser):
        parser.add_argument("--events", type=int, default=50)
        parser.add_argument("--seed", type=int, default=sample_data.DEFAULT_SEED)
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing events before seeding"
        )

    def handle(self, *args, **options):
        if options["events"] < 1:
            raise CommandError("--events must be at least 1")

        with transaction.atomic():
            if options["flush"]:
                models.Event.objects.all().delete()
            elif models.Event.objects.exists():
                raise CommandError("Events already exist; pass --flush to replace them")

            now = timezone.now()
            events = sample_data.generate_events(options["events"], now, options["seed"])
            loaded = DjangoEventStore().load_events(events)

            attendee_store = DjangoAttendeeStore()
            event_ids = [e.id for e in events[:10]]
            attendees = sample_data.generate_attendees(now, event_ids, seed=options["seed"])
            for attendee in attendees:
                attendee_store.add_attendee(attendee)

        self.stdout.write(
            self.style.SUCCESS(f"Loaded {loaded} events and {len(attendees)} attendees")
        )
