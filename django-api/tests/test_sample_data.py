"""Tests for the generated demo catalog.

Run with: pytest tests/test_sample_data.py -v
"""

from datetime import timedelta

from conftest import T0
from eventease.domain import AttendanceStatus
from eventease.stores import sample_data


class TestGenerateEvents:
    def test_same_seed_same_catalog(self):
        assert sample_data.generate_events(20, T0) == sample_data.generate_events(20, T0)
        assert sample_data.generate_events(20, T0, seed=1) != sample_data.generate_events(20, T0)

    def test_events_are_valid_and_in_date_order(self):
        events = sample_data.generate_events(50, T0)
        assert len(events) == 50
        assert sorted(e.id for e in events) == list(range(1, 51))
        assert [e.date for e in events] == sorted(e.date for e in events)
        for event in events:
            assert T0 < event.date <= T0 + timedelta(days=364)
            assert 0 <= event.current_registrations <= event.capacity.value
            assert event.image_url.startswith("https://")
            assert event.tags


class TestGenerateAttendees:
    def test_only_the_first_five_events_have_history(self):
        attendees = sample_data.generate_attendees(T0)
        assert {a.event_id for a in attendees} == set(range(1, 11))
        for attendee in attendees:
            if attendee.event_id > 5:
                assert attendee.status is AttendanceStatus.REGISTERED
                assert attendee.check_in_time is None

    def test_check_out_follows_check_in(self):
        for attendee in sample_data.generate_attendees(T0):
            if attendee.check_out_time is not None:
                assert attendee.status is AttendanceStatus.CHECKED_OUT
                assert attendee.check_out_time > attendee.check_in_time

    def test_attendee_counts_per_event(self):
        attendees = sample_data.generate_attendees(T0, event_ids=[7])
        assert 15 <= len(attendees) <= 39
