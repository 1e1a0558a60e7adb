"""Serializers for transforming domain models to API responses and back."""

from rest_framework import serializers

from eventease.domain import (
    AttendanceStatus,
    AttendeeRecord,
    EventCategory,
    Registration,
)
from eventease.stores.documents import EnumField, ShoppingCartDocument


class EventSerializer(serializers.Serializer):
    """Serializer for EventRecord domain model."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
    date = serializers.DateTimeField()
    location = serializers.CharField()
    image_url = serializers.CharField()
    price = serializers.DecimalField(source="price.amount", max_digits=10, decimal_places=2)
    capacity = serializers.IntegerField(source="capacity.value")
    current_registrations = serializers.IntegerField()
    spots_left = serializers.IntegerField()
    category = EnumField(EventCategory)
    organizer = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    is_active = serializers.BooleanField()


class PagedEventsSerializer(serializers.Serializer):
    """One page of events plus paging metadata."""

    items = EventSerializer(many=True)
    total_count = serializers.IntegerField()
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    has_next_page = serializers.BooleanField()
    has_previous_page = serializers.BooleanField()
    is_first_page = serializers.BooleanField()
    is_last_page = serializers.BooleanField()
    start_item = serializers.IntegerField()
    end_item = serializers.IntegerField()


class RegistrationSerializer(serializers.Serializer):
    """Validates registration input and renders stored registrations."""

    id = serializers.IntegerField(read_only=True)
    event_id = serializers.IntegerField(read_only=True)
    first_name = serializers.CharField(max_length=50)
    last_name = serializers.CharField(max_length=50)
    email = serializers.EmailField(max_length=100)
    phone = serializers.RegexField(r"^[0-9+()\-. ]*$", max_length=50, required=False, allow_blank=True)
    company = serializers.CharField(max_length=100, required=False, allow_blank=True)
    position = serializers.CharField(max_length=100, required=False, allow_blank=True)
    special_requests = serializers.CharField(max_length=500, required=False, allow_blank=True)
    registered_at = serializers.DateTimeField(read_only=True)
    is_confirmed = serializers.BooleanField(read_only=True)

    def to_domain(self, event_id: int) -> Registration:
        return Registration(event_id=event_id, **self.validated_data)


class AttendeeSerializer(serializers.Serializer):
    """Attendee read and write representation."""

    id = serializers.IntegerField(read_only=True)
    event_id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=150)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    company = serializers.CharField(max_length=100, required=False, allow_blank=True)
    job_title = serializers.CharField(max_length=100, required=False, allow_blank=True)
    registration_date = serializers.DateTimeField(read_only=True)
    check_in_time = serializers.DateTimeField(read_only=True)
    check_out_time = serializers.DateTimeField(read_only=True)
    status = EnumField(AttendanceStatus, read_only=True)
    is_vip = serializers.BooleanField(required=False, default=False)
    special_requirements = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    notes = serializers.CharField(read_only=True, allow_null=True)

    def to_domain(self, event_id: int) -> AttendeeRecord:
        return AttendeeRecord(event_id=event_id, **self.validated_data)


class CheckInSerializer(serializers.Serializer):
    """Optional check-in time and notes."""

    check_in_time = serializers.DateTimeField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class CheckOutSerializer(serializers.Serializer):
    """Optional check-out time, feedback and rating."""

    check_out_time = serializers.DateTimeField(required=False)
    feedback = serializers.CharField(required=False, allow_blank=True)
    # Range is enforced by the service so the error carries its domain code.
    rating = serializers.IntegerField(required=False, allow_null=True)


class BulkCheckInSerializer(serializers.Serializer):
    """Attendee ids to check in together."""

    attendee_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class AttendanceStatsSerializer(serializers.Serializer):
    """Per-event attendance counts and rates."""

    event_id = serializers.IntegerField()
    event_name = serializers.CharField()
    total_registered = serializers.IntegerField()
    checked_in = serializers.IntegerField()
    checked_out = serializers.IntegerField()
    no_shows = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    attendance_rate = serializers.FloatField()
    completion_rate = serializers.FloatField()
    average_stay_duration = serializers.DurationField(allow_null=True)


class AttendanceReportSerializer(serializers.Serializer):
    """Attendance report over a date range."""

    generated_at = serializers.DateTimeField()
    start = serializers.DateTimeField(source="period.start")
    end = serializers.DateTimeField(source="period.end")
    event_stats = AttendanceStatsSerializer(many=True)
    total_events = serializers.IntegerField()
    total_attendees = serializers.IntegerField()
    overall_attendance_rate = serializers.FloatField()
    top_attendees = AttendeeSerializer(many=True)
    attendance_by_company = serializers.DictField(child=serializers.IntegerField())
    attendance_by_day_of_week = serializers.DictField(child=serializers.IntegerField())


class ReportRangeSerializer(serializers.Serializer):
    """Query parameters for the attendance report."""

    start = serializers.DateTimeField(required=False)
    end = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        if ("start" in attrs) != ("end" in attrs):
            raise serializers.ValidationError("start and end must be given together")
        if "start" in attrs and attrs["end"] < attrs["start"]:
            raise serializers.ValidationError("end must not precede start")
        return attrs


class DashboardSerializer(serializers.Serializer):
    """Summary figures for the attendance dashboard."""

    total_attendees = serializers.IntegerField()
    today_check_ins = serializers.IntegerField()
    weekly_check_ins = serializers.IntegerField()
    monthly_check_ins = serializers.IntegerField()
    average_attendance_rate = serializers.FloatField()
    upcoming_events = serializers.IntegerField()
    vip_attendees = serializers.IntegerField()
    recent_check_ins = AttendeeSerializer(many=True)


class HealthCheckResultSerializer(serializers.Serializer):
    """Output for one health probe."""

    name = serializers.CharField()
    status = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    duration = serializers.DurationField()
    data = serializers.DictField()


class HealthStatusSerializer(serializers.Serializer):
    """Output for the health endpoint."""

    status = serializers.CharField()
    timestamp = serializers.DateTimeField()
    response_time = serializers.DurationField()
    checks = HealthCheckResultSerializer(many=True)
    details = serializers.DictField()


class SessionAnalyticsSerializer(serializers.Serializer):
    """Derived analytics for the visitor session."""

    session_id = serializers.CharField()
    total_page_views = serializers.IntegerField()
    unique_events_viewed = serializers.IntegerField()
    search_queries = serializers.IntegerField()
    registration_attempts = serializers.IntegerField()
    completed_registrations = serializers.IntegerField()
    first_activity = serializers.DateTimeField()
    last_activity = serializers.DateTimeField()
    converted_to_registration = serializers.BooleanField()
    cart_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    entry_page = serializers.CharField(allow_blank=True)
    exit_page = serializers.CharField(allow_blank=True)
    most_viewed_event_type = serializers.CharField(allow_blank=True)
    popular_search_terms = serializers.ListField(child=serializers.CharField())


class SessionSerializer(serializers.Serializer):
    """Visitor session summary."""

    session_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    last_activity = serializers.DateTimeField()
    page_views = serializers.IntegerField()
    search_history = serializers.ListField(child=serializers.CharField())
    cart = ShoppingCartDocument()
    cart_total = serializers.DecimalField(source="cart.total_amount", max_digits=12, decimal_places=2)
    cart_items = serializers.IntegerField(source="cart.total_items")
