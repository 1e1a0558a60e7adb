from django.urls import path

from eventease.handlers import (
    AttendanceDashboardView,
    AttendanceReportView,
    AttendanceStatsView,
    AttendeeDetailView,
    AttendeeSearchView,
    BulkCheckInView,
    CancelView,
    CartItemView,
    CheckInView,
    CheckOutView,
    EventAttendeesView,
    EventDetailView,
    EventListView,
    HealthView,
    NoShowView,
    RegistrationView,
    SessionView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<int:event_id>", EventDetailView.as_view(), name="event-detail"),
    path(
        "events/<int:event_id>/registrations",
        RegistrationView.as_view(),
        name="event-registrations",
    ),
    path("events/<int:event_id>/attendees", EventAttendeesView.as_view(), name="event-attendees"),
    path(
        "events/<int:event_id>/attendees/bulk-check-in",
        BulkCheckInView.as_view(),
        name="bulk-check-in",
    ),
    path(
        "events/<int:event_id>/attendees/<int:attendee_id>/check-in",
        CheckInView.as_view(),
        name="check-in",
    ),
    path(
        "events/<int:event_id>/attendees/<int:attendee_id>/check-out",
        CheckOutView.as_view(),
        name="check-out",
    ),
    path("events/<int:event_id>/attendance", AttendanceStatsView.as_view(), name="event-attendance"),
    path("attendees", AttendeeSearchView.as_view(), name="attendee-search"),
    path("attendees/<int:attendee_id>", AttendeeDetailView.as_view(), name="attendee-detail"),
    path("attendees/<int:attendee_id>/no-show", NoShowView.as_view(), name="attendee-no-show"),
    path("attendees/<int:attendee_id>/cancel", CancelView.as_view(), name="attendee-cancel"),
    path("attendance/report", AttendanceReportView.as_view(), name="attendance-report"),
    path("attendance/dashboard", AttendanceDashboardView.as_view(), name="attendance-dashboard"),
    path("health", HealthView.as_view(), name="health"),
    path("session", SessionView.as_view(), name="session"),
    path("session/cart/<int:event_id>", CartItemView.as_view(), name="session-cart"),
]
