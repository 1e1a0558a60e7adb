from eventease.handlers.views import (
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

__all__ = [
    "AttendanceDashboardView",
    "AttendanceReportView",
    "AttendanceStatsView",
    "AttendeeDetailView",
    "AttendeeSearchView",
    "BulkCheckInView",
    "CancelView",
    "CartItemView",
    "CheckInView",
    "CheckOutView",
    "EventAttendeesView",
    "EventDetailView",
    "EventListView",
    "HealthView",
    "NoShowView",
    "RegistrationView",
    "SessionView",
]
