"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from eventease import dependencies
from eventease.domain import (
    AttendanceStatus,
    CheckInRequest,
    CheckOutRequest,
    DateRange,
    EventCategory,
    EventQuery,
    PageRequest,
    SortDirection,
    SortField,
)
from eventease.domain.errors import DomainError, ErrorCode
from eventease.domain.models import CORPORATE_CATEGORIES, SOCIAL_CATEGORIES
from eventease.handlers.serializers import (
    AttendanceReportSerializer,
    AttendanceStatsSerializer,
    AttendeeSerializer,
    BulkCheckInSerializer,
    CheckInSerializer,
    CheckOutSerializer,
    DashboardSerializer,
    EventSerializer,
    HealthStatusSerializer,
    PagedEventsSerializer,
    RegistrationSerializer,
    ReportRangeSerializer,
    SessionAnalyticsSerializer,
    SessionSerializer,
)
from eventease.services import SessionTrackingService, StateManagementService

ERROR_STATUS = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ATTENDEE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
}

CATEGORY_GROUPS = {"corporate": CORPORATE_CATEGORIES, "social": SOCIAL_CATEGORIES}

VISITOR_HEADER = "HTTP_X_VISITOR_ID"


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def invalid_response(errors) -> Response:
    return Response(
        {"code": ErrorCode.VALIDATION_FAILED.value, "message": "Invalid input", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _int_param(request: Request, name: str, default: int) -> int:
    try:
        return int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default


def _event_query(request: Request) -> EventQuery | Response:
    params = request.query_params
    categories = None
    if "category" in params:
        try:
            categories = frozenset({EventCategory(params["category"])})
        except ValueError:
            return invalid_response({"category": ["Unknown category"]})
    elif "group" in params:
        categories = CATEGORY_GROUPS.get(params["group"].lower())
        if categories is None:
            return invalid_response({"group": ["Expected corporate or social"]})
    return EventQuery(categories=categories, search=params.get("search"))


class EventListView(APIView):
    """Handler for GET /api/events"""

    def get(self, request: Request) -> Response:
        query = _event_query(request)
        if isinstance(query, Response):
            return query
        page = PageRequest(
            page=_int_param(request, "page", 1),
            page_size=_int_param(request, "page_size", 10),
            sort_by=SortField.parse(request.query_params.get("sort_by")),
            direction=SortDirection.parse(request.query_params.get("sort_direction")),
        )
        result = dependencies.get_event_service().query(query, page)
        return Response(PagedEventsSerializer(result).data)


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: int) -> Response:
        try:
            event = dependencies.get_event_service().get_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(EventSerializer(event).data)


class RegistrationView(APIView):
    """Handler for GET/POST /api/events/{event_id}/registrations"""

    def get(self, request: Request, event_id: int) -> Response:
        try:
            registrations = dependencies.get_event_service().registrations_for_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(RegistrationSerializer(registrations, many=True).data)

    def post(self, request: Request, event_id: int) -> Response:
        serializer = RegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        try:
            registration = dependencies.get_event_service().register_attendee(
                event_id, serializer.to_domain(event_id)
            )
        except DomainError as exc:
            return error_response(exc)
        dependencies.get_app_logger().log_user_action(
            "register", f"event {event_id}", registration.email
        )
        return Response(RegistrationSerializer(registration).data, status=status.HTTP_201_CREATED)


class EventAttendeesView(APIView):
    """Handler for GET/POST /api/events/{event_id}/attendees"""

    def get(self, request: Request, event_id: int) -> Response:
        attendance = dependencies.get_attendance_service()
        if request.query_params.get("vip") in ("1", "true"):
            attendees = attendance.vip_attendees(event_id)
        else:
            attendees = attendance.attendees_for_event(event_id)
        return Response(AttendeeSerializer(attendees, many=True).data)

    def post(self, request: Request, event_id: int) -> Response:
        serializer = AttendeeSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        try:
            dependencies.get_event_service().get_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        attendee = dependencies.get_attendance_service().register_attendee(
            serializer.to_domain(event_id)
        )
        return Response(AttendeeSerializer(attendee).data, status=status.HTTP_201_CREATED)


class CheckInView(APIView):
    """Handler for POST /api/events/{event_id}/attendees/{attendee_id}/check-in"""

    def post(self, request: Request, event_id: int, attendee_id: int) -> Response:
        serializer = CheckInSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        try:
            attendee = dependencies.get_attendance_service().check_in(
                CheckInRequest(attendee_id=attendee_id, event_id=event_id, **serializer.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        dependencies.get_app_logger().log_user_action("check_in", f"attendee {attendee_id}")
        return Response(AttendeeSerializer(attendee).data)


class CheckOutView(APIView):
    """Handler for POST /api/events/{event_id}/attendees/{attendee_id}/check-out"""

    def post(self, request: Request, event_id: int, attendee_id: int) -> Response:
        serializer = CheckOutSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        try:
            attendee = dependencies.get_attendance_service().check_out(
                CheckOutRequest(attendee_id=attendee_id, event_id=event_id, **serializer.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        dependencies.get_app_logger().log_user_action("check_out", f"attendee {attendee_id}")
        return Response(AttendeeSerializer(attendee).data)


class BulkCheckInView(APIView):
    """Handler for POST /api/events/{event_id}/attendees/bulk-check-in"""

    def post(self, request: Request, event_id: int) -> Response:
        serializer = BulkCheckInSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        updated = dependencies.get_attendance_service().bulk_check_in(
            serializer.validated_data["attendee_ids"], event_id
        )
        return Response({"updated": updated})


class AttendanceStatsView(APIView):
    """Handler for GET /api/events/{event_id}/attendance"""

    def get(self, request: Request, event_id: int) -> Response:
        stats = dependencies.get_attendance_service().stats(event_id)
        return Response(AttendanceStatsSerializer(stats).data)


class AttendeeSearchView(APIView):
    """Handler for GET /api/attendees?search=&status="""

    def get(self, request: Request) -> Response:
        attendance = dependencies.get_attendance_service()
        if "status" in request.query_params:
            try:
                wanted = AttendanceStatus(request.query_params["status"])
            except ValueError:
                return invalid_response({"status": ["Unknown status"]})
            attendees = attendance.attendees_by_status(wanted)
        else:
            attendees = attendance.search_attendees(request.query_params.get("search", ""))
        return Response(AttendeeSerializer(attendees, many=True).data)


class AttendeeDetailView(APIView):
    """Handler for GET/DELETE /api/attendees/{attendee_id}"""

    def get(self, request: Request, attendee_id: int) -> Response:
        try:
            attendee = dependencies.get_attendance_service().get_attendee(attendee_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(AttendeeSerializer(attendee).data)

    def delete(self, request: Request, attendee_id: int) -> Response:
        if not dependencies.get_attendance_service().delete_attendee(attendee_id):
            return Response(status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NoShowView(APIView):
    """Handler for POST /api/attendees/{attendee_id}/no-show"""

    def post(self, request: Request, attendee_id: int) -> Response:
        updated = dependencies.get_attendance_service().mark_no_show(attendee_id)
        return Response({"updated": updated})


class CancelView(APIView):
    """Handler for POST /api/attendees/{attendee_id}/cancel"""

    def post(self, request: Request, attendee_id: int) -> Response:
        updated = dependencies.get_attendance_service().cancel(attendee_id)
        return Response({"updated": updated})


class AttendanceReportView(APIView):
    """Handler for GET /api/attendance/report?start=&end="""

    def get(self, request: Request) -> Response:
        serializer = ReportRangeSerializer(data=request.query_params)
        if not serializer.is_valid():
            return invalid_response(serializer.errors)
        bounds = serializer.validated_data
        period = DateRange(bounds["start"], bounds["end"]) if bounds else None
        report = dependencies.get_attendance_service().report(period)
        return Response(AttendanceReportSerializer(report).data)


class AttendanceDashboardView(APIView):
    """Handler for GET /api/attendance/dashboard"""

    def get(self, request: Request) -> Response:
        return Response(DashboardSerializer(dependencies.get_attendance_service().dashboard()).data)


class HealthView(APIView):
    """Handler for GET /api/health"""

    def get(self, request: Request) -> Response:
        if not dependencies.get_config().get_bool("monitoring.enable_health_checks", True):
            return Response(status=status.HTTP_404_NOT_FOUND)
        health = dependencies.get_health_service().get_health_status()
        return Response(
            HealthStatusSerializer(health).data,
            status=status.HTTP_200_OK if health.is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )


def _visitor_sessions(request: Request) -> SessionTrackingService:
    visitor = request.META.get(VISITOR_HEADER, "anonymous")
    return dependencies.build_session_service(prefix=f"visitor:{visitor}:")


def _visitor_state(request: Request) -> StateManagementService:
    state = StateManagementService(_visitor_sessions(request), dependencies.get_event_service())
    state.initialize()
    return state


class SessionView(APIView):
    """Handler for GET /api/session (keyed by the X-Visitor-Id header)"""

    def get(self, request: Request) -> Response:
        sessions = _visitor_sessions(request)
        session = sessions.get_current_session()
        return Response(
            {
                "session": SessionSerializer(session).data,
                "analytics": SessionAnalyticsSerializer(sessions.analytics()).data,
                "server_time": timezone.now(),
            }
        )


class CartItemView(APIView):
    """Handler for POST/DELETE /api/session/cart/{event_id}"""

    def post(self, request: Request, event_id: int) -> Response:
        try:
            event = dependencies.get_event_service().get_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        state = _visitor_state(request)
        state.add_to_cart(event)
        return Response(SessionSerializer(state.current_session).data, status=status.HTTP_201_CREATED)

    def delete(self, request: Request, event_id: int) -> Response:
        state = _visitor_state(request)
        state.remove_from_cart(event_id)
        return Response(SessionSerializer(state.current_session).data)
