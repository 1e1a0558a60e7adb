"""Django signals for session and view-state change notifications.

session_updated: sent by SessionTrackingService after every session write.
    kwargs: session
event_tracked: sent by SessionTrackingService after a SessionEvent is logged.
    kwargs: event
state_changed: sent by StateManagementService when a view field changes.
    kwargs: field, value
"""

from django.dispatch import Signal

session_updated = Signal()
event_tracked = Signal()
state_changed = Signal()
