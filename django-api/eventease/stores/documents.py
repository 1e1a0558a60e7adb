"""JSON documents for the persisted session and session event log.

There is no schema versioning: a document that does not parse or does not
validate is reported as absent and the caller starts fresh.
"""

import json
import logging
from decimal import InvalidOperation

from django.core.serializers.json import DjangoJSONEncoder
from rest_framework import serializers

from eventease.domain import (
    CartItem,
    SessionEvent,
    SessionEventType,
    ShoppingCart,
    UserPreferences,
    UserSession,
)
from eventease.domain.errors import PersistenceFailureError

logger = logging.getLogger(__name__)


class EnumField(serializers.ChoiceField):
    """Choice field that round-trips a Python Enum through its value."""

    def __init__(self, enum, **kwargs) -> None:
        self.enum = enum
        super().__init__(choices=[member.value for member in enum], **kwargs)

    def to_representation(self, value):
        return value.value

    def to_internal_value(self, data):
        return self.enum(super().to_internal_value(data))


def _text(**kwargs) -> serializers.CharField:
    return serializers.CharField(allow_blank=True, trim_whitespace=False, **kwargs)


def _optional_text() -> serializers.CharField:
    return _text(allow_null=True, required=False)


class CartItemDocument(serializers.Serializer):
    """Stored form of one cart line."""

    event_id = serializers.IntegerField()
    event_name = _text()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField(min_value=1)
    date_added = serializers.DateTimeField(allow_null=True, required=False)
    metadata = serializers.DictField(child=_text(), required=False)


class ShoppingCartDocument(serializers.Serializer):
    """Stored form of the cart."""

    items = CartItemDocument(many=True)
    last_updated = serializers.DateTimeField(allow_null=True, required=False)


class UserPreferencesDocument(serializers.Serializer):
    """Stored form of the visitor's preferences."""

    preferred_event_type = _text()
    preferred_location = _text()
    max_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    preferred_page_size = serializers.IntegerField()
    email_notifications = serializers.BooleanField()
    theme = _text()
    favorite_event_types = serializers.ListField(child=_text())
    favorite_locations = serializers.ListField(child=_text())


class UserSessionDocument(serializers.Serializer):
    """Whole-session document written under the session key."""

    session_id = serializers.CharField()
    created_at = serializers.DateTimeField()
    last_activity = serializers.DateTimeField()
    user_id = _optional_text()
    user_email = _optional_text()
    user_name = _optional_text()
    is_authenticated = serializers.BooleanField(required=False)
    session_data = serializers.DictField(required=False)
    viewed_events = serializers.ListField(child=serializers.IntegerField())
    search_history = serializers.ListField(child=_text())
    current_page = _optional_text()
    previous_page = _optional_text()
    page_views = serializers.IntegerField(min_value=0)
    preferences = UserPreferencesDocument()
    cart = ShoppingCartDocument()


class SessionEventDocument(serializers.Serializer):
    """One entry of the stored session event log."""

    event_id = serializers.CharField()
    session_id = serializers.CharField()
    timestamp = serializers.DateTimeField()
    event_type = EnumField(SessionEventType)
    page = _text()
    action = _text()
    data = serializers.DictField(required=False)
    user_id = _optional_text()


def _parse(text: str | None):
    if not text:
        return None
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        logger.debug("Stored document is not valid JSON")
        return None


def _dump(key: str, document: serializers.BaseSerializer) -> str:
    try:
        return json.dumps(document.data, cls=DjangoJSONEncoder)
    except (TypeError, ValueError, InvalidOperation) as exc:
        raise PersistenceFailureError(key, f"{type(exc).__name__}: {exc}") from exc


def dump_session(session: UserSession) -> str:
    """Serialize a session; raises PersistenceFailureError if it cannot be stored."""
    return _dump("session", UserSessionDocument(session))


def load_session(text: str | None) -> UserSession | None:
    """Rebuild a session from its stored document, or None if unusable."""
    document = UserSessionDocument(data=_parse(text))
    if not document.is_valid():
        if text:
            logger.info("Discarding incompatible session document: %s", document.errors)
        return None
    data = dict(document.validated_data)
    cart = data.pop("cart")
    data["cart"] = ShoppingCart(
        items=[CartItem(**item) for item in cart["items"]],
        last_updated=cart.get("last_updated"),
    )
    data["preferences"] = UserPreferences(**data.pop("preferences"))
    return UserSession(**data)


def dump_events(events: list[SessionEvent]) -> str:
    return _dump("session_events", SessionEventDocument(events, many=True))


def load_events(text: str | None) -> list[SessionEvent]:
    document = SessionEventDocument(data=_parse(text), many=True)
    if not document.is_valid():
        if text:
            logger.info("Discarding incompatible session event log")
        return []
    return [SessionEvent(**item) for item in document.validated_data]
