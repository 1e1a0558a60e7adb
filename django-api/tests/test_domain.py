"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import T0, make_event
from eventease.domain import (
    Capacity,
    DateRange,
    EventCategory,
    EventQuery,
    Money,
    PagedResult,
    PageRequest,
    Rating,
    SortDirection,
    SortField,
    UserSession,
)
from eventease.domain.errors import CapacityExceededError, ErrorCode, EventNotFoundError


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("10.50")).amount == Decimal("10.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(Decimal("0")).amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("5"))) == "5.00"


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Capacity(-1)


class TestRating:
    @pytest.mark.parametrize("value", [1, 5])
    def test_rating_accepts_bounds(self, value):
        assert Rating(value).value == value

    @pytest.mark.parametrize("value", [0, 6])
    def test_rating_rejects_out_of_range(self, value):
        with pytest.raises(ValueError):
            Rating(value)


class TestEventRecord:
    """Tests for EventRecord construction invariants."""

    def test_registrations_cannot_exceed_capacity(self):
        with pytest.raises(ValueError):
            make_event(1, capacity=Capacity(2), current_registrations=3)

    def test_registrations_cannot_be_negative(self):
        with pytest.raises(ValueError):
            make_event(1, current_registrations=-1)

    def test_full_event_has_no_spots_left(self):
        event = make_event(1, capacity=Capacity(2), current_registrations=2)
        assert event.is_full
        assert event.spots_left == 0


class TestPageRequest:
    """Out-of-range paging values are clamped rather than rejected."""

    def test_page_below_one_is_clamped(self):
        assert PageRequest(page=0).page == 1
        assert PageRequest(page=-4).page == 1

    def test_page_size_is_clamped_to_bounds(self):
        assert PageRequest(page_size=0).page_size == 1
        assert PageRequest(page_size=500).page_size == 100

    def test_offset(self):
        assert PageRequest(page=3, page_size=10).offset == 20

    def test_sort_parsing_falls_back_to_date_ascending(self):
        assert SortField.parse("popularity") is SortField.DATE
        assert SortField.parse(None) is SortField.DATE
        assert SortField.parse("Price") is SortField.PRICE
        assert SortDirection.parse("desc") is SortDirection.DESCENDING
        assert SortDirection.parse("sideways") is SortDirection.ASCENDING


class TestPagedResult:
    """Tests for derived paging metadata."""

    def test_last_partial_page(self):
        result = PagedResult(items=(), total_count=25, page=3, page_size=10)
        assert result.total_pages == 3
        assert result.has_previous_page
        assert not result.has_next_page
        assert result.is_last_page
        assert result.start_item == 21
        assert result.end_item == 25
        assert result.next_page == 3
        assert result.previous_page == 2

    def test_first_page(self):
        result = PagedResult(items=(), total_count=25, page=1, page_size=10)
        assert result.is_first_page
        assert not result.has_previous_page
        assert result.has_next_page
        assert result.previous_page == 1

    def test_empty_result_has_zero_pages(self):
        result = PagedResult(items=(), total_count=0, page=1, page_size=10)
        assert result.total_pages == 0
        assert not result.has_next_page


class TestEventQuery:
    def test_search_is_case_insensitive_across_fields(self):
        event = make_event(1, name="Spring Fling", location="Rooftop", tags=("Networking",))
        assert EventQuery(search="spring").matches(event)
        assert EventQuery(search="ROOFTOP").matches(event)
        assert EventQuery(search="network").matches(event)
        assert not EventQuery(search="winter").matches(event)

    def test_blank_search_matches_everything(self):
        assert EventQuery(search="   ").matches(make_event(1))

    def test_category_and_search_combine(self):
        event = make_event(1, name="Spring Fling", category=EventCategory.SOCIAL)
        assert EventQuery(categories=frozenset({EventCategory.SOCIAL}), search="fling").matches(event)
        assert not EventQuery(categories=frozenset({EventCategory.GALA}), search="fling").matches(event)


class TestDateRange:
    def test_bounds_are_inclusive(self):
        period = DateRange(T0, T0 + timedelta(days=1))
        assert T0 in period
        assert T0 + timedelta(days=1) in period
        assert T0 - timedelta(seconds=1) not in period

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValueError):
            DateRange(T0, T0 - timedelta(days=1))


class TestUserSession:
    def test_expiry_is_strictly_after_timeout(self):
        session = UserSession(created_at=T0, last_activity=T0)
        assert not session.is_expired(T0 + timedelta(minutes=30))
        assert session.is_expired(T0 + timedelta(minutes=30, seconds=1))

    def test_duration(self):
        session = UserSession(created_at=T0, last_activity=T0)
        assert session.duration(T0 + timedelta(minutes=5)) == timedelta(minutes=5)


class TestDomainErrors:
    def test_errors_carry_code_and_ids(self):
        error = EventNotFoundError(7)
        assert error.code is ErrorCode.EVENT_NOT_FOUND
        assert error.event_id == 7
        assert str(error) == "EVENT_NOT_FOUND: Event not found"

    def test_errors_are_raisable(self):
        with pytest.raises(CapacityExceededError) as info:
            raise CapacityExceededError(3)
        assert info.value.code is ErrorCode.CAPACITY_EXCEEDED
