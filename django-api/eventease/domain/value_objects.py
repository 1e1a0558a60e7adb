"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


@dataclass(frozen=True)
class Rating:
    """Check-out rating on a 1-5 scale."""

    value: int

    def __post_init__(self) -> None:
        if not 1 <= self.value <= 5:
            raise ValueError("Rating must be between 1 and 5")


class SortField(Enum):
    """Catalog sort keys."""

    NAME = "name"
    DATE = "date"
    PRICE = "price"

    @classmethod
    def parse(cls, value: str | None) -> "SortField":
        """Unknown or empty sort keys fall back to date."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.DATE


class SortDirection(Enum):
    """Catalog sort direction."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        if (value or "").lower() in ("desc", "descending"):
            return cls.DESCENDING
        return cls.ASCENDING


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page window. Out-of-range values are clamped, not rejected."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: SortField = SortField.DATE
    direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self) -> None:
        object.__setattr__(self, "page", max(1, self.page))
        object.__setattr__(self, "page_size", max(1, min(MAX_PAGE_SIZE, self.page_size)))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class DateRange:
    """Inclusive datetime range."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Date range end must not precede its start")

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end
