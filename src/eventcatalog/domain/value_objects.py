"""Domain primitives that enforce validity at creation time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

SUPPORTED_CURRENCIES: tuple[str, ...] = ("USD", "EUR", "EGP")

CATEGORY_NAME_MAX_LENGTH = 100


@dataclass(frozen=True)
class CategoryName:
    """Trimmed, non-empty category name."""

    value: str

    def __post_init__(self) -> None:
        trimmed = self.value.strip()
        if not trimmed:
            raise ValueError("Category name cannot be empty")
        if len(trimmed) > CATEGORY_NAME_MAX_LENGTH:
            raise ValueError(
                f"Category name cannot exceed {CATEGORY_NAME_MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", trimmed)

    def matches(self, other: str) -> bool:
        """Case-insensitive comparison against a raw name."""
        return self.value.casefold() == other.strip().casefold()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")
        currency = self.currency.strip().upper()
        if currency not in SUPPORTED_CURRENCIES:
            raise ValueError(
                f"Currency must be one of: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        object.__setattr__(self, "currency", currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class EventDate:
    """Event start time; never in the past at creation."""

    value: datetime

    @classmethod
    def upcoming(cls, value: datetime, *, now: datetime | None = None) -> EventDate:
        """Build an EventDate, rejecting values earlier than ``now``."""
        moment = _as_utc(value)
        reference = _as_utc(now) if now is not None else datetime.now(UTC)
        if moment < reference:
            raise ValueError("Event date cannot be in the past")
        return cls(value=moment)

    def isoformat(self) -> str:
        return self.value.isoformat()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Role(Enum):
    """Caller roles known to the catalog."""

    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Caller:
    """Identity of whoever is reading the catalog."""

    user_id: int
    role: Role

    @property
    def sees_bookings(self) -> bool:
        return self.role is Role.CUSTOMER
