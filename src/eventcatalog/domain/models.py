"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
SQLAlchemy ORM models are in adapters/db/models.py (persistence layer).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from eventcatalog.domain.value_objects import Money


@dataclass(frozen=True)
class Category:
    """Domain representation of a Category.

    ``id`` is None until the category has been saved.
    """

    id: int | None
    name: str
    parent_id: int | None = None

    def renamed(self, name: str) -> Category:
        return replace(self, name=name)

    def reparented(self, parent_id: int | None) -> Category:
        return replace(self, parent_id=parent_id)


@dataclass(frozen=True)
class Venue:
    """Domain representation of a Venue."""

    id: int | None
    name: str
    address: str | None = None
    capacity: int | None = None


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: int | None
    name: str
    description: str
    starts_at: datetime
    venue_id: int
    price: Money
    category_id: int | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class Booking:
    """A user's booking of an event."""

    id: int | None
    user_id: int
    event_id: int
