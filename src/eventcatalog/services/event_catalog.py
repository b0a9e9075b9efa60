"""Event catalog service - taxonomy-aware, booking-aware event listing.

Listing flow: normalize selectors → resolve names → expand descendants →
paginated query → booking overlay (customers only) → join category and
venue names for display.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.adapters.db.event_store import EventStore
from eventcatalog.adapters.db.venue_store import VenueStore
from eventcatalog.domain.errors import (
    CategoryNotFoundError,
    EventNotFoundError,
    VenueNotFoundError,
)
from eventcatalog.domain.models import Booking, Category, Event, Venue
from eventcatalog.domain.pagination import Page
from eventcatalog.domain.value_objects import Caller, EventDate, Money
from eventcatalog.services.bookings import BookingStatusOverlay
from eventcatalog.services.logger import EventCatalogLogger
from eventcatalog.taxonomy.resolver import DescendantResolver

SHORT_DESCRIPTION_LIMIT = 100


@dataclass(frozen=True)
class EventListQuery:
    """A catalog read: filters, pagination and the optional caller."""

    page: int = 1
    limit: int = 10
    text_search: str | None = None
    category_ids: Sequence[int] = ()
    category_names: Sequence[str] = ()
    caller: Caller | None = None


@dataclass(frozen=True)
class EventSummary:
    """Display shape of one catalog entry."""

    id: int
    name: str
    description_short: str
    starts_at: datetime
    venue_name: str | None
    price: str
    photo_url: str | None
    category_id: int | None
    category_name: str | None
    is_booked: bool = False

    @classmethod
    def from_event(
        cls,
        event: Event,
        *,
        category: Category | None,
        venue: Venue | None,
        is_booked: bool,
    ) -> EventSummary:
        assert event.id is not None
        return cls(
            id=event.id,
            name=event.name,
            description_short=shorten_description(event.description),
            starts_at=event.starts_at,
            venue_name=venue.name if venue else None,
            price=str(event.price),
            photo_url=event.photo_url,
            category_id=event.category_id,
            category_name=category.name if category else None,
            is_booked=is_booked,
        )


@dataclass(frozen=True)
class NewEvent:
    """Input for creating an event."""

    name: str
    description: str
    starts_at: datetime
    venue_id: int
    price_amount: Decimal
    price_currency: str
    category_id: int | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class _ResolvedSelectors:
    category_ids: set[int] | None
    unknown_names: list[str] = field(default_factory=list)


def shorten_description(description: str) -> str:
    if len(description) > SHORT_DESCRIPTION_LIMIT:
        return description[: SHORT_DESCRIPTION_LIMIT - 3] + "..."
    return description


class EventCatalog:
    """Service for event catalog operations."""

    def __init__(
        self,
        events: EventStore,
        categories: CategoryStore,
        venues: VenueStore,
        resolver: DescendantResolver,
        bookings: BookingStatusOverlay,
        *,
        catalog_logger: EventCatalogLogger | None = None,
    ) -> None:
        self._events = events
        self._categories = categories
        self._venues = venues
        self._resolver = resolver
        self._bookings = bookings
        self._log = catalog_logger or EventCatalogLogger()

    def list_events(self, query: EventListQuery) -> Page[EventSummary]:
        """Return one page of events for ``query``.

        Category selectors include every descendant of the selected
        categories. When selectors were given but none of them names an
        existing category, nothing matches: an empty resolved set is not
        read as "no category filter", so a misspelled name never widens
        the listing to every event.
        """
        selectors = self._resolve_selectors(query.category_ids, query.category_names)
        if selectors.category_ids is not None and not selectors.category_ids:
            return Page(
                items=[],
                total_items=0,
                current_page=query.page,
                items_per_page=query.limit,
            )

        text_search = query.text_search.strip() if query.text_search else None
        page = self._events.find_page(
            query.page,
            query.limit,
            text_search=text_search or None,
            category_ids=selectors.category_ids,
        )
        self._log.events_listed(
            query.page, query.limit, len(page.items), page.total_items
        )

        event_ids = [e.id for e in page.items if e.id is not None]
        caller = query.caller
        booked = self._bookings.booked_event_ids(
            caller.user_id if caller is not None and caller.sees_bookings else None,
            event_ids,
        )
        categories = {
            c.id: c
            for c in self._categories.find_by_ids(
                e.category_id for e in page.items if e.category_id is not None
            )
        }
        venues = self._venues.find_by_ids(e.venue_id for e in page.items)

        items = [
            EventSummary.from_event(
                event,
                category=categories.get(event.category_id)
                if event.category_id is not None
                else None,
                venue=venues.get(event.venue_id),
                is_booked=event.id in booked,
            )
            for event in page.items
        ]
        return Page(
            items=items,
            total_items=page.total_items,
            current_page=page.current_page,
            items_per_page=page.items_per_page,
        )

    def get_event(self, event_id: int) -> Event:
        event = self._events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(self, new_event: NewEvent, *, now: datetime | None = None) -> Event:
        """Validate and store a new event.

        Raises:
            ValueError: On a past date, negative price or unsupported currency
            VenueNotFoundError: If the venue does not exist
            CategoryNotFoundError: If a given category does not exist
        """
        if self._venues.find_by_id(new_event.venue_id) is None:
            raise VenueNotFoundError(new_event.venue_id)
        if (
            new_event.category_id is not None
            and self._categories.find_by_id(new_event.category_id) is None
        ):
            raise CategoryNotFoundError(new_event.category_id)

        name = new_event.name.strip()
        if not name:
            raise ValueError("Event name cannot be empty")
        starts_at = EventDate.upcoming(new_event.starts_at, now=now)
        price = Money(
            amount=Decimal(new_event.price_amount), currency=new_event.price_currency
        )

        created = self._events.add(
            Event(
                id=None,
                name=name,
                description=new_event.description.strip(),
                starts_at=starts_at.value,
                venue_id=new_event.venue_id,
                price=price,
                category_id=new_event.category_id,
                photo_url=new_event.photo_url or None,
            )
        )
        self._log.event_created(created.id, created.name)
        return created

    def book_event(self, user_id: int, event_id: int) -> Booking:
        """Book ``event_id`` for ``user_id``; booking twice is harmless."""
        self.get_event(event_id)
        booking = self._bookings.book(user_id, event_id)
        self._log.event_booked(user_id, event_id)
        return booking

    def _resolve_selectors(
        self, category_ids: Sequence[int], category_names: Sequence[str]
    ) -> _ResolvedSelectors:
        direct = set(category_ids)
        names = [n.strip() for n in category_names if n and n.strip()]
        if not direct and not names:
            return _ResolvedSelectors(category_ids=None)

        selected = set(direct)
        unknown: list[str] = []
        if names:
            found = self._categories.find_by_names(names)
            selected.update(c.id for c in found if c.id is not None)
            known = {c.name.casefold() for c in found}
            unknown = [n for n in names if n.casefold() not in known]

        expanded = self._resolver.resolve(selected)
        self._log.selectors_resolved(selected, expanded, unknown)
        return _ResolvedSelectors(category_ids=expanded, unknown_names=unknown)
