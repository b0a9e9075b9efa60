"""Wiring of stores and services for one database."""

from __future__ import annotations

from eventcatalog.adapters.db.booking_store import BookingStore
from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.adapters.db.event_store import EventStore
from eventcatalog.adapters.db.facade import DB
from eventcatalog.adapters.db.venue_store import VenueStore
from eventcatalog.core.config import CatalogConfig
from eventcatalog.domain.models import Category
from eventcatalog.services.bookings import BookingStatusOverlay
from eventcatalog.services.category_lifecycle import CategoryLifecycle
from eventcatalog.services.event_catalog import EventCatalog
from eventcatalog.taxonomy.loader import ensure_sentinel_category
from eventcatalog.taxonomy.resolver import create_descendant_resolver


class CatalogServices:
    """Container for all catalog services.

    Makes it easy to build the whole graph from config, or to hand in a
    prepared ``DB`` (for example an in-memory one) in tests.
    """

    def __init__(self, config: CatalogConfig, db: DB | None = None) -> None:
        self.config = config
        self.db = db or DB(config.database_url)

        self.category_store = CategoryStore(self.db)
        self.event_store = EventStore(self.db)
        self.venue_store = VenueStore(self.db)
        self.booking_store = BookingStore(self.db)

        self.resolver = create_descendant_resolver(
            config.descendant_strategy, self.category_store
        )
        self.bookings = BookingStatusOverlay(self.booking_store)
        self.categories = CategoryLifecycle(
            self.db,
            self.category_store,
            self.event_store,
            sentinel_name=config.sentinel_category,
            atomic_delete=config.atomic_delete,
        )
        self.events = EventCatalog(
            self.event_store,
            self.category_store,
            self.venue_store,
            self.resolver,
            self.bookings,
        )

    def bootstrap(self) -> Category:
        """Create the schema and make sure the sentinel category exists."""
        self.db.create_schema()
        return ensure_sentinel_category(
            self.category_store, self.config.sentinel_category
        )
