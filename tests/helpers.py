"""Builders shared by the test suite."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from eventcatalog.adapters.db.facade import DB
from eventcatalog.core.config import CatalogConfig, DescendantStrategy
from eventcatalog.domain.models import Category, Event, Venue
from eventcatalog.domain.value_objects import Money
from eventcatalog.services.container import CatalogServices

FUTURE = datetime(2030, 6, 1, 19, 0, tzinfo=UTC)


def create_db() -> DB:
    """Create in-memory database instance with all tables."""
    db = DB("sqlite:///:memory:")
    db.create_schema()
    return db


def create_services(
    *,
    strategy: DescendantStrategy = "memory",
    atomic_delete: bool = True,
    bootstrap: bool = True,
) -> CatalogServices:
    """Wire every service against a fresh in-memory database."""
    config = CatalogConfig(
        database_url="sqlite:///:memory:",
        descendant_strategy=strategy,
        atomic_delete=atomic_delete,
    )
    services = CatalogServices(config, db=create_db())
    if bootstrap:
        services.bootstrap()
    return services


def add_category(
    services: CatalogServices,
    name: str,
    parent_id: int | None = None,
    *,
    category_id: int | None = None,
) -> Category:
    return services.category_store.save(
        Category(id=category_id, name=name, parent_id=parent_id)
    )


def add_venue(services: CatalogServices, name: str = "Main Hall") -> Venue:
    return services.venue_store.add(Venue(id=None, name=name, capacity=200))


def add_event(
    services: CatalogServices,
    name: str,
    *,
    venue_id: int,
    category_id: int | None = None,
    description: str = "",
    starts_at: datetime = FUTURE,
    price: str = "10.00",
) -> Event:
    return services.event_store.add(
        Event(
            id=None,
            name=name,
            description=description,
            starts_at=starts_at,
            venue_id=venue_id,
            price=Money(amount=Decimal(price), currency="USD"),
            category_id=category_id,
        )
    )
