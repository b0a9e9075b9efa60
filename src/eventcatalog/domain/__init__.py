from eventcatalog.domain.models import Booking, Category, Event, Venue
from eventcatalog.domain.pagination import Page
from eventcatalog.domain.value_objects import (
    SUPPORTED_CURRENCIES,
    Caller,
    CategoryName,
    EventDate,
    Money,
    Role,
)

__all__ = [
    "Booking",
    "Category",
    "Event",
    "Venue",
    "Page",
    "SUPPORTED_CURRENCIES",
    "Caller",
    "CategoryName",
    "EventDate",
    "Money",
    "Role",
]
