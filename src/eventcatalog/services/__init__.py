from eventcatalog.services.bookings import BookingStatusOverlay
from eventcatalog.services.category_lifecycle import (
    UNSET,
    CategoryLifecycle,
    DeletionResult,
)
from eventcatalog.services.event_catalog import (
    EventCatalog,
    EventListQuery,
    EventSummary,
    NewEvent,
)

__all__ = [
    "BookingStatusOverlay",
    "UNSET",
    "CategoryLifecycle",
    "DeletionResult",
    "EventCatalog",
    "EventListQuery",
    "EventSummary",
    "NewEvent",
]
