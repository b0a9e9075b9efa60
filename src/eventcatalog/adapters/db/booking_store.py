from __future__ import annotations

from collections.abc import Iterable

from eventcatalog.adapters.db.facade import DB
from eventcatalog.adapters.db.models import Booking as BookingModel
from eventcatalog.domain.models import Booking


def _to_domain(model: BookingModel) -> Booking:
    return Booking(id=model.booking_id, user_id=model.user_id, event_id=model.event_id)


class BookingStore:
    """Persistence access to bookings."""

    def __init__(self, db: DB) -> None:
        self._db = db

    def add(self, user_id: int, event_id: int) -> Booking:
        """Record a booking; an existing (user, event) booking is returned as-is."""
        with self._db.session() as session:
            existing = (
                session.query(BookingModel)
                .filter(
                    BookingModel.user_id == user_id,
                    BookingModel.event_id == event_id,
                )
                .first()
            )
            if existing is not None:
                return _to_domain(existing)
            model = BookingModel(user_id=user_id, event_id=event_id)
            session.add(model)
            session.flush()
            session.refresh(model)
            return _to_domain(model)

    def find_user_booked_event_ids(
        self, user_id: int, event_ids: Iterable[int]
    ) -> set[int]:
        """Return the subset of ``event_ids`` booked by ``user_id``."""
        ids = sorted(set(event_ids))
        if not ids:
            return set()
        with self._db.session() as session:
            rows = (
                session.query(BookingModel.event_id)
                .filter(
                    BookingModel.user_id == user_id,
                    BookingModel.event_id.in_(ids),
                )
                .distinct()
                .all()
            )
            return {row.event_id for row in rows}
