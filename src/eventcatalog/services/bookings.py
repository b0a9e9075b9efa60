from __future__ import annotations

from collections.abc import Iterable

from eventcatalog.adapters.db.booking_store import BookingStore
from eventcatalog.domain.models import Booking


class BookingStatusOverlay:
    """Answers "which of these events has this caller already booked?"."""

    def __init__(self, store: BookingStore) -> None:
        self._store = store

    def booked_event_ids(
        self, user_id: int | None, candidate_event_ids: Iterable[int]
    ) -> set[int]:
        """Return the subset of ``candidate_event_ids`` booked by ``user_id``.

        No user or no candidates short-circuits to an empty set without
        touching the store.
        """
        candidates = set(candidate_event_ids)
        if user_id is None or not candidates:
            return set()
        return self._store.find_user_booked_event_ids(user_id, candidates)

    def book(self, user_id: int, event_id: int) -> Booking:
        return self._store.add(user_id, event_id)
