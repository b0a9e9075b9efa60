from __future__ import annotations

from collections.abc import Iterable

from eventcatalog.adapters.db.facade import DB
from eventcatalog.adapters.db.models import Venue as VenueModel
from eventcatalog.domain.models import Venue


def _to_domain(model: VenueModel) -> Venue:
    return Venue(
        id=model.venue_id,
        name=model.name,
        address=model.address,
        capacity=model.capacity,
    )


class VenueStore:
    """Minimal venue access; venue management lives outside the catalog."""

    def __init__(self, db: DB) -> None:
        self._db = db

    def add(self, venue: Venue) -> Venue:
        with self._db.session() as session:
            model = VenueModel(
                name=venue.name, address=venue.address, capacity=venue.capacity
            )
            session.add(model)
            session.flush()
            session.refresh(model)
            return _to_domain(model)

    def find_by_id(self, venue_id: int) -> Venue | None:
        with self._db.session() as session:
            model = session.get(VenueModel, venue_id)
            return _to_domain(model) if model else None

    def find_by_ids(self, venue_ids: Iterable[int]) -> dict[int, Venue]:
        ids = sorted(set(venue_ids))
        if not ids:
            return {}
        with self._db.session() as session:
            models = (
                session.query(VenueModel).filter(VenueModel.venue_id.in_(ids)).all()
            )
            return {m.venue_id: _to_domain(m) for m in models}
