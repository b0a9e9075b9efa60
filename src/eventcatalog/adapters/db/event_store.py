"""SQLAlchemy-backed event store, including the paginated catalog query."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from eventcatalog.adapters.db.facade import DB
from eventcatalog.adapters.db.models import Event as EventModel
from eventcatalog.domain.models import Event
from eventcatalog.domain.pagination import Page, page_offset
from eventcatalog.domain.value_objects import Money


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive timestamps; everything is stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(model: EventModel) -> Event:
    return Event(
        id=model.event_id,
        name=model.name,
        description=model.description,
        starts_at=_as_utc(model.starts_at),
        venue_id=model.venue_id,
        price=Money(amount=model.price_amount, currency=model.price_currency),
        category_id=model.category_id,
        photo_url=model.photo_url,
    )


class EventStore:
    """Persistence access to events."""

    def __init__(self, db: DB) -> None:
        self._db = db

    def add(self, event: Event) -> Event:
        with self._db.session() as session:
            model = EventModel(
                name=event.name,
                description=event.description,
                starts_at=_as_utc(event.starts_at),
                venue_id=event.venue_id,
                category_id=event.category_id,
                price_amount=event.price.amount,
                price_currency=event.price.currency,
                photo_url=event.photo_url,
            )
            session.add(model)
            session.flush()
            session.refresh(model)
            return _to_domain(model)

    def find_by_id(self, event_id: int) -> Event | None:
        with self._db.session() as session:
            model = session.get(EventModel, event_id)
            return _to_domain(model) if model else None

    def find_page(
        self,
        page: int,
        limit: int,
        *,
        text_search: str | None = None,
        category_ids: Iterable[int] | None = None,
    ) -> Page[Event]:
        """Return one page of events matching the filters.

        ``category_ids`` must already be descendant-expanded; it is applied
        as a plain membership filter. ``None`` means no category filter.
        The count and the page are read in the same session so they
        observe the same snapshot.

        Args:
            page: 1-based page number
            limit: Page size
            text_search: Case-insensitive substring matched against name
                or description
            category_ids: Allowed category IDs

        Returns:
            Page of events ordered by start date descending, then by ID
        """
        with self._db.session() as session:
            query = self._filtered(session, text_search, category_ids)
            total = query.with_entities(func.count(EventModel.event_id)).scalar() or 0
            models = (
                query.order_by(EventModel.starts_at.desc(), EventModel.event_id.asc())
                .offset(page_offset(page, limit))
                .limit(limit)
                .all()
            )
            return Page(
                items=[_to_domain(m) for m in models],
                total_items=int(total),
                current_page=page,
                items_per_page=limit,
            )

    def reassign_category(self, old_category_id: int, new_category_id: int) -> int:
        """Point every event of one category at another.

        Returns:
            Number of events updated
        """
        with self._db.session() as session:
            return (
                session.query(EventModel)
                .filter(EventModel.category_id == old_category_id)
                .update({"category_id": new_category_id}, synchronize_session=False)
            )

    @staticmethod
    def _filtered(
        session: Session,
        text_search: str | None,
        category_ids: Iterable[int] | None,
    ) -> Query[EventModel]:
        query = session.query(EventModel)
        if text_search:
            term = text_search.strip().lower()
            query = query.filter(
                or_(
                    func.lower(EventModel.name).contains(term, autoescape=True),
                    func.lower(EventModel.description).contains(term, autoescape=True),
                )
            )
        if category_ids is not None:
            query = query.filter(EventModel.category_id.in_(sorted(set(category_ids))))
        return query
