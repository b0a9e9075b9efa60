"""SQLAlchemy-backed category store.

Lookups return domain ``Category`` objects and never raise for a missing
row; they return ``None`` or an empty list instead.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import aliased

from eventcatalog.adapters.db.facade import DB
from eventcatalog.adapters.db.models import Category as CategoryModel
from eventcatalog.domain.errors import CategoryConflictError, ReferentialConflictError
from eventcatalog.domain.models import Category
from eventcatalog.domain.pagination import Page, page_offset


def _to_domain(model: CategoryModel) -> Category:
    return Category(id=model.category_id, name=model.name, parent_id=model.parent_id)


def _normalize_names(names: Iterable[str]) -> list[str]:
    lowered = {name.strip().lower() for name in names}
    lowered.discard("")
    return sorted(lowered)


class CategoryStore:
    """Persistence access to category records."""

    def __init__(self, db: DB) -> None:
        self._db = db

    def find_by_id(self, category_id: int) -> Category | None:
        with self._db.session() as session:
            model = session.get(CategoryModel, category_id)
            return _to_domain(model) if model else None

    def find_by_name(self, name: str) -> Category | None:
        """Case-insensitive exact match on the category name."""
        wanted = name.strip().lower()
        if not wanted:
            return None
        with self._db.session() as session:
            model = (
                session.query(CategoryModel)
                .filter(func.lower(CategoryModel.name) == func.lower(wanted))
                .first()
            )
            return _to_domain(model) if model else None

    def find_by_parent_id(self, parent_id: int | None) -> list[Category]:
        with self._db.session() as session:
            query = session.query(CategoryModel)
            if parent_id is None:
                query = query.filter(CategoryModel.parent_id.is_(None))
            else:
                query = query.filter(CategoryModel.parent_id == parent_id)
            models = query.order_by(CategoryModel.category_id).all()
            return [_to_domain(m) for m in models]

    def find_by_ids(self, category_ids: Iterable[int]) -> list[Category]:
        ids = sorted(set(category_ids))
        if not ids:
            return []
        with self._db.session() as session:
            models = (
                session.query(CategoryModel)
                .filter(CategoryModel.category_id.in_(ids))
                .order_by(CategoryModel.category_id)
                .all()
            )
            return [_to_domain(m) for m in models]

    def find_by_names(self, names: Iterable[str]) -> list[Category]:
        """Case-insensitive lookup of several names at once."""
        wanted = _normalize_names(names)
        if not wanted:
            return []
        with self._db.session() as session:
            models = (
                session.query(CategoryModel)
                .filter(
                    func.lower(CategoryModel.name).in_([func.lower(n) for n in wanted])
                )
                .order_by(CategoryModel.category_id)
                .all()
            )
            return [_to_domain(m) for m in models]

    def list_all(self) -> list[Category]:
        """Return every category in insertion (id) order."""
        with self._db.session() as session:
            models = session.query(CategoryModel).order_by(CategoryModel.category_id)
            return [_to_domain(m) for m in models.all()]

    def find_page(self, page: int, limit: int) -> Page[Category]:
        """Return one page of categories; items and count share a session."""
        with self._db.session() as session:
            total = session.query(func.count(CategoryModel.category_id)).scalar() or 0
            models = (
                session.query(CategoryModel)
                .order_by(CategoryModel.category_id)
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

    def save(self, category: Category) -> Category:
        """Insert when ``category.id`` is None, update (or upsert) otherwise.

        Raises:
            CategoryConflictError: If the row violates a uniqueness or
                parent constraint.
        """
        try:
            with self._db.session() as session:
                model = (
                    session.get(CategoryModel, category.id)
                    if category.id is not None
                    else None
                )
                if model is None:
                    model = CategoryModel(
                        category_id=category.id,
                        name=category.name,
                        parent_id=category.parent_id,
                    )
                    session.add(model)
                else:
                    model.name = category.name
                    model.parent_id = category.parent_id
                    model.updated_at = func.now()
                session.flush()
                session.refresh(model)
                return _to_domain(model)
        except IntegrityError as e:
            raise CategoryConflictError(
                category.id,
                f"Category '{category.name}' violates a taxonomy constraint",
            ) from e

    def delete_by_id(self, category_id: int) -> bool:
        """Delete a category.

        Returns:
            True if the row was deleted, False if it did not exist.

        Raises:
            ReferentialConflictError: If children or events still reference it.
        """
        try:
            with self._db.session() as session:
                deleted = (
                    session.query(CategoryModel)
                    .filter(CategoryModel.category_id == category_id)
                    .delete(synchronize_session=False)
                )
                session.flush()
                return deleted > 0
        except IntegrityError as e:
            raise ReferentialConflictError(category_id) from e

    def descendant_ids(self, category_ids: Iterable[int]) -> set[int]:
        """Resolve the descendant closure with a recursive CTE.

        ``UNION`` (not ``UNION ALL``) discards rows already produced, so the
        query terminates even if the stored parent links form a cycle.
        """
        seeds = set(category_ids)
        if not seeds:
            return set()
        with self._db.session() as session:
            closure = (
                select(CategoryModel.category_id)
                .where(CategoryModel.category_id.in_(sorted(seeds)))
                .cte(name="descendants", recursive=True)
            )
            found = closure.alias("found")
            child = aliased(CategoryModel)
            closure = closure.union(
                select(child.category_id).where(child.parent_id == found.c.category_id)
            )
            rows = session.execute(select(closure.c.category_id)).scalars().all()
            return seeds | set(rows)
