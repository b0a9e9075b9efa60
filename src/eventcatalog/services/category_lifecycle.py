from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from enum import Enum
from typing import Any

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.adapters.db.event_store import EventStore
from eventcatalog.adapters.db.facade import DB
from eventcatalog.domain.errors import (
    CategoryConflictError,
    CategoryNotFoundError,
    IntegrityViolationError,
    ReferentialConflictError,
    SentinelCategoryError,
)
from eventcatalog.domain.models import Category
from eventcatalog.domain.pagination import Page
from eventcatalog.domain.value_objects import CategoryName
from eventcatalog.services.logger import CategoryLifecycleLogger
from eventcatalog.taxonomy.loader import load_taxonomy
from eventcatalog.taxonomy.tree import CategoryNode, build_forest


class _Unset(Enum):
    UNSET = "UNSET"


UNSET = _Unset.UNSET
"""Marks an update field the caller did not specify (distinct from None)."""


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of a category deletion."""

    category_id: int
    sentinel_id: int
    reparented_child_ids: tuple[int, ...] = ()
    skipped_child_ids: tuple[int, ...] = ()
    reassigned_event_count: int = 0

    @property
    def summary(self) -> str:
        return (
            f"Deleted category {self.category_id}; "
            f"re-parented {len(self.reparented_child_ids)} children and "
            f"reassigned {self.reassigned_event_count} events "
            f"to category {self.sentinel_id}"
        )


class CategoryLifecycle:
    """
    Orchestrates category mutations while keeping the taxonomy consistent.

    Deletion moves the doomed category's direct children and events onto the
    sentinel category before removing it. Updates reject self-parenting,
    reparenting beneath a descendant, duplicate names and any change to the
    sentinel itself.
    """

    def __init__(
        self,
        db: DB,
        categories: CategoryStore,
        events: EventStore,
        *,
        sentinel_name: str,
        atomic_delete: bool = True,
        lifecycle_logger: CategoryLifecycleLogger | None = None,
    ) -> None:
        self._db = db
        self._categories = categories
        self._events = events
        self._sentinel_name = sentinel_name
        self._atomic_delete = atomic_delete
        self._log = lifecycle_logger or CategoryLifecycleLogger()

    @property
    def sentinel_name(self) -> str:
        return self._sentinel_name

    # Reads

    def list_categories(self, page: int, limit: int) -> Page[Category]:
        return self._categories.find_page(page, limit)

    def get_category(self, category_id: int) -> Category:
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def get_tree(self) -> list[CategoryNode]:
        return build_forest(self._categories.list_all())

    # Mutations

    def create_category(self, name: str, parent_id: int | None = None) -> Category:
        """
        Create a category under ``parent_id`` (None for top-level).

        Raises:
            ValueError: If the name is blank or too long
            CategoryConflictError: If the name is already taken
            CategoryNotFoundError: If the parent does not exist
        """
        category_name = CategoryName(name)
        if self._categories.find_by_name(category_name.value) is not None:
            raise CategoryConflictError(
                None, f"A category named '{category_name}' already exists"
            )
        if parent_id is not None and self._categories.find_by_id(parent_id) is None:
            raise CategoryNotFoundError(parent_id)

        created = self._categories.save(
            Category(id=None, name=category_name.value, parent_id=parent_id)
        )
        self._log.category_created(created.id, created.name)
        return created

    def update_category(
        self,
        category_id: int,
        *,
        name: str | _Unset = UNSET,
        parent_id: int | None | _Unset = UNSET,
    ) -> Category:
        """
        Rename and/or reparent a category.

        Fields left as ``UNSET`` are untouched; ``parent_id=None`` moves the
        category to the top level. Returns the category unchanged when
        nothing would differ.

        Raises:
            CategoryNotFoundError: If the category or the new parent is missing
            CategoryConflictError: On self-parenting, reparenting beneath a
                descendant, or a name already used by another category
            SentinelCategoryError: If the sentinel would be renamed or moved
        """
        category = self.get_category(category_id)

        new_name = category.name
        if name is not UNSET:
            candidate = CategoryName(name).value
            if candidate != category.name:
                new_name = candidate

        new_parent_id = category.parent_id
        if parent_id is not UNSET:
            if parent_id == category_id:
                raise CategoryConflictError(
                    category_id, "A category cannot be its own parent"
                )
            new_parent_id = parent_id

        name_changed = new_name != category.name
        parent_changed = new_parent_id != category.parent_id
        if not name_changed and not parent_changed:
            self._log.update_noop(category_id)
            return category

        if self._is_sentinel(category):
            raise SentinelCategoryError(
                category_id, self._sentinel_name, "cannot be renamed or moved"
            )
        if name_changed:
            self._check_name_available(new_name, category_id)
        if parent_changed and new_parent_id is not None:
            self._check_parent_allowed(category_id, new_parent_id)

        updated = self._categories.save(
            category.renamed(new_name).reparented(new_parent_id)
        )
        self._log.category_updated(updated.id, updated.name, updated.parent_id)
        return updated

    def delete_category(self, category_id: int) -> DeletionResult:
        """
        Delete a category, moving its dependents onto the sentinel first.

        Steps: load target, refuse the sentinel, load the sentinel,
        re-parent direct children, reassign events, delete. Grandchildren
        stay attached to their own parents. With ``atomic_delete`` the last
        three steps share one transaction; otherwise each step commits on
        its own and a retried delete resumes where a failed one stopped.

        Raises:
            CategoryNotFoundError: If the category does not exist
            SentinelCategoryError: If the category is the sentinel
            IntegrityViolationError: If the sentinel is missing or the store
                still refuses the delete after reassignment
        """
        target = self._categories.find_by_id(category_id)
        if target is None:
            raise CategoryNotFoundError(category_id)
        if self._is_sentinel(target):
            raise SentinelCategoryError(
                category_id, self._sentinel_name, "cannot be deleted"
            )

        sentinel = self._categories.find_by_name(self._sentinel_name)
        if sentinel is None or sentinel.id is None or sentinel.id == category_id:
            raise self._integrity_violation(
                f'The "{self._sentinel_name}" category is missing or invalid; '
                "it must exist before categories can be deleted",
                category_id,
            )
        sentinel_id = sentinel.id

        self._log.deletion_started(category_id, sentinel_id)
        with self._unit_of_work():
            reparented, skipped = self._reparent_children(category_id, sentinel_id)
            reassigned = self._events.reassign_category(category_id, sentinel_id)
            self._remove(category_id)

        self._log.category_deleted(category_id, len(reparented), reassigned)
        return DeletionResult(
            category_id=category_id,
            sentinel_id=sentinel_id,
            reparented_child_ids=tuple(reparented),
            skipped_child_ids=tuple(skipped),
            reassigned_event_count=reassigned,
        )

    # Helpers

    def _is_sentinel(self, category: Category) -> bool:
        return CategoryName(self._sentinel_name).matches(category.name)

    def _unit_of_work(self) -> AbstractContextManager[Any]:
        if self._atomic_delete:
            return self._db.session()
        return nullcontext()

    def _check_name_available(self, name: str, category_id: int) -> None:
        existing = self._categories.find_by_name(name)
        if existing is not None and existing.id != category_id:
            raise CategoryConflictError(
                category_id, f"A category named '{name}' already exists"
            )

    def _check_parent_allowed(self, category_id: int, parent_id: int) -> None:
        taxonomy = load_taxonomy(self._categories)
        if parent_id not in taxonomy:
            raise CategoryNotFoundError(parent_id)
        if taxonomy.is_descendant(parent_id, category_id):
            raise CategoryConflictError(
                category_id,
                f"Category {category_id} cannot be moved beneath its own "
                f"descendant {parent_id}",
            )

    def _reparent_children(
        self, category_id: int, sentinel_id: int
    ) -> tuple[list[int], list[int]]:
        reparented: list[int] = []
        skipped: list[int] = []
        for child in self._categories.find_by_parent_id(category_id):
            assert child.id is not None
            if child.id == sentinel_id:
                self._log.child_reparent_skipped(child.id, sentinel_id)
                skipped.append(child.id)
                continue
            self._categories.save(child.reparented(sentinel_id))
            reparented.append(child.id)
        return reparented, skipped

    def _remove(self, category_id: int) -> None:
        try:
            deleted = self._categories.delete_by_id(category_id)
        except ReferentialConflictError as e:
            raise self._integrity_violation(
                f"Failed to delete category {category_id}; "
                "references remain after reassignment",
                category_id,
            ) from e
        if not deleted:
            raise CategoryNotFoundError(category_id)

    def _integrity_violation(
        self, message: str, category_id: int | None
    ) -> IntegrityViolationError:
        self._log.integrity_violation(message, category_id)
        return IntegrityViolationError(message, category_id=category_id)
