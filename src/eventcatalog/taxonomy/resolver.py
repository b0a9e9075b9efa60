"""Descendant-closure resolution for category selectors."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, Protocol

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.taxonomy.core import Taxonomy

DescendantStrategy = Literal["memory", "recursive"]


class DescendantResolver(Protocol):
    def resolve(self, category_ids: Iterable[int]) -> set[int]:
        """Return the input ids plus every transitive child id."""
        ...


class InMemoryDescendantResolver:
    """Loads the full category listing once per call and walks it breadth-first."""

    def __init__(self, store: CategoryStore) -> None:
        self._store = store

    def resolve(self, category_ids: Iterable[int]) -> set[int]:
        seeds = set(category_ids)
        if not seeds:
            return set()
        taxonomy = Taxonomy.from_categories(self._store.list_all())
        return taxonomy.descendant_ids(seeds)


class RecursiveQueryDescendantResolver:
    """Delegates the closure to a single recursive query in the store."""

    def __init__(self, store: CategoryStore) -> None:
        self._store = store

    def resolve(self, category_ids: Iterable[int]) -> set[int]:
        seeds = set(category_ids)
        if not seeds:
            return set()
        return self._store.descendant_ids(seeds)


def create_descendant_resolver(
    strategy: DescendantStrategy, store: CategoryStore
) -> DescendantResolver:
    if strategy == "memory":
        return InMemoryDescendantResolver(store)
    if strategy == "recursive":
        return RecursiveQueryDescendantResolver(store)
    raise ValueError(f"Unknown descendant strategy: {strategy}")
