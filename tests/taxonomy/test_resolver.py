from __future__ import annotations

import pytest

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.domain.models import Category
from eventcatalog.taxonomy.resolver import (
    InMemoryDescendantResolver,
    RecursiveQueryDescendantResolver,
    create_descendant_resolver,
)
from tests.helpers import create_db

STRATEGIES = ["memory", "recursive"]


def create_store() -> CategoryStore:
    store = CategoryStore(create_db())
    for category in (
        Category(id=1, name="Music"),
        Category(id=2, name="Jazz", parent_id=1),
        Category(id=3, name="Bebop", parent_id=2),
        Category(id=4, name="Sports"),
        Category(id=5, name="Football", parent_id=4),
        Category(id=6, name="Theatre"),
    ):
        store.save(category)
    return store


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_resolve_returns_superset_of_input(strategy: str) -> None:
    resolver = create_descendant_resolver(strategy, create_store())  # type: ignore[arg-type]

    resolved = resolver.resolve([2])

    assert resolved == {2, 3}


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_resolve_unions_multiple_roots(strategy: str) -> None:
    resolver = create_descendant_resolver(strategy, create_store())  # type: ignore[arg-type]

    resolved = resolver.resolve([1, 4, 4])

    assert resolved == {1, 2, 3, 4, 5}


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_resolve_empty_input_is_empty(strategy: str) -> None:
    resolver = create_descendant_resolver(strategy, create_store())  # type: ignore[arg-type]

    assert resolver.resolve([]) == set()


def test_strategies_agree_on_every_category() -> None:
    store = create_store()
    memory = InMemoryDescendantResolver(store)
    recursive = RecursiveQueryDescendantResolver(store)

    for category_id in range(1, 7):
        assert memory.resolve([category_id]) == recursive.resolve([category_id])


def test_empty_input_does_not_touch_store() -> None:
    class ExplodingStore(CategoryStore):
        def __init__(self) -> None:
            pass

        def list_all(self) -> list[Category]:
            raise AssertionError("store should not be read")

        def descendant_ids(self, category_ids):  # type: ignore[no-untyped-def]
            raise AssertionError("store should not be read")

    store = ExplodingStore()

    assert InMemoryDescendantResolver(store).resolve([]) == set()
    assert RecursiveQueryDescendantResolver(store).resolve([]) == set()


def test_in_memory_resolver_terminates_on_cycle() -> None:
    class CyclicStore(CategoryStore):
        def __init__(self) -> None:
            pass

        def list_all(self) -> list[Category]:
            return [
                Category(id=1, name="A", parent_id=3),
                Category(id=2, name="B", parent_id=1),
                Category(id=3, name="C", parent_id=2),
            ]

    assert InMemoryDescendantResolver(CyclicStore()).resolve([2]) == {1, 2, 3}


def test_unknown_strategy_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown descendant strategy"):
        create_descendant_resolver("graph", create_store())  # type: ignore[arg-type]


def test_recursive_resolver_terminates_on_stored_cycle() -> None:
    store = CategoryStore(create_db())
    store.save(Category(id=1, name="A"))
    store.save(Category(id=2, name="B", parent_id=1))
    store.save(Category(id=1, name="A", parent_id=2))

    assert RecursiveQueryDescendantResolver(store).resolve([1]) == {1, 2}
