from __future__ import annotations

import pytest

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.domain.errors import CategoryConflictError, ReferentialConflictError
from eventcatalog.domain.models import Category
from tests.helpers import create_db


def create_store() -> CategoryStore:
    store = CategoryStore(create_db())
    store.save(Category(id=1, name="Music"))
    store.save(Category(id=2, name="Jazz", parent_id=1))
    store.save(Category(id=3, name="Bebop", parent_id=2))
    store.save(Category(id=4, name="Sports"))
    return store


def test_find_by_name_is_case_insensitive() -> None:
    store = create_store()

    found = store.find_by_name("  jAZZ ")

    assert found == Category(id=2, name="Jazz", parent_id=1)
    assert store.find_by_name("Opera") is None
    assert store.find_by_name("   ") is None


def test_find_by_names_returns_known_names_only() -> None:
    store = create_store()

    found = store.find_by_names(["music", "SPORTS", "Opera", ""])

    assert [c.id for c in found] == [1, 4]


def test_find_by_parent_id_handles_top_level() -> None:
    store = create_store()

    assert [c.id for c in store.find_by_parent_id(None)] == [1, 4]
    assert [c.id for c in store.find_by_parent_id(1)] == [2]


def test_find_by_ids_skips_missing_ids() -> None:
    store = create_store()

    assert [c.id for c in store.find_by_ids([3, 99, 1, 3])] == [1, 3]
    assert store.find_by_ids([]) == []


def test_find_page_counts_all_rows() -> None:
    store = create_store()

    page = store.find_page(2, 3)

    assert [c.id for c in page.items] == [4]
    assert page.total_items == 4
    assert page.total_pages == 2


def test_save_updates_existing_row() -> None:
    store = create_store()

    updated = store.save(Category(id=3, name="Hard Bop", parent_id=1))

    assert store.find_by_id(3) == updated == Category(id=3, name="Hard Bop", parent_id=1)


def test_save_with_unknown_id_inserts_row() -> None:
    store = create_store()

    created = store.save(Category(id=42, name="Theatre"))

    assert created.id == 42
    assert store.find_by_id(42) is not None


def test_save_duplicate_name_is_conflict() -> None:
    store = create_store()

    with pytest.raises(CategoryConflictError):
        store.save(Category(id=None, name="Sports"))


def test_save_with_missing_parent_is_conflict() -> None:
    store = create_store()

    with pytest.raises(CategoryConflictError):
        store.save(Category(id=None, name="Orphan", parent_id=404))


def test_delete_referenced_category_is_referential_conflict() -> None:
    store = create_store()

    with pytest.raises(ReferentialConflictError):
        store.delete_by_id(1)

    assert store.find_by_id(1) is not None


def test_delete_reports_whether_a_row_was_removed() -> None:
    store = create_store()

    assert store.delete_by_id(4) is True
    assert store.delete_by_id(4) is False
    assert store.find_by_id(4) is None


def test_descendant_ids_walks_all_levels() -> None:
    store = create_store()

    assert store.descendant_ids([1]) == {1, 2, 3}
    assert store.descendant_ids([2, 4]) == {2, 3, 4}
    assert store.descendant_ids([]) == set()


def test_descendant_ids_keeps_unknown_seeds() -> None:
    store = create_store()

    assert store.descendant_ids([404]) == {404}


def test_lookups_fold_non_ascii_letters() -> None:
    store = create_store()
    events = store.save(Category(id=None, name="Événements"))

    assert store.find_by_name("Événements") == events
    assert store.find_by_name("événements") == events
    assert store.find_by_name("ÉVÉNEMENTS") == events
    assert store.find_by_names(["événements", "music"]) == [
        Category(id=1, name="Music"),
        events,
    ]
