from __future__ import annotations

from datetime import timedelta

from eventcatalog.services.container import CatalogServices
from tests.helpers import FUTURE, add_category, add_event, add_venue, create_services


def build_events(count: int) -> tuple[CatalogServices, int]:
    services = create_services()
    category = add_category(services, "Talks")
    venue = add_venue(services)
    assert category.id is not None and venue.id is not None
    for i in range(count):
        add_event(
            services,
            f"Talk {i}",
            venue_id=venue.id,
            category_id=category.id,
            starts_at=FUTURE + timedelta(days=i % 4),
        )
    return services, category.id


def test_pages_concatenate_to_full_result_without_duplicates() -> None:
    services, _ = build_events(11)
    store = services.event_store

    seen: list[int | None] = []
    for page_number in range(1, 5):
        page = store.find_page(page_number, 3)
        assert page.total_items == 11
        seen.extend(e.id for e in page.items)

    assert len(seen) == 11
    assert len(set(seen)) == 11


def test_page_beyond_last_is_empty_with_total() -> None:
    services, _ = build_events(3)

    page = services.event_store.find_page(5, 10)

    assert page.items == []
    assert page.total_items == 3


def test_events_are_ordered_by_start_then_id() -> None:
    services, _ = build_events(8)

    page = services.event_store.find_page(1, 8)

    keys = [(e.starts_at, e.id) for e in page.items]
    assert keys == sorted(keys, key=lambda k: (-k[0].timestamp(), k[1]))


def test_text_search_escapes_like_wildcards() -> None:
    services, category_id = build_events(2)
    venue = add_venue(services, "Annex")
    assert venue.id is not None
    add_event(services, "100% fun", venue_id=venue.id, category_id=category_id)

    page = services.event_store.find_page(1, 10, text_search="0%")

    assert [e.name for e in page.items] == ["100% fun"]


def test_empty_category_set_matches_nothing() -> None:
    services, _ = build_events(2)

    page = services.event_store.find_page(1, 10, category_ids=set())

    assert page.total_items == 0


def test_reassign_category_moves_every_event() -> None:
    services, category_id = build_events(3)
    target = add_category(services, "Archive")
    assert target.id is not None

    moved = services.event_store.reassign_category(category_id, target.id)

    assert moved == 3
    store = services.event_store
    assert store.find_page(1, 10, category_ids={category_id}).total_items == 0
    assert store.find_page(1, 10, category_ids={target.id}).total_items == 3


def test_stored_start_time_is_utc_aware() -> None:
    services, _ = build_events(1)

    (event,) = services.event_store.find_page(1, 1).items

    assert event.starts_at == FUTURE
    assert event.starts_at.tzinfo is not None


def test_text_search_matches_name_substring() -> None:
    services = create_services()
    venue = add_venue(services)
    assert venue.id is not None
    add_event(services, "Tech Talk", venue_id=venue.id)
    add_event(services, "Music Night", venue_id=venue.id)

    page = services.event_store.find_page(1, 10, text_search="tech")

    assert [e.name for e in page.items] == ["Tech Talk"]
    assert page.total_items == 1


def test_text_search_folds_non_ascii_letters() -> None:
    services = create_services()
    venue = add_venue(services)
    assert venue.id is not None
    add_event(services, "ÉTÉ Festival", venue_id=venue.id)
    add_event(services, "Winter Fair", venue_id=venue.id, description="Crème brûlée")

    for term in ("ÉTÉ", "été"):
        page = services.event_store.find_page(1, 10, text_search=term)
        assert [e.name for e in page.items] == ["ÉTÉ Festival"]
    page = services.event_store.find_page(1, 10, text_search="CRÈME")
    assert [e.name for e in page.items] == ["Winter Fair"]
