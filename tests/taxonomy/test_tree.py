from __future__ import annotations

from eventcatalog.domain.models import Category
from eventcatalog.taxonomy.tree import build_forest


def test_build_forest_nests_children_in_input_order() -> None:
    forest = build_forest(
        [
            Category(id=1, name="Music"),
            Category(id=2, name="Rock", parent_id=1),
            Category(id=3, name="Jazz", parent_id=1),
            Category(id=4, name="Sports"),
        ]
    )

    assert [root.name for root in forest] == ["Music", "Sports"]
    assert [child.name for child in forest[0].children] == ["Rock", "Jazz"]


def test_child_listed_before_parent_is_still_attached() -> None:
    forest = build_forest(
        [
            Category(id=2, name="Jazz", parent_id=1),
            Category(id=1, name="Music"),
        ]
    )

    assert [root.name for root in forest] == ["Music"]
    assert forest[0].children[0].name == "Jazz"


def test_orphans_become_roots() -> None:
    forest = build_forest([Category(id=7, name="Jazz", parent_id=404)])

    assert [root.id for root in forest] == [7]


def test_to_dict_is_recursive() -> None:
    forest = build_forest(
        [Category(id=1, name="Music"), Category(id=2, name="Jazz", parent_id=1)]
    )

    assert forest[0].to_dict() == {
        "id": 1,
        "name": "Music",
        "parent_id": None,
        "children": [{"id": 2, "name": "Jazz", "parent_id": 1, "children": []}],
    }


def test_empty_listing_gives_empty_forest() -> None:
    assert build_forest([]) == []
