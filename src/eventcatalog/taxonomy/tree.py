"""Assemble flat category listings into a forest for presentation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from eventcatalog.domain.models import Category


@dataclass
class CategoryNode:
    id: int
    name: str
    parent_id: int | None
    children: list[CategoryNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "children": [child.to_dict() for child in self.children],
        }


def build_forest(categories: Sequence[Category]) -> list[CategoryNode]:
    """Build one tree per root from a flat list of categories.

    A node whose parent is not part of ``categories`` is promoted to a root,
    so partial or filtered listings still render. Roots and children keep
    the order of the input list.
    """
    nodes: dict[int, CategoryNode] = {}
    for category in categories:
        if category.id is None:
            continue
        nodes[category.id] = CategoryNode(
            id=category.id, name=category.name, parent_id=category.parent_id
        )

    roots: list[CategoryNode] = []
    for node in nodes.values():
        parent = nodes.get(node.parent_id) if node.parent_id is not None else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots
