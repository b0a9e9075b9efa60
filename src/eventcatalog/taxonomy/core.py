from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Sequence

from eventcatalog.domain.models import Category


class Taxonomy:
    """In-memory view of the category tree built from one full listing."""

    def __init__(self, categories: Sequence[Category]) -> None:
        self._by_id: dict[int, Category] = {}
        self._children: dict[int, list[Category]] = {}
        for category in categories:
            if category.id is None:
                continue
            self._by_id[category.id] = category
        for category in self._by_id.values():
            if category.parent_id is not None:
                self._children.setdefault(category.parent_id, []).append(category)

    @classmethod
    def from_categories(cls, categories: Iterable[Category]) -> Taxonomy:
        return cls(list(categories))

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def parent(self, category_id: int) -> Category | None:
        category = self._by_id.get(category_id)
        if category is None or category.parent_id is None:
            return None
        return self._by_id.get(category.parent_id)

    def descendant_ids(self, category_ids: Iterable[int]) -> set[int]:
        """Breadth-first closure of ``category_ids`` over child links.

        Every input id is kept, known or not. Each id is expanded at most
        once, so a stray cycle in the data cannot loop forever.
        """
        found: set[int] = set(category_ids)
        frontier: deque[int] = deque(found)
        while frontier:
            current = frontier.popleft()
            for child in self._children.get(current, []):
                assert child.id is not None
                if child.id not in found:
                    found.add(child.id)
                    frontier.append(child.id)
        return found

    def ancestors(self, category_id: int) -> Iterator[Category]:
        """Walk parent links upward, nearest first, stopping on a revisit."""
        seen: set[int] = {category_id}
        current = self.parent(category_id)
        while current is not None and current.id not in seen:
            assert current.id is not None
            seen.add(current.id)
            yield current
            current = self.parent(current.id)

    def is_descendant(self, candidate_id: int, ancestor_id: int) -> bool:
        """True if ``candidate_id`` sits anywhere beneath ``ancestor_id``."""
        return any(a.id == ancestor_id for a in self.ancestors(candidate_id))
