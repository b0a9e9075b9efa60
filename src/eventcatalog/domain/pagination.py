from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total count of matching rows."""

    items: list[T] = field(default_factory=list)
    total_items: int = 0
    current_page: int = 1
    items_per_page: int = 10

    @property
    def total_pages(self) -> int:
        if self.items_per_page <= 0:
            return 0
        return math.ceil(self.total_items / self.items_per_page)


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first item on ``page``."""
    return (page - 1) * limit
