"""Caller-facing validation of catalog read requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from eventcatalog.domain.value_objects import Caller
from eventcatalog.services.event_catalog import EventListQuery


def _split_csv(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list | tuple):
        return [str(part).strip() for part in value if str(part).strip()]
    return value


class PageRequest(BaseModel):
    """Pagination parameters shared by list requests."""

    page: int = Field(1, ge=1, description="1-based page number")
    limit: int = Field(10, ge=1, le=100, description="Items per page")


class ListCategoriesRequest(PageRequest):
    """Flat, paginated category listing."""


class ListEventsRequest(PageRequest):
    """Filtered event listing.

    ``category_ids`` and ``category_names`` accept either lists or
    comma-separated strings such as ``"1,2,3"`` or ``"Music,Sports"``.
    """

    text_search: str | None = Field(None, min_length=1)
    category_ids: list[int] = Field(default_factory=list)
    category_names: list[str] = Field(default_factory=list)

    @field_validator("text_search", mode="before")
    @classmethod
    def _strip_text_search(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("category_ids", "category_names", mode="before")
    @classmethod
    def _split_selectors(cls, value: Any) -> Any:
        return _split_csv(value)

    def to_query(self, caller: Caller | None = None) -> EventListQuery:
        return EventListQuery(
            page=self.page,
            limit=self.limit,
            text_search=self.text_search,
            category_ids=tuple(self.category_ids),
            category_names=tuple(self.category_names),
            caller=caller,
        )
