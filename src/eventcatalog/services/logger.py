"""Logging for catalog services.

Keeps log formatting out of the business logic.
"""

from __future__ import annotations

import loguru
from loguru import logger


class CategoryLifecycleLogger:
    """Handles all logging for category mutations."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        """Initialize logger.

        Args:
            logger_instance: Logger instance to use (defaults to loguru.logger)
        """
        self._logger = logger_instance

    def category_created(self, category_id: int | None, name: str) -> None:
        self._logger.bind(category_id=category_id).info(
            "Created category {} (id={})", name, category_id
        )

    def category_updated(
        self, category_id: int | None, name: str, parent_id: int | None
    ) -> None:
        self._logger.bind(category_id=category_id, parent_id=parent_id).info(
            "Updated category {} (id={}, parent={})", name, category_id, parent_id
        )

    def update_noop(self, category_id: int) -> None:
        self._logger.bind(category_id=category_id).debug(
            "No changes for category {}", category_id
        )

    def deletion_started(self, category_id: int, sentinel_id: int) -> None:
        self._logger.bind(category_id=category_id, sentinel_id=sentinel_id).info(
            "Deleting category {}, dependents move to {}", category_id, sentinel_id
        )

    def child_reparent_skipped(self, child_id: int, sentinel_id: int) -> None:
        """Log the anomaly of the sentinel being a child of the doomed category."""
        self._logger.bind(child_id=child_id, sentinel_id=sentinel_id).warning(
            "Skipping re-parenting of category {}: it is the sentinel category",
            child_id,
        )

    def category_deleted(
        self, category_id: int, reparented: int, reassigned_events: int
    ) -> None:
        self._logger.bind(
            category_id=category_id,
            reparented=reparented,
            reassigned_events=reassigned_events,
        ).info(
            "Deleted category {}: {} children re-parented, {} events reassigned",
            category_id,
            reparented,
            reassigned_events,
        )

    def integrity_violation(self, message: str, category_id: int | None) -> None:
        """Log a broken invariant loudly for operator investigation."""
        self._logger.bind(category_id=category_id).error(
            "Integrity violation: {}", message
        )


class EventCatalogLogger:
    """Handles all logging for catalog reads and event writes."""

    def __init__(self, logger_instance: loguru.Logger = logger) -> None:
        self._logger = logger_instance

    def selectors_resolved(
        self, selected: set[int], expanded: set[int], unknown_names: list[str]
    ) -> None:
        self._logger.bind(
            selected=sorted(selected), expanded=len(expanded)
        ).debug(
            "Category selectors {} expanded to {} ids", sorted(selected), len(expanded)
        )
        if unknown_names:
            self._logger.bind(names=unknown_names).debug(
                "Unknown category names in filter: {}", unknown_names
            )

    def events_listed(self, page: int, limit: int, returned: int, total: int) -> None:
        self._logger.bind(page=page, limit=limit, total=total).debug(
            "Listed {} of {} events (page {}, limit {})", returned, total, page, limit
        )

    def event_created(self, event_id: int | None, name: str) -> None:
        self._logger.bind(event_id=event_id).info(
            "Created event {} (id={})", name, event_id
        )

    def event_booked(self, user_id: int, event_id: int) -> None:
        self._logger.bind(user_id=user_id, event_id=event_id).info(
            "User {} booked event {}", user_id, event_id
        )
