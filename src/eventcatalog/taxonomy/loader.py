"""Taxonomy loader - handles store integration for the taxonomy.

Keeps the in-memory Taxonomy free of persistence concerns by providing
standalone functions that coordinate between it and the category store.
"""

from __future__ import annotations

from loguru import logger

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.domain.errors import IntegrityViolationError
from eventcatalog.domain.models import Category
from eventcatalog.taxonomy.core import Taxonomy


def load_taxonomy(store: CategoryStore) -> Taxonomy:
    """Load the full taxonomy from the store.

    Args:
        store: Category store instance

    Returns:
        Taxonomy instance populated from the store
    """
    return Taxonomy.from_categories(store.list_all())


def ensure_sentinel_category(store: CategoryStore, sentinel_name: str) -> Category:
    """Create the sentinel category if missing and return it.

    Run at start-up so a missing sentinel is fixed before any deletion
    needs it.

    Raises:
        IntegrityViolationError: If the sentinel exists but has a parent.
    """
    sentinel = store.find_by_name(sentinel_name)
    if sentinel is None:
        sentinel = store.save(Category(id=None, name=sentinel_name, parent_id=None))
        logger.bind(category_id=sentinel.id).info(
            'Created sentinel category "{}" (id={})', sentinel.name, sentinel.id
        )
        return sentinel

    if sentinel.parent_id is not None:
        raise IntegrityViolationError(
            f'Sentinel category "{sentinel_name}" must be top-level '
            f"but has parent {sentinel.parent_id}",
            category_id=sentinel.id,
        )
    return sentinel
