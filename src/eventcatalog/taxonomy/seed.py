"""Seed the category taxonomy from a YAML document.

Expected shape::

    categories:
      - name: Music
      - name: Concerts
        parent: Music
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict, cast

from loguru import logger
from yaml import safe_load

from eventcatalog.adapters.db.category_store import CategoryStore
from eventcatalog.domain.models import Category
from eventcatalog.domain.value_objects import CategoryName


class RawCategoryRecord(TypedDict, total=False):
    name: str
    parent: str | None


class RawTaxonomyDoc(TypedDict, total=False):
    categories: list[RawCategoryRecord]


@dataclass(frozen=True)
class CategoryConfig:
    name: str
    parent: str | None


def _load_yaml(path: Path) -> RawTaxonomyDoc:
    if not path.exists():
        raise FileNotFoundError(f"taxonomy yaml not found at {path}")

    with path.open("r", encoding="utf-8") as handle:
        loaded: object = safe_load(handle)

    if loaded is None:
        return {"categories": []}

    if not isinstance(loaded, dict):
        raise ValueError("taxonomy yaml must be a mapping with a 'categories' key")

    return cast(RawTaxonomyDoc, loaded)


def _extract_category_records(raw: RawTaxonomyDoc) -> list[RawCategoryRecord]:
    """Extract raw category records from the loaded YAML, enforcing list shape."""
    records_raw = raw.get("categories")
    if records_raw is None:
        return []
    if not isinstance(records_raw, list):
        raise ValueError("'categories' must be a list")
    return list(records_raw)


def _validate_and_normalize_record(
    record: RawCategoryRecord,
    *,
    position: int,
) -> CategoryConfig:
    if not isinstance(record, dict):
        raise ValueError(f"category at position {position} must be a mapping")
    name = record.get("name")
    parent = record.get("parent")

    if not isinstance(name, str) or not name.strip():
        raise ValueError(
            f"category at position {position} is missing a non-empty 'name'"
        )
    if parent is not None and (not isinstance(parent, str) or not parent.strip()):
        raise ValueError(f"category '{name}' has invalid 'parent'")

    return CategoryConfig(
        name=CategoryName(name).value,
        parent=parent.strip() if parent is not None else None,
    )


def _validate_no_duplicate_names(configs: Iterable[CategoryConfig]) -> None:
    seen: set[str] = set()
    for cfg in configs:
        folded = cfg.name.casefold()
        if folded in seen:
            raise ValueError(f"duplicate category name '{cfg.name}' encountered")
        seen.add(folded)


def _order_parents_first(
    configs: list[CategoryConfig], known_names: set[str]
) -> list[CategoryConfig]:
    """Order configs so every parent is placed before its children.

    ``known_names`` holds (casefolded) names already in the store, which
    count as resolved parents.
    """
    resolved = set(known_names)
    pending = list(configs)
    ordered: list[CategoryConfig] = []
    while pending:
        ready = [
            c for c in pending if c.parent is None or c.parent.casefold() in resolved
        ]
        if not ready:
            blocked = pending[0]
            declared = {c.name.casefold() for c in configs}
            if blocked.parent is not None and blocked.parent.casefold() in declared:
                raise ValueError(
                    f"category '{blocked.name}' is part of a parent cycle"
                )
            raise ValueError(
                f"category '{blocked.name}' references unknown "
                f"parent '{blocked.parent}'"
            )
        for config in ready:
            ordered.append(config)
            resolved.add(config.name.casefold())
        pending = [c for c in pending if c not in ready]
    return ordered


def load_categories(
    yaml_path: Path | str, known_names: Iterable[str] = ()
) -> list[CategoryConfig]:
    """Load and validate taxonomy categories from a YAML file."""
    path = Path(yaml_path)
    raw = _load_yaml(path)
    records = _extract_category_records(raw)
    configs = [
        _validate_and_normalize_record(record, position=i)
        for i, record in enumerate(records, start=1)
    ]
    _validate_no_duplicate_names(configs)
    return _order_parents_first(configs, {n.casefold() for n in known_names})


def seed_taxonomy_from_yaml(
    store: CategoryStore, yaml_path: Path | str
) -> list[Category]:
    """Insert the categories of ``yaml_path`` that the store does not have yet.

    Existing categories (matched case-insensitively by name) are left as
    they are. Returns the categories that were created.
    """
    existing = {c.name.casefold(): c for c in store.list_all()}
    configs = load_categories(yaml_path, known_names=existing.keys())

    created: list[Category] = []
    for config in configs:
        folded = config.name.casefold()
        if folded in existing:
            logger.bind(name=config.name).debug(
                "Category {} already exists, skipping", config.name
            )
            continue
        parent_id = None
        if config.parent is not None:
            parent_id = existing[config.parent.casefold()].id
        category = store.save(
            Category(id=None, name=config.name, parent_id=parent_id)
        )
        existing[folded] = category
        created.append(category)

    logger.bind(created=len(created), path=str(yaml_path)).info(
        "Seeded {} categories from {}", len(created), yaml_path
    )
    return created
