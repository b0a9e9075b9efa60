from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Literal

DescendantStrategy = Literal["memory", "recursive"]
LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"]

DEFAULT_DATABASE_URL = "sqlite:///eventcatalog.db"
DEFAULT_SENTINEL_CATEGORY = "General"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Catalog configuration loaded at process startup."""

    database_url: str = DEFAULT_DATABASE_URL
    sentinel_category: str = DEFAULT_SENTINEL_CATEGORY
    descendant_strategy: DescendantStrategy = "memory"
    atomic_delete: bool = True
    log_level: LogLevel = "INFO"


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_catalog_config_from_env() -> CatalogConfig:
    """Load catalog config from env and validate startup requirements."""
    database_url = (
        os.environ.get("DATABASE_URL", "").strip() or DEFAULT_DATABASE_URL
    )

    sentinel_category = os.environ.get(
        "EVENTCATALOG_SENTINEL_CATEGORY", DEFAULT_SENTINEL_CATEGORY
    ).strip()
    if not sentinel_category:
        raise ValueError("EVENTCATALOG_SENTINEL_CATEGORY cannot be empty")

    strategy = (
        os.environ.get("EVENTCATALOG_DESCENDANT_STRATEGY", "memory").strip().lower()
    )
    if strategy not in {"memory", "recursive"}:
        raise ValueError(
            "EVENTCATALOG_DESCENDANT_STRATEGY must be one of: memory, recursive"
        )

    log_level = os.environ.get("EVENTCATALOG_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"}:
        raise ValueError(
            "EVENTCATALOG_LOG_LEVEL must be one of: "
            "TRACE, DEBUG, INFO, SUCCESS, WARNING, ERROR"
        )

    return CatalogConfig(
        database_url=database_url,
        sentinel_category=sentinel_category,
        descendant_strategy=strategy,  # type: ignore[arg-type]
        atomic_delete=_parse_bool("EVENTCATALOG_ATOMIC_DELETE", True),
        log_level=log_level,  # type: ignore[arg-type]
    )
