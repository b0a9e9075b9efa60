from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import (
    Session,
    sessionmaker,
)

from eventcatalog.adapters.db.models import Base


def _sqlite_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite_connection(dbapi_connection: Any, _record: Any) -> None:
    # SQLite's built-in lower() only folds ASCII letters.
    dbapi_connection.create_function("lower", 1, _sqlite_lower, deterministic=True)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DB:
    """Database service layer owning the engine and the unit of work."""

    def __init__(self, url: str) -> None:
        """Initialize database connection.

        Args:
            url: Database URL (e.g., "sqlite:///eventcatalog.db")
        """
        self._url = url
        self._engine = create_engine(url, echo=False)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine, "connect", _configure_sqlite_connection)
        self._session_factory = sessionmaker(bind=self._engine, class_=Session)
        self._active: ContextVar[Session | None] = ContextVar(
            f"eventcatalog_session_{id(self)}", default=None
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Context manager for database sessions.

        The outermost call opens a session and commits it on success or
        rolls it back on error. Nested calls join that session, so several
        store operations wrapped in one ``session()`` block commit together.
        """
        active = self._active.get()
        if active is not None:
            yield active
            return

        session = self._session_factory()
        token = self._active.set(session)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self._active.reset(token)
            session.close()

    def create_schema(self) -> None:
        """Create every table that does not exist yet."""
        Base.metadata.create_all(self._engine)

    def drop_schema(self) -> None:
        Base.metadata.drop_all(self._engine)
