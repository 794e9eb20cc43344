"""
Persistent Store.

Synchronous key/value persistence for the editor's collections. Each key
holds one JSON document; writes to the same key are last-write-wins and
writes to different keys never touch each other.

Usage:
    from scribe.editor.store import SqlStore

    store = SqlStore.from_path(Path("data/editor.db"))
    articles = store.load("articles", default=[])
    store.save("articles", articles)
"""

import copy
from pathlib import Path
from typing import Any, Protocol

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scribe.backend.core.exceptions import PersistenceUnavailable
from scribe.backend.core.logging import get_logger
from scribe.editor.models import Base, StoreEntry

logger = get_logger(__name__)


class PersistentStore(Protocol):
    """Contract every store implementation satisfies."""

    def load(self, key: str, default: Any) -> Any:
        """Return the stored value for key, or default when absent or unreadable."""
        ...

    def save(self, key: str, value: Any) -> None:
        """Persist value under key. Raises PersistenceUnavailable on failure."""
        ...


class SqlStore:
    """
    PersistentStore backed by a SQLAlchemy engine (SQLite by default).

    The table is created lazily on first access, so a brand-new or missing
    database file behaves like an empty store.
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self._engine = create_engine(url, **engine_kwargs)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        self._schema_ready = False

    @classmethod
    def from_path(cls, path: Path) -> "SqlStore":
        """Open (or create) a SQLite store file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(f"sqlite:///{path}")

    @classmethod
    def in_memory(cls) -> "SqlStore":
        """Store that lives only as long as the process. Used by tests and dry runs."""
        return cls(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            Base.metadata.create_all(self._engine)
            self._schema_ready = True

    def load(self, key: str, default: Any) -> Any:
        """
        Read the value stored under key.

        Returns a copy of default when the key has never been written or the
        store cannot be read.
        """
        try:
            self._ensure_schema()
            with self._session_factory() as session:
                entry = session.get(StoreEntry, key)
        except SQLAlchemyError as e:
            logger.warning(
                "Store read failed, falling back to default",
                extra={"key": key, "error": str(e)},
            )
            return copy.deepcopy(default)

        if entry is None:
            return copy.deepcopy(default)
        return entry.value

    def save(self, key: str, value: Any) -> None:
        """
        Replace the value stored under key.

        Raises:
            PersistenceUnavailable: If the write could not be committed
        """
        try:
            self._ensure_schema()
            with self._session_factory() as session, session.begin():
                session.merge(StoreEntry(key=key, value=value))
        except SQLAlchemyError as e:
            logger.error(
                "Store write failed",
                extra={"key": key, "error": str(e)},
            )
            raise PersistenceUnavailable(f"Could not save '{key}'") from e

        logger.debug("Store entry saved", extra={"key": key})

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
