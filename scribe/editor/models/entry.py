"""
Store Entry Model.

One row per persisted key (articles, trash, preferences). The value is the
whole JSON document for that key; writes replace it.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from scribe.editor.models.base import Base, TimestampMixin


class StoreEntry(TimestampMixin, Base):
    """Persisted value for a single store key."""

    __tablename__ = "store_entries"

    key: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
    )
    value: Mapped[Any] = mapped_column(
        JSON,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StoreEntry(key={self.key!r})>"
