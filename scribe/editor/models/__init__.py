# SQLAlchemy models package
from scribe.editor.models.base import Base
from scribe.editor.models.entry import StoreEntry

__all__ = [
    "Base",
    "StoreEntry",
]
