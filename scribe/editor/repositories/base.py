"""
Base Repository.

Base class for the editor's ordered collections. A collection is loaded from
the persistent store once, kept in memory, and written back whole after every
mutation. The in-memory list stays authoritative when a write fails.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from scribe.backend.core.exceptions import NotFoundError, PersistenceUnavailable
from scribe.backend.core.logging import get_logger, log_with_source
from scribe.editor.events import ChangeNotifier
from scribe.editor.store import PersistentStore

logger = get_logger(__name__)

ItemType = TypeVar("ItemType", bound=BaseModel)


class CollectionRepository(Generic[ItemType]):
    """
    Ordered, most-recent-first collection persisted under one store key.

    Subclasses set the item model, the store key and the change event:

        class TrashRepository(CollectionRepository[TrashItem]):
            model = TrashItem
            key = "trash"
            event = "trash_changed"
    """

    model: type[ItemType]
    key: str
    event: str

    def __init__(self, store: PersistentStore, notifier: ChangeNotifier) -> None:
        self.store = store
        self.notifier = notifier
        self._items: list[ItemType] = self._load()

    def _default(self) -> list[dict[str, Any]]:
        return []

    def _load(self) -> list[ItemType]:
        raw = self.store.load(self.key, self._default())
        try:
            return TypeAdapter(list[self.model]).validate_python(raw)
        except PydanticValidationError as e:
            logger.warning(
                "Stored collection is unreadable, using default",
                extra={"key": self.key, "errors": e.error_count()},
            )
            return TypeAdapter(list[self.model]).validate_python(self._default())

    def _commit(self) -> None:
        """Persist the whole collection and notify listeners."""
        try:
            self.store.save(self.key, [item.model_dump(mode="json") for item in self._items])
        except PersistenceUnavailable as e:
            log_with_source(logger, "editor", "warning", "Changes kept in memory only", key=self.key)
            self.notifier.emit("persistence_warning", key=self.key, message=e.message)
        self.notifier.emit(self.event, ids=self.ids())

    def _index_of(self, id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == id:
                return index
        return None

    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def list(self) -> list[ItemType]:
        """Snapshot of the collection, front to back."""
        return [item.model_copy() for item in self._items]

    def get_by_id(self, id: str) -> ItemType:
        """
        Get a single item by ID.

        Raises:
            NotFoundError: If the item is not in this collection
        """
        index = self._index_of(id)
        if index is None:
            raise NotFoundError(f"{self.model.__name__} {id} not found")
        return self._items[index].model_copy()

    def get_by_id_or_none(self, id: str) -> ItemType | None:
        """Get a single item by ID, returning None if not found."""
        index = self._index_of(id)
        return None if index is None else self._items[index].model_copy()

    def exists(self, id: str) -> bool:
        return self._index_of(id) is not None

    def __len__(self) -> int:
        return len(self._items)
