"""
Trash Repository.

The ordered collection of soft-deleted articles.
"""

from scribe.editor.repositories.base import CollectionRepository
from scribe.editor.schemas.article import TrashItem


class TrashRepository(CollectionRepository[TrashItem]):
    model = TrashItem
    key = "trash"
    event = "trash_changed"

    def prepend(self, item: TrashItem) -> None:
        self._items.insert(0, item.model_copy())
        self._commit()

    def pop(self, id: str) -> TrashItem | None:
        """Remove an item and return it, or None if it is not in the trash."""
        index = self._index_of(id)
        if index is None:
            return None
        item = self._items.pop(index)
        self._commit()
        return item

    def retain(self, keep_ids: set[str]) -> list[TrashItem]:
        """
        Keep only the items whose id is in keep_ids, preserving order.

        Returns the dropped items. Nothing is written when nothing is dropped.
        """
        dropped = [item for item in self._items if item.id not in keep_ids]
        if dropped:
            self._items = [item for item in self._items if item.id in keep_ids]
            self._commit()
        return dropped
