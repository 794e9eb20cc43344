"""
Trash Lifecycle Manager.

Soft delete with a retention window: articles moved to the trash can be
restored or deleted permanently until they are older than the window, after
which a purge pass removes them.
"""

import math
from collections.abc import Callable
from datetime import datetime, timedelta

from scribe.backend.core.exceptions import NotFoundError
from scribe.backend.core.utils import utc_now
from scribe.backend.services.base import BaseService
from scribe.editor.repositories.trash import TrashRepository
from scribe.editor.schemas.article import Article, TrashItem

RETENTION_WINDOW = timedelta(days=3)


class TrashManager(BaseService):
    """Moves articles in and out of the trash and enforces retention."""

    def __init__(
        self,
        repo: TrashRepository,
        retention: timedelta = RETENTION_WINDOW,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__()
        self.repo = repo
        self.retention = retention
        self._clock = clock

    def items(self) -> list[TrashItem]:
        return self.repo.list()

    def move_to_trash(self, article: Article, now: datetime | None = None) -> TrashItem:
        """Stamp the article with the deletion time and put it at the front of the trash."""
        item = TrashItem.from_article(article, deleted_at=now or self._clock())
        self.repo.prepend(item)
        self._log_operation("Article moved to trash", article_id=article.id)
        return item

    def restore(self, article_id: str) -> Article:
        """
        Take an article out of the trash.

        Raises:
            NotFoundError: If the id is not in the trash
        """
        item = self.repo.pop(article_id)
        if item is None:
            raise NotFoundError(f"Article {article_id} is not in the trash")
        self._log_operation("Article restored from trash", article_id=article_id)
        return item.to_article()

    def permanently_delete(self, article_id: str) -> bool:
        """Remove an item for good. Returns False when it was already gone."""
        removed = self.repo.pop(article_id) is not None
        if removed:
            self._log_operation("Article permanently deleted", article_id=article_id)
        return removed

    def expires_at(self, item: TrashItem) -> datetime:
        return item.deleted_at + self.retention

    def days_remaining(self, item: TrashItem, now: datetime | None = None) -> int:
        """Days left before the item is purged, rounded up (0 when due)."""
        remaining = self.expires_at(item) - (now or self._clock())
        return max(0, math.ceil(remaining / timedelta(days=1)))

    def purge_expired(self, now: datetime | None = None) -> list[TrashItem]:
        """
        Delete every item older than the retention window.

        Items exactly at the window boundary are kept. Returns the purged
        items; a second pass at the same time purges nothing.
        """
        now = now or self._clock()
        keep = {item.id for item in self.repo.list() if now - item.deleted_at <= self.retention}
        purged = self.repo.retain(keep)
        if purged:
            self._log_operation(
                "Expired trash purged",
                purged_count=len(purged),
                article_ids=[item.id for item in purged],
            )
        return purged
