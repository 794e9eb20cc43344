"""
Article Repository.

The ordered collection of active articles.
"""

import uuid
from datetime import date

from scribe.backend.core.exceptions import ConflictError
from scribe.backend.core.logging import get_logger, log_with_source
from scribe.editor.repositories.base import CollectionRepository
from scribe.editor.schemas.article import DEFAULT_TITLE, SEED_ARTICLES, Article, ArticlePatch

logger = get_logger(__name__)


class ArticleRepository(CollectionRepository[Article]):
    """Active articles, most recent first. Seeded with sample articles on first use."""

    model = Article
    key = "articles"
    event = "articles_changed"

    def _default(self):
        return [dict(article) for article in SEED_ARTICLES]

    def create(self, today: date | None = None) -> Article:
        """Create an empty article at the front of the collection."""
        article = Article(
            id=str(uuid.uuid4()),
            title=DEFAULT_TITLE,
            date=today or date.today(),
        )
        self._items.insert(0, article)
        self._commit()
        log_with_source(logger, "editor", "info", "Article created", article_id=article.id)
        return article.model_copy()

    def update(self, id: str, patch: ArticlePatch) -> Article | None:
        """
        Apply a partial update to an active article.

        Returns None when the id is not active; the trash is never touched.
        """
        index = self._index_of(id)
        if index is None:
            log_with_source(logger, "editor", "debug", "Update ignored, article not active", article_id=id)
            return None

        changes = patch.changes()
        if not changes:
            return self._items[index].model_copy()

        updated = self._items[index].model_copy(update=changes)
        self._items[index] = updated
        self._commit()
        return updated.model_copy()

    def remove(self, id: str) -> Article:
        """
        Remove an article and return it.

        Raises:
            NotFoundError: If the id is not active
        """
        article = self.get_by_id(id)
        del self._items[self._index_of(id)]
        self._commit()
        return article

    def prepend(self, article: Article) -> Article:
        """
        Insert an existing article (e.g. restored from trash) at the front.

        Raises:
            ConflictError: If an article with the same id is already active
        """
        if self.exists(article.id):
            raise ConflictError(f"Article {article.id} is already active")
        self._items.insert(0, article.model_copy())
        self._commit()
        return article

    def get(self, id: str) -> Article | None:
        return self.get_by_id_or_none(id)
