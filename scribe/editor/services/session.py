"""
Document Session.

Tracks which article is open in the editor and mediates every edit.

States:
    NO_SELECTION  nothing open, address "/"
    EDITING       one article open, address "/article/<id>"

Content typed into the editor is buffered and only written to the article
repository by an explicit save(). Switching articles, creating a new one or
navigating away drops unsaved content and emits "discarded_changes".
Title edits are written immediately.
"""

import time
from collections.abc import Callable
from datetime import date
from enum import Enum

from scribe.backend.services.base import BaseService
from scribe.editor.editor import RichTextEditor, character_count, usage_percentage
from scribe.editor.events import ChangeNotifier
from scribe.editor.repositories.article import ArticleRepository
from scribe.editor.routing import ROOT_ADDRESS, article_address, parse_address
from scribe.editor.schemas.article import Article, ArticlePatch, TrashItem
from scribe.editor.services.trash import TrashManager

SAVE_ACK_SECONDS = 2.0


class SessionState(str, Enum):
    NO_SELECTION = "no_selection"
    EDITING = "editing"


class DocumentSession(BaseService):
    def __init__(
        self,
        articles: ArticleRepository,
        trash: TrashManager,
        editor: RichTextEditor,
        notifier: ChangeNotifier,
        save_ack_seconds: float = SAVE_ACK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.articles = articles
        self.trash = trash
        self.editor = editor
        self.notifier = notifier
        self.save_ack_seconds = save_ack_seconds
        self._clock = clock

        self._state = SessionState.NO_SELECTION
        self._current_id: str | None = None
        self._title = ""
        self._committed = ""
        self._pending: str | None = None
        self._saved_at: float | None = None
        self._address = ROOT_ADDRESS

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_id(self) -> str | None:
        return self._current_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def address(self) -> str:
        return self._address

    @property
    def is_dirty(self) -> bool:
        """True when the editor holds content that has not been saved."""
        return self._pending is not None

    @property
    def save_acknowledged(self) -> bool:
        """True for save_ack_seconds after a successful save."""
        if self._saved_at is None:
            return False
        return self._clock() - self._saved_at < self.save_ack_seconds

    def current_article(self) -> Article | None:
        if self._current_id is None:
            return None
        return self.articles.get(self._current_id)

    def character_count(self) -> int:
        return character_count(self.editor.get_html())

    def usage_percentage(self) -> float:
        return usage_percentage(self.editor.get_html())

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select(self, article: Article | str) -> bool:
        """
        Open an article in the editor.

        Returns False, leaving the session unchanged, when the article is
        not active. Selecting the article that is already open is a no-op.
        """
        article_id = article if isinstance(article, str) else article.id
        stored = self.articles.get(article_id)
        if stored is None:
            self._log_debug("Select ignored, article not active", article_id=article_id)
            return False
        if stored.id == self._current_id:
            # Reselecting the open article keeps its unsaved draft
            return True

        self._discard_pending()
        self._state = SessionState.EDITING
        self._current_id = stored.id
        self._title = stored.title
        self._committed = stored.content
        self._saved_at = None
        self.editor.set_content(stored.content)

        self.notifier.emit("selection_changed", article_id=stored.id)
        self.notifier.emit("content_loaded", article_id=stored.id, content=stored.content)
        self._set_address(article_address(stored.id))
        return True

    def create_new(self, today: date | None = None) -> Article:
        """Create an empty article and open it."""
        article = self.articles.create(today)
        self.select(article)
        return article

    def edit_title(self, text: str) -> None:
        if self._current_id is None:
            return
        self._title = text
        self.articles.update(self._current_id, ArticlePatch(title=text))

    def on_editor_change(self, markup: str) -> None:
        """Buffer content reported by the editor until the next save."""
        if self._current_id is None:
            return
        # Echo of content we loaded ourselves is not an edit
        self._pending = None if markup == self._committed else markup

    def save(self) -> bool:
        """
        Write buffered content to the open article.

        Returns False when nothing is open or nothing is pending.
        """
        if self._current_id is None or self._pending is None:
            return False

        updated = self.articles.update(self._current_id, ArticlePatch(content=self._pending))
        if updated is None:
            self._log_warning("Save dropped, article no longer active", article_id=self._current_id)
            return False

        self._committed = updated.content
        self._pending = None
        self._saved_at = self._clock()
        self._log_operation("Article saved", article_id=self._current_id)
        self.notifier.emit("saved", article_id=self._current_id)
        return True

    def delete(self, article_id: str | None = None) -> TrashItem | None:
        """
        Move an article (the open one by default) to the trash.

        Deleting the open article closes it. Returns None when there is
        nothing to delete.
        """
        target = article_id or self._current_id
        if target is None:
            return None

        article = self.articles.get(target)
        if article is None:
            self._log_debug("Delete ignored, article not active", article_id=target)
            return None

        # Trash first: a crash between the writes leaves a duplicate, never a loss
        item = self.trash.move_to_trash(article)
        self.articles.remove(target)

        if target == self._current_id:
            self.clear()
        return item

    def clear(self) -> None:
        """Close the open article."""
        self._discard_pending()
        was_editing = self._current_id is not None
        self._state = SessionState.NO_SELECTION
        self._current_id = None
        self._title = ""
        self._committed = ""
        self._saved_at = None
        self.editor.set_content("")

        if was_editing:
            self.notifier.emit("selection_changed", article_id=None)
        self._set_address(ROOT_ADDRESS)

    def open_address(self, path: str) -> str:
        """
        Navigate to a deep-link address.

        Unknown ids and malformed addresses fall back to "/". Returns the
        address the session ended up at.
        """
        article_id = parse_address(path)
        if article_id is not None and self.select(article_id):
            return self._address

        if article_id is not None or path not in ("", ROOT_ADDRESS):
            self._log_debug("Address did not resolve, redirecting to root", address=path)
        self.clear()
        return ROOT_ADDRESS

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _discard_pending(self) -> None:
        if self._pending is None:
            return
        self._log_debug("Unsaved changes discarded", article_id=self._current_id)
        self.notifier.emit("discarded_changes", article_id=self._current_id)
        self._pending = None

    def _set_address(self, address: str) -> None:
        if address != self._address:
            self._address = address
            self.notifier.emit("address_changed", address=address)
