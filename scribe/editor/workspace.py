"""
Workspace.

Composition root of the editor core: one store, one change notifier, and
every repository and service wired to them. Front ends (the Textual editor,
the command line) create a Workspace and talk only to it.

Usage:
    from scribe.editor.workspace import Workspace

    workspace = Workspace.open()
    article = workspace.session.create_new()
    workspace.session.on_editor_change("<p>hi</p>")
    workspace.session.save()
    artifact = await workspace.export_current()
    artifact.write(workspace.export_directory)
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

from scribe.backend.core.config import get_app_config, resolve_project_path
from scribe.backend.core.config_schema import EditorSchema
from scribe.backend.core.exceptions import NotFoundError
from scribe.backend.core.logging import get_logger, log_with_source
from scribe.backend.core.utils import utc_now
from scribe.editor.client import SummaryClient, Summarizer
from scribe.editor.editor import MarkupBuffer, RichTextEditor
from scribe.editor.events import ChangeNotifier
from scribe.editor.repositories import ArticleRepository, PreferencesRepository, TrashRepository
from scribe.editor.schemas.article import Article, Preferences, TrashItem
from scribe.editor.services.export import ExportArtifact, SummaryWorkflow
from scribe.editor.services.session import DocumentSession
from scribe.editor.services.trash import TrashManager
from scribe.editor.store import PersistentStore, SqlStore
from scribe.editor.tasks import PurgeScheduler

logger = get_logger(__name__)


class Workspace:
    def __init__(
        self,
        store: PersistentStore,
        settings: EditorSchema,
        editor: RichTextEditor | None = None,
        summarizer: Summarizer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.settings = settings
        self.notifier = ChangeNotifier()
        self.editor = editor or MarkupBuffer()
        self.summarizer = summarizer or SummaryClient(
            base_url=settings.summary_service.base_url,
            path=settings.summary_service.path,
        )

        self.articles = ArticleRepository(store, self.notifier)
        self.trash_repo = TrashRepository(store, self.notifier)
        self.preferences = PreferencesRepository(store, self.notifier)

        self.trash = TrashManager(
            self.trash_repo,
            retention=timedelta(days=settings.trash.retention_days),
            clock=clock,
        )
        self.session = DocumentSession(
            self.articles,
            self.trash,
            self.editor,
            self.notifier,
            save_ack_seconds=settings.session.save_ack_seconds,
        )
        self.workflow = SummaryWorkflow(
            self.summarizer,
            articles=self.articles,
            timeout_seconds=settings.export.summary_timeout_seconds,
            fallback_summary=settings.export.fallback_summary,
            clock=clock,
        )

        self.reconcile()
        self.trash.purge_expired()

    @classmethod
    def open(
        cls,
        editor: RichTextEditor | None = None,
        summarizer: Summarizer | None = None,
        store: PersistentStore | None = None,
    ) -> "Workspace":
        """Create a workspace from config/settings/editor.yaml."""
        settings = get_app_config().editor
        if store is None:
            store = SqlStore.from_path(resolve_project_path(settings.store.path))
        log_with_source(logger, "editor", "info", "Workspace opened")
        return cls(store, settings, editor=editor, summarizer=summarizer)

    @property
    def export_directory(self) -> Path:
        return resolve_project_path(self.settings.export.directory)

    def reconcile(self) -> list[TrashItem]:
        """
        Drop trash entries whose id is also active.

        Such duplicates only appear when the process stopped between the two
        writes of a delete or restore; the active copy wins.
        """
        active = set(self.articles.ids())
        duplicates = self.trash_repo.retain(
            {item_id for item_id in self.trash_repo.ids() if item_id not in active}
        )
        if duplicates:
            log_with_source(
                logger,
                "editor",
                "warning",
                "Dropped trash entries that are still active",
                article_ids=[item.id for item in duplicates],
            )
        return duplicates

    # -------------------------------------------------------------------------
    # Trash
    # -------------------------------------------------------------------------

    def delete(self, article_id: str | None = None) -> TrashItem | None:
        return self.session.delete(article_id)

    def restore(self, article_id: str) -> Article:
        """
        Move an article from the trash back to the front of the active list.

        Raises:
            NotFoundError: If the id is not in the trash
        """
        item = self.trash_repo.get_by_id_or_none(article_id)
        if item is None:
            raise NotFoundError(f"Article {article_id} is not in the trash")
        # Active first: a crash between the writes leaves a duplicate, never a loss
        self.articles.prepend(item.to_article())
        return self.trash.restore(article_id)

    def permanently_delete(self, article_id: str) -> bool:
        return self.trash.permanently_delete(article_id)

    def purge_expired(self, now: datetime | None = None) -> list[TrashItem]:
        return self.trash.purge_expired(now)

    def create_purge_scheduler(self) -> PurgeScheduler:
        return PurgeScheduler(self.trash, interval_seconds=self.settings.trash.purge_interval_seconds)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    async def export_current(self) -> ExportArtifact:
        """
        Export the open article using the editor's current content.

        Raises:
            NotFoundError: If no article is open
        """
        article = self.session.current_article()
        if article is None:
            raise NotFoundError("No article is open")
        article = article.model_copy(update={"title": self.session.title})
        return await self.workflow.export(article, self.editor.get_html())

    async def export_article(self, article_id: str) -> ExportArtifact:
        """
        Export an active article.

        The open article is exported with the editor's content; any other
        article with its stored content.

        Raises:
            NotFoundError: If the id is not active
        """
        if article_id == self.session.current_id:
            return await self.export_current()
        article = self.articles.get_by_id(article_id)
        return await self.workflow.export(article, article.content)

    # -------------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------------

    def get_preferences(self) -> Preferences:
        return self.preferences.get()

    def toggle_dark_mode(self) -> Preferences:
        return self.preferences.toggle_dark_mode()

    def set_sidebar_width(self, width: int) -> Preferences:
        return self.preferences.set_sidebar_width(width)

    async def close(self) -> None:
        if isinstance(self.summarizer, SummaryClient):
            await self.summarizer.close()
        if isinstance(self.store, SqlStore):
            self.store.close()
