"""
Unit Test Fixtures.

Fixtures for unit tests - external collaborators are mocked.
Unit tests should be fast and isolated, never touching the network or data/.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scribe.backend.core.config_schema import EditorSchema
from scribe.editor.editor import MarkupBuffer
from scribe.editor.events import ChangeNotifier
from scribe.editor.repositories import ArticleRepository, TrashRepository
from scribe.editor.services.session import DocumentSession
from scribe.editor.services.trash import TrashManager
from scribe.editor.store import SqlStore
from scribe.editor.workspace import Workspace


# =============================================================================
# Collaborator Mocks
# =============================================================================


@pytest.fixture
def mock_summarizer() -> MagicMock:
    """
    Mock summarization collaborator.

    Usage:
        def test_export(mock_summarizer):
            mock_summarizer.summarize.side_effect = SummarizationFailed("down")
    """
    summarizer = MagicMock()
    summarizer.summarize = AsyncMock(return_value="A short summary")
    return summarizer


@pytest.fixture
def editor() -> MarkupBuffer:
    return MarkupBuffer()


# =============================================================================
# Editor Core Fixtures
# =============================================================================


@pytest.fixture
def articles(store: SqlStore, notifier: ChangeNotifier) -> ArticleRepository:
    return ArticleRepository(store, notifier)


@pytest.fixture
def trash_manager(store: SqlStore, notifier: ChangeNotifier, clock) -> TrashManager:
    return TrashManager(TrashRepository(store, notifier), clock=clock)


@pytest.fixture
def session(
    articles: ArticleRepository,
    trash_manager: TrashManager,
    editor: MarkupBuffer,
    notifier: ChangeNotifier,
    ticker,
) -> DocumentSession:
    return DocumentSession(articles, trash_manager, editor, notifier, clock=ticker)


@pytest.fixture
def workspace(
    store: SqlStore,
    editor_settings: EditorSchema,
    editor: MarkupBuffer,
    mock_summarizer: MagicMock,
    clock,
) -> Workspace:
    return Workspace(
        store,
        editor_settings,
        editor=editor,
        summarizer=mock_summarizer,
        clock=clock,
    )
