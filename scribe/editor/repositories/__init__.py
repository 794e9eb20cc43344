# Repositories package
from scribe.editor.repositories.article import ArticleRepository
from scribe.editor.repositories.preferences import PreferencesRepository
from scribe.editor.repositories.trash import TrashRepository

__all__ = [
    "ArticleRepository",
    "PreferencesRepository",
    "TrashRepository",
]
