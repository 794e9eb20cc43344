# Pydantic schemas package
from scribe.editor.schemas.article import (
    DEFAULT_TITLE,
    SEED_ARTICLES,
    Article,
    ArticlePatch,
    ExportDocument,
    Preferences,
    TrashItem,
)

__all__ = [
    "DEFAULT_TITLE",
    "SEED_ARTICLES",
    "Article",
    "ArticlePatch",
    "ExportDocument",
    "Preferences",
    "TrashItem",
]
