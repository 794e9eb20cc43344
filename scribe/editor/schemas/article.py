"""
Article Schemas.

Pydantic models for the editor's persisted documents: active articles,
trashed articles, user preferences and the exported JSON document.
"""

import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

DEFAULT_TITLE = "New Article"

SIDEBAR_MIN_WIDTH = 200
SIDEBAR_MAX_WIDTH = 600


class Article(BaseModel):
    """An active (non-trashed) article."""

    id: str = Field(description="Opaque unique identifier, immutable")
    title: str = Field(default=DEFAULT_TITLE, description="Article title")
    date: datetime.date = Field(description="Creation date, immutable")
    content: str = Field(
        default="",
        validation_alias=AliasChoices("content", "markdown"),
        description="Rich-text markup",
    )
    summary: str = Field(default="", description="Summary from the last export")

    model_config = ConfigDict(populate_by_name=True)


class TrashItem(Article):
    """A soft-deleted article awaiting restore or purge."""

    deleted_at: datetime.datetime = Field(
        validation_alias=AliasChoices("deleted_at", "deletedAt"),
        description="When the article was moved to trash (UTC)",
    )

    @field_validator("deleted_at")
    @classmethod
    def _naive_utc(cls, value: datetime.datetime) -> datetime.datetime:
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return value

    @classmethod
    def from_article(cls, article: Article, deleted_at: datetime.datetime) -> "TrashItem":
        return cls(**article.model_dump(), deleted_at=deleted_at)

    def to_article(self) -> Article:
        """Drop the trash timestamp."""
        return Article(**self.model_dump(exclude={"deleted_at"}))


class ArticlePatch(BaseModel):
    """Partial update; fields left unset are not touched."""

    title: str | None = None
    content: str | None = None
    summary: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Preferences(BaseModel):
    """UI preferences, persisted independently of article data."""

    dark_mode: bool = False
    sidebar_width: int = Field(default=288, ge=SIDEBAR_MIN_WIDTH, le=SIDEBAR_MAX_WIDTH)
    authenticated: bool = False


class ExportDocument(BaseModel):
    """The JSON document produced by an export."""

    id: str
    title: str
    date: datetime.date
    summary: str
    last_modified: datetime.datetime = Field(serialization_alias="lastModified")
    content: str

    @field_serializer("last_modified")
    def _iso_utc(self, value: datetime.datetime) -> str:
        return value.isoformat(timespec="milliseconds") + "Z"


SEED_ARTICLES: list[dict[str, Any]] = [
    {
        "id": "1",
        "title": "Getting Started with React",
        "date": "2024-03-20",
        "content": "<p>This is where the content would go...</p>",
        "summary": "An introduction to React and its core concepts",
    },
    {
        "id": "2",
        "title": "Understanding TypeScript",
        "date": "2024-03-19",
        "content": "<p>This is where the content would go...</p>",
        "summary": "Deep dive into TypeScript fundamentals",
    },
    {
        "id": "3",
        "title": "Mastering Tailwind CSS",
        "date": "2024-03-18",
        "content": "<p>This is where the content would go...</p>",
        "summary": "Learn how to build beautiful interfaces with Tailwind",
    },
]
