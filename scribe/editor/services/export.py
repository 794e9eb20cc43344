"""
Summary Workflow.

Builds the JSON export of an article: the rendered markup is reduced to
plain text, summarized by the summary service, and packaged together with
the article's metadata. A failing or slow summary service never blocks the
export; the summary falls back to a fixed text instead.
"""

import asyncio
import json
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from scribe.backend.core.exceptions import SummarizationFailed
from scribe.backend.core.utils import slugify, strip_tags, utc_now
from scribe.backend.services.base import BaseService
from scribe.editor.client import Summarizer
from scribe.editor.repositories.article import ArticleRepository
from scribe.editor.schemas.article import Article, ArticlePatch, ExportDocument

FALLBACK_SUMMARY = "Error generating summary"
SUMMARY_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class ExportArtifact:
    """A serialized export ready to be written to disk."""

    filename: str
    data: bytes
    document: ExportDocument

    def write(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.data)
        return path


def export_filename(article: Article) -> str:
    """File name for an export: slugified title, or the id when the title has no usable characters."""
    slug = slugify(article.title)
    return f"{slug or article.id}.json"


class SummaryWorkflow(BaseService):
    def __init__(
        self,
        summarizer: Summarizer,
        articles: ArticleRepository | None = None,
        timeout_seconds: float = SUMMARY_TIMEOUT_SECONDS,
        fallback_summary: str = FALLBACK_SUMMARY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        super().__init__()
        self.summarizer = summarizer
        self.articles = articles
        self.timeout_seconds = timeout_seconds
        self.fallback_summary = fallback_summary
        self._clock = clock

    async def export(self, article: Article, rendered_content: str) -> ExportArtifact:
        """
        Summarize and package an article.

        Args:
            article: Article metadata (id, title, date)
            rendered_content: Current markup from the editor, exported unchanged

        Returns:
            ExportArtifact with the JSON document and its file name
        """
        self._log_operation("Exporting article", article_id=article.id)

        summary = await self._summarize(strip_tags(rendered_content))

        if summary is not None and self.articles is not None:
            self.articles.update(article.id, ArticlePatch(summary=summary))

        document = ExportDocument(
            id=article.id,
            title=article.title,
            date=article.date,
            summary=summary if summary is not None else self.fallback_summary,
            last_modified=self._clock(),
            content=rendered_content,
        )
        data = json.dumps(
            document.model_dump(mode="json", by_alias=True),
            indent=2,
            ensure_ascii=False,
        ).encode("utf-8")

        return ExportArtifact(filename=export_filename(article), data=data, document=document)

    async def _summarize(self, plain_text: str) -> str | None:
        """Return the summary, or None when the summary service could not provide one."""
        try:
            async with asyncio.timeout(self.timeout_seconds):
                return await self.summarizer.summarize(plain_text)
        except SummarizationFailed as e:
            self._log_warning("Summary unavailable, using fallback", error=e.message)
        except TimeoutError:
            self._log_warning("Summary timed out, using fallback", timeout_seconds=self.timeout_seconds)
        except Exception as e:
            self._logger.error(
                "Summarizer failed unexpectedly, using fallback",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
        return None
