"""
Unit Tests for the Summary Workflow.

Tests export assembly with working, failing and slow summarizers.
"""

import asyncio
import json
from datetime import date

import pytest

from scribe.backend.core.exceptions import SummarizationFailed
from scribe.editor.schemas.article import Article
from scribe.editor.services.export import SummaryWorkflow, export_filename


@pytest.fixture
def article() -> Article:
    return Article(id="abc", title="My First Post", date=date(2024, 3, 20), content="<p>stored</p>")


@pytest.fixture
def workflow(mock_summarizer, articles, clock) -> SummaryWorkflow:
    return SummaryWorkflow(mock_summarizer, articles=articles, clock=clock)


class TestExport:
    """Tests for a successful export."""

    @pytest.mark.asyncio
    async def test_summarizer_receives_plain_text(self, workflow, article, mock_summarizer):
        await workflow.export(article, "<h1>Title</h1><p>Body <b>bold</b></p>")

        mock_summarizer.summarize.assert_awaited_once_with("TitleBody bold")

    @pytest.mark.asyncio
    async def test_document_fields(self, workflow, article):
        """The exported JSON carries the metadata, summary and unchanged markup."""
        artifact = await workflow.export(article, "<p>Hello</p>")

        data = json.loads(artifact.data.decode("utf-8"))
        assert list(data) == ["id", "title", "date", "summary", "lastModified", "content"]
        assert data["id"] == "abc"
        assert data["title"] == "My First Post"
        assert data["date"] == "2024-03-20"
        assert data["summary"] == "A short summary"
        assert data["lastModified"] == "2024-03-20T12:00:00.000Z"
        assert data["content"] == "<p>Hello</p>"

    @pytest.mark.asyncio
    async def test_json_is_indented(self, workflow, article):
        artifact = await workflow.export(article, "<p>Hello</p>")

        assert artifact.data.decode("utf-8").startswith('{\n  "id": "abc"')

    @pytest.mark.asyncio
    async def test_stored_summary_is_updated(self, mock_summarizer, articles, clock):
        workflow = SummaryWorkflow(mock_summarizer, articles=articles, clock=clock)

        await workflow.export(articles.get("1"), "<p>React</p>")

        assert articles.get("1").summary == "A short summary"

    @pytest.mark.asyncio
    async def test_write_creates_file(self, workflow, article, tmp_path):
        artifact = await workflow.export(article, "<p>Hello</p>")

        path = artifact.write(tmp_path / "exports")

        assert path.name == "my-first-post.json"
        assert path.read_bytes() == artifact.data


class TestExportFallback:
    """Tests for exports when the summary cannot be generated."""

    @pytest.mark.asyncio
    async def test_failing_summarizer_uses_fallback(self, workflow, article, mock_summarizer):
        """Export still succeeds with the fallback summary and unchanged content."""
        mock_summarizer.summarize.side_effect = SummarizationFailed("service down")

        artifact = await workflow.export(article, "<p>Hello</p>")

        assert artifact.document.summary == "Error generating summary"
        assert artifact.document.content == "<p>Hello</p>"

    @pytest.mark.asyncio
    async def test_unexpected_summarizer_error_uses_fallback(self, workflow, article, mock_summarizer):
        """Any summarizer exception degrades to the fallback summary."""
        mock_summarizer.summarize.side_effect = RuntimeError("boom")

        artifact = await workflow.export(article, "<p>Hello</p>")

        assert artifact.document.summary == "Error generating summary"
        assert json.loads(artifact.data)["summary"] == "Error generating summary"

    @pytest.mark.asyncio
    async def test_fallback_is_not_stored(self, mock_summarizer, articles, clock):
        mock_summarizer.summarize.side_effect = SummarizationFailed("service down")
        workflow = SummaryWorkflow(mock_summarizer, articles=articles, clock=clock)

        await workflow.export(articles.get("1"), "<p>React</p>")

        assert articles.get("1").summary == "An introduction to React and its core concepts"

    @pytest.mark.asyncio
    async def test_slow_summarizer_times_out(self, mock_summarizer, article, clock):
        async def never_finishes(text):
            await asyncio.sleep(10)

        mock_summarizer.summarize.side_effect = never_finishes
        workflow = SummaryWorkflow(mock_summarizer, timeout_seconds=0.01, clock=clock)

        artifact = await workflow.export(article, "<p>Hello</p>")

        assert artifact.document.summary == "Error generating summary"

    @pytest.mark.asyncio
    async def test_empty_content_still_exports(self, workflow, article, mock_summarizer):
        artifact = await workflow.export(article, "")

        mock_summarizer.summarize.assert_awaited_once_with("")
        assert artifact.document.content == ""


class TestExportFilename:
    """Tests for the export file name policy."""

    def test_slugified_title(self, article):
        assert export_filename(article) == "my-first-post.json"

    def test_whitespace_runs_collapse(self):
        article = Article(id="x", title="  A   Tale\tof  Two ", date=date(2024, 1, 1))

        assert export_filename(article) == "a-tale-of-two.json"

    def test_path_separators_removed(self):
        article = Article(id="x", title="a/b\\c", date=date(2024, 1, 1))

        assert export_filename(article) == "abc.json"

    def test_empty_title_uses_id(self):
        article = Article(id="abc", title="   ", date=date(2024, 1, 1))

        assert export_filename(article) == "abc.json"
