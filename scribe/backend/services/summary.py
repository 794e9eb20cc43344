"""
Summary Service.

Business logic for the summary endpoint. Validates the submitted text,
forwards it to the summary agent in a single attempt, and converts any
model failure into an ExternalServiceError.
"""

from scribe.backend.agents import summary_agent
from scribe.backend.core.exceptions import ExternalServiceError, ValidationError
from scribe.backend.services.base import BaseService

EMPTY_SUMMARY = "No summary generated"


class SummaryService(BaseService):
    """Service that turns blog post text into a short summary."""

    async def generate_summary(self, content: str | None) -> str:
        """
        Generate a summary for the given text.

        Args:
            content: Plain text of the post

        Returns:
            Summary text, or EMPTY_SUMMARY when the model returned nothing

        Raises:
            ValidationError: If content is missing or blank
            ExternalServiceError: If the model call fails
        """
        if content is None or not content.strip():
            raise ValidationError("Content is required")

        self._log_operation("Generating summary", content_length=len(content))

        try:
            summary = await summary_agent.run_summary_agent(content)
        except Exception as e:
            self._logger.error(
                "Summary model call failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise ExternalServiceError("Failed to generate summary") from e

        summary = (summary or "").strip()
        if not summary:
            self._log_warning("Model returned an empty summary")
            return EMPTY_SUMMARY

        self._log_debug("Summary generated", summary_length=len(summary))
        return summary
