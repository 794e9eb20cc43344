"""
Summary Schemas.

Pydantic schemas for the generate-summary request/response.
"""

from pydantic import BaseModel, Field


class SummaryRequest(BaseModel):
    """Body of POST /generate-summary."""

    content: str | None = Field(
        default=None,
        description="Plain text of the post to summarize",
        examples=["This is where the content would go..."],
    )


class SummaryResponse(BaseModel):
    """Successful summary response."""

    summary: str = Field(description="Short generated summary")
