"""
Summary API Endpoints.

The single business endpoint of the backend: forwards post text to the
summary model and returns the result.
"""

from fastapi import APIRouter

from scribe.backend.core.dependencies import SummaryServiceDep
from scribe.backend.schemas.base import ErrorResponse
from scribe.backend.schemas.summary import SummaryRequest, SummaryResponse

router = APIRouter()


@router.post(
    "/generate-summary",
    response_model=SummaryResponse,
    summary="Generate a summary",
    description="Summarize the submitted blog post text in one short sentence.",
    responses={
        400: {"model": ErrorResponse, "description": "Content missing or blank"},
        502: {"model": ErrorResponse, "description": "Summary model failed"},
    },
)
async def generate_summary(
    data: SummaryRequest,
    service: SummaryServiceDep,
) -> SummaryResponse:
    """Generate a summary for the submitted content."""
    summary = await service.generate_summary(data.content)
    return SummaryResponse(summary=summary)
