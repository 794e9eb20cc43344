"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends

from scribe.backend.services.summary import SummaryService


def get_summary_service() -> SummaryService:
    """Provide the summary service. Overridden in tests via dependency_overrides."""
    return SummaryService()


SummaryServiceDep = Annotated[SummaryService, Depends(get_summary_service)]
