# Pydantic schemas package
from scribe.backend.schemas.base import ErrorResponse
from scribe.backend.schemas.summary import SummaryRequest, SummaryResponse

__all__ = [
    "ErrorResponse",
    "SummaryRequest",
    "SummaryResponse",
]
