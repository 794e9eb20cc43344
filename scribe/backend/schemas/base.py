"""
Base Schemas.

Shared API response schemas. Error bodies are flat so that any client can
read the failure reason from a single ``error`` string.
"""

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: dict[str, Any] | None = None
    request_id: str | None = None
