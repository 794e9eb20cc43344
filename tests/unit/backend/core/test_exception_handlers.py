"""
Unit Tests for Exception Handlers.

Tests the exception handler functions in isolation.
"""

import json

import pytest
from unittest.mock import MagicMock
from fastapi import Request
from fastapi.exceptions import RequestValidationError

from scribe.backend.core.exception_handlers import (
    EXCEPTION_STATUS_MAP,
    _get_request_id,
    _status_for,
    application_error_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from scribe.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    PersistenceUnavailable,
    SummarizationFailed,
    ValidationError,
)


class TestExceptionStatusMapping:
    """Tests for exception to HTTP status code mapping."""

    def test_not_found_maps_to_404(self):
        assert EXCEPTION_STATUS_MAP[NotFoundError] == 404

    def test_validation_maps_to_400(self):
        assert EXCEPTION_STATUS_MAP[ValidationError] == 400

    def test_conflict_maps_to_409(self):
        assert EXCEPTION_STATUS_MAP[ConflictError] == 409

    def test_external_service_maps_to_502(self):
        assert EXCEPTION_STATUS_MAP[ExternalServiceError] == 502

    def test_database_maps_to_503(self):
        assert EXCEPTION_STATUS_MAP[DatabaseError] == 503

    def test_subclasses_use_base_status(self):
        """Unmapped subclasses resolve through their base class."""
        assert _status_for(SummarizationFailed()) == 502
        assert _status_for(PersistenceUnavailable()) == 503

    def test_unmapped_error_is_500(self):
        assert _status_for(ApplicationError("boom")) == 500


class TestGetRequestId:
    """Tests for request ID extraction."""

    def test_extracts_from_request_state(self):
        request = MagicMock(spec=Request)
        request.state.request_id = "state-123"
        request.headers = {}

        assert _get_request_id(request) == "state-123"

    def test_extracts_from_header(self):
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {"x-request-id": "header-456"}

        assert _get_request_id(request) == "header-456"

    def test_returns_none_when_not_present(self):
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {}

        assert _get_request_id(request) is None


@pytest.fixture
def mock_request():
    """Create a mock request."""
    request = MagicMock(spec=Request)
    request.url.path = "/api/v1/generate-summary"
    request.method = "POST"
    request.headers = {"x-request-id": "test-123"}
    del request.state.request_id
    return request


class TestApplicationErrorHandler:
    """Tests for application_error_handler."""

    @pytest.mark.asyncio
    async def test_validation_error_body(self, mock_request):
        """The error body is flat: error is the message string."""
        response = await application_error_handler(mock_request, ValidationError("Content is required"))

        assert response.status_code == 400
        assert json.loads(response.body) == {
            "error": "Content is required",
            "code": "VAL_VALIDATION_ERROR",
            "details": None,
            "request_id": "test-123",
        }

    @pytest.mark.asyncio
    async def test_validation_includes_details(self, mock_request):
        exc = ValidationError("Invalid preference value", details={"field": "sidebar_width"})

        response = await application_error_handler(mock_request, exc)

        assert json.loads(response.body)["details"] == {"field": "sidebar_width"}

    @pytest.mark.asyncio
    async def test_external_service_returns_502(self, mock_request):
        response = await application_error_handler(
            mock_request, ExternalServiceError("Failed to generate summary")
        )

        assert response.status_code == 502
        body = json.loads(response.body)
        assert body["error"] == "Failed to generate summary"
        assert body["code"] == "SYS_EXTERNAL_SERVICE_ERROR"


class TestValidationErrorHandler:
    """Tests for request validation errors."""

    @pytest.mark.asyncio
    async def test_returns_422_with_field_details(self, mock_request):
        exc = RequestValidationError(
            [{"loc": ("body", "content"), "msg": "Input should be a valid string", "type": "string_type"}]
        )

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body["code"] == "VAL_REQUEST_INVALID"
        assert body["details"]["validation_errors"][0]["field"] == "body.content"


class TestUnhandledExceptionHandler:
    """Tests for the catch-all handler."""

    @pytest.mark.asyncio
    async def test_hides_internal_details(self, mock_request):
        response = await unhandled_exception_handler(mock_request, RuntimeError("secret path /etc"))

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error"] == "An unexpected error occurred"
        assert "secret" not in response.body.decode()
