"""
Unit Tests for Request Context Middleware.

Tests the RequestContextMiddleware functionality including:
- Request ID generation and propagation
- Frontend extraction from X-Frontend-ID header
- Response timing headers
"""

import pytest
from unittest.mock import MagicMock, patch

from starlette.requests import Request
from starlette.responses import Response

from scribe.backend.core.middleware import RequestContextMiddleware


class TestRequestContextMiddleware:
    """Tests for RequestContextMiddleware."""

    @pytest.fixture
    def middleware(self):
        return RequestContextMiddleware(MagicMock())

    @pytest.fixture
    def mock_request(self):
        request = MagicMock(spec=Request)
        request.headers = {}
        request.method = "POST"
        request.url = MagicMock()
        request.url.path = "/api/v1/generate-summary"
        request.client = MagicMock()
        request.client.host = "127.0.0.1"
        request.state = MagicMock()
        return request

    @pytest.mark.asyncio
    async def test_known_frontend_is_kept(self, middleware, mock_request):
        mock_request.headers = {"X-Frontend-ID": "editor"}

        async def call_next(request):
            assert request.state.frontend == "editor"
            return Response(content="OK")

        with patch("scribe.backend.core.middleware.structlog.contextvars"):
            await middleware.dispatch(mock_request, call_next)

    @pytest.mark.asyncio
    async def test_unknown_frontend_is_normalized(self, middleware, mock_request):
        mock_request.headers = {"X-Frontend-ID": "toaster"}

        async def call_next(request):
            assert request.state.frontend == "unknown"
            return Response(content="OK")

        with patch("scribe.backend.core.middleware.structlog.contextvars"):
            await middleware.dispatch(mock_request, call_next)

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, middleware, mock_request):
        mock_request.headers = {"X-Request-ID": "req-42"}

        async def call_next(request):
            return Response(content="OK")

        with patch("scribe.backend.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert response.headers["X-Request-ID"] == "req-42"
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, middleware, mock_request):
        async def call_next(request):
            return Response(content="OK")

        with patch("scribe.backend.core.middleware.structlog.contextvars"):
            response = await middleware.dispatch(mock_request, call_next)

        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_context_is_cleared_after_error(self, middleware, mock_request):
        async def call_next(request):
            raise RuntimeError("handler failed")

        with patch("scribe.backend.core.middleware.structlog.contextvars") as mock_contextvars:
            with pytest.raises(RuntimeError):
                await middleware.dispatch(mock_request, call_next)

        assert mock_contextvars.clear_contextvars.call_count == 2
