"""
Integration Test Fixtures.

Fixtures for integration tests - the real FastAPI app over ASGITransport,
with the summary model replaced through dependency overrides.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from scribe.backend.core.dependencies import get_summary_service
from scribe.backend.main import create_app


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def summary_service() -> MagicMock:
    """
    Stand-in for SummaryService.

    Usage:
        async def test_failure(client, summary_service):
            summary_service.generate_summary.side_effect = ExternalServiceError("...")
    """
    service = MagicMock()
    service.generate_summary = AsyncMock(return_value="A concise summary.")
    return service


@pytest.fixture
async def client(summary_service: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with the summary service overridden.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    app = create_app()
    app.dependency_overrides[get_summary_service] = lambda: summary_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def app_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with the real summary service.

    Tests patch scribe.backend.agents.summary_agent.run_summary_agent so
    the model is never called.
    """
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
