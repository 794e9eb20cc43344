"""
Summary Service Client.

Async HTTP client the editor uses to ask the summary backend for a summary.
All requests include X-Frontend-ID: editor header for log routing.
"""

from typing import Any, Protocol

import httpx

from scribe.backend.core.config import get_app_config
from scribe.backend.core.exceptions import SummarizationFailed
from scribe.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class Summarizer(Protocol):
    async def summarize(self, text: str) -> str:
        """Return a short summary of text. Raises SummarizationFailed."""
        ...


def _get_client_config() -> tuple[str, str, float]:
    """Load base URL, endpoint path and timeout from config/settings."""
    app_config = get_app_config()
    service = app_config.editor.summary_service
    timeout = float(app_config.application.timeouts.external_api)
    return service.base_url, service.path, timeout


class SummaryClient:
    """
    HTTP client for the summary endpoint.

    Usage:
        client = SummaryClient()
        summary = await client.summarize("Plain text of the post")
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        path: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Backend base URL. If None, reads from config/settings/editor.yaml.
            path: Endpoint path. If None, reads from config/settings/editor.yaml.
            timeout: Request timeout in seconds. If None, reads from application.yaml.
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        if base_url is None or path is None or timeout is None:
            config_base_url, config_path, config_timeout = _get_client_config()
            base_url = base_url or config_base_url
            path = path or config_path
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "editor"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def summarize(self, text: str) -> str:
        """
        Request a summary of text.

        Raises:
            SummarizationFailed: On transport errors, non-2xx responses,
                or a response without a summary
        """
        client = await self._get_client()

        log_with_source(logger, "editor", "debug", "Summary request", path=self.path, chars=len(text))

        try:
            response = await client.post(self.path, json={"content": text})
        except httpx.HTTPError as e:
            log_with_source(logger, "editor", "error", "Summary request failed", error=str(e))
            raise SummarizationFailed(f"Summary service unreachable: {e}") from e

        body = _json_or_empty(response)

        if response.is_error:
            message = body.get("error") or f"Summary service returned {response.status_code}"
            log_with_source(
                logger,
                "editor",
                "warning",
                "Summary service error",
                status_code=response.status_code,
                error=message,
            )
            raise SummarizationFailed(message)

        summary = body.get("summary")
        if not isinstance(summary, str):
            raise SummarizationFailed("Summary service returned no summary")
        return summary


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
