"""
Request Context Middleware.

Request tracking, timing, and frontend identification for every call
that reaches the summary backend.
"""

import uuid
from datetime import datetime

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scribe.backend.core.logging import get_logger
from scribe.backend.core.utils import utc_now

logger = get_logger(__name__)

# Must stay a subset of VALID_SOURCES in logging.py
KNOWN_FRONTENDS = {"web", "cli", "tui", "editor", "api", "internal"}


def _elapsed_ms(start_time: datetime) -> int:
    return int((utc_now() - start_time).total_seconds() * 1000)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided)
    - X-Frontend-ID: Caller identifier (web, cli, tui, editor, api, internal)
    - X-Response-Time: Response duration in milliseconds

    Every log line emitted while the request is handled carries request_id,
    frontend, method and path through structlog contextvars. Handlers can
    read request.state.request_id, request.state.frontend and
    request.state.start_time.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        frontend = request.headers.get("X-Frontend-ID", "unknown").lower()
        if frontend not in KNOWN_FRONTENDS:
            frontend = "unknown"

        start_time = utc_now()

        request.state.request_id = request_id
        request.state.frontend = frontend
        request.state.start_time = start_time

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            frontend=frontend,
            method=request.method,
            path=request.url.path,
        )

        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": _elapsed_ms(start_time),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        else:
            duration_ms = _elapsed_ms(start_time)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
