"""
Health Check Endpoints.

Provides liveness and readiness checks.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (summary model configured)
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from scribe.backend.core.logging import get_logger
from scribe.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)


def check_summary_model() -> dict[str, Any]:
    """
    Check that the summary model can be called.

    Returns:
        Dict with status, model name, and optional error message
    """
    try:
        from scribe.backend.agents.summary_agent import is_summary_model_configured
        from scribe.backend.core.config import get_app_config

        model = get_app_config().summary_agent.model
        if not is_summary_model_configured():
            return {"status": "not_configured", "model": model}
        return {"status": "healthy", "model": model}

    except Exception as e:
        logger.warning("Summary model check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if summaries can be generated, 503 otherwise.
    """
    checks = {"summary_model": check_summary_model()}

    not_ready = [
        name for name, check in checks.items()
        if check.get("status") != "healthy"
    ]

    if not_ready:
        logger.warning(
            "Readiness check failed",
            extra={"not_ready": not_ready, "checks": checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
