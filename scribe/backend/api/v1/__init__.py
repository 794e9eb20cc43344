"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from scribe.backend.api.v1.endpoints import summary

router = APIRouter()

router.include_router(summary.router, tags=["summary"])
