"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.domain.exceptions import ContentStoreError
from .....core.ports.content_store_port import ContentStorePort
from ..deps import get_content_store
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        HealthResponse with current status and version.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        content_store="not_checked",
    )


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(store: ContentStorePort = Depends(get_content_store)) -> HealthResponse:
    """Readiness probe.

    Checks that the content store is readable and reports its counts.

    Returns:
        HealthResponse with detailed status.
    """
    try:
        stats = store.get_stats()
    except ContentStoreError as e:
        logger.warning(f"Readiness check failed: {e}")
        return HealthResponse(status="not_ready", version=__version__, content_store=f"error: {e}")

    return HealthResponse(
        status="ready",
        version=__version__,
        content_store="connected",
        documents=stats["active_documents"],
        excerpts=stats["excerpts"],
    )
