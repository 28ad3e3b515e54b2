"""FastAPI dependency injection for the MoFPED Help Assistant."""

import logging

from fastapi import Depends, Request

from ....composition.container import get_content_store, get_query_router, get_rate_limiter
from ....config.settings import settings
from ....core.domain.exceptions import RateLimitExceededError
from ....core.ports.rate_limiter_port import RateLimiterPort

logger = logging.getLogger(__name__)

__all__ = ["enforce_rate_limit", "get_content_store", "get_query_router", "get_rate_limiter"]


def client_key(request: Request) -> str:
    """Rate-limit key for ``request``.

    The peer address, unless the peer is one of ``settings.trusted_proxies``;
    then the first X-Forwarded-For entry.
    """
    peer = request.client.host if request.client else "unknown"
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and peer in settings.trusted_proxies:
        return forwarded.split(",")[0].strip() or peer
    return peer


def enforce_rate_limit(
    request: Request,
    limiter: RateLimiterPort = Depends(get_rate_limiter),
) -> None:
    """Reject the request with 429 when the client is over its limit."""
    key = client_key(request)
    if not limiter.allow(key):
        logger.warning("Rate limit exceeded for %s", key)
        raise RateLimitExceededError(
            "Too many requests. Please wait a moment and try again.",
            context={"retry_after": limiter.retry_after_seconds},
        )
