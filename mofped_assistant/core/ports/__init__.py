"""Ports (abstract interfaces) implemented by outbound adapters."""

from .content_store_port import ContentStorePort
from .page_fetcher_port import PageFetcherPort
from .rate_limiter_port import RateLimiterPort

__all__ = ["ContentStorePort", "PageFetcherPort", "RateLimiterPort"]
