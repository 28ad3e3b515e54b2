"""Custom exception hierarchy for the MoFPED Help Assistant.

All exceptions are re-exported here. Import from this package directly:

    from mofped_assistant.core.domain.exceptions import AssistantError, EmptyQueryError
"""

# Base classes
from .base import AssistantError, RaiseSite

# Configuration exceptions
from .configuration import ConfigurationError, InvalidConfigurationError

# Content store exceptions
from .content_store import (
    ContentStoreConnectionError,
    ContentStoreError,
    ContentStoreQueryError,
)

# Routing exceptions
from .routing import QueryTimeoutError, RateLimitExceededError, RoutingError

# Scraping exceptions
from .scraping import PageFetchError, ScrapingError

# Validation exceptions
from .validation import EmptyQueryError, QueryTooLongError, ValidationError

__all__ = [
    # Base
    "RaiseSite",
    "AssistantError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    # Content store
    "ContentStoreError",
    "ContentStoreConnectionError",
    "ContentStoreQueryError",
    # Scraping
    "ScrapingError",
    "PageFetchError",
    # Routing
    "RoutingError",
    "QueryTimeoutError",
    "RateLimitExceededError",
    # Validation
    "ValidationError",
    "EmptyQueryError",
    "QueryTooLongError",
]
