"""Query routing exceptions for the MoFPED Help Assistant."""

from .base import AssistantError


class RoutingError(AssistantError):
    """Error while dispatching a query to its handler."""

    error_code = "MOF_RTE_001"


class QueryTimeoutError(RoutingError):
    """Handler did not finish within the request ceiling."""

    error_code = "MOF_RTE_002"


class RateLimitExceededError(AssistantError):
    """Client sent too many requests in the current window."""

    error_code = "MOF_RTE_003"
    http_status = 429
