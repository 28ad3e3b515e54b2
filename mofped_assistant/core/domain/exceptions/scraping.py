"""Web page fetching exceptions for the MoFPED Help Assistant."""

from .base import AssistantError


class ScrapingError(AssistantError):
    """Error while fetching or parsing an official web page."""

    error_code = "MOF_WEB_001"


class PageFetchError(ScrapingError):
    """HTTP fetch failed (network error, timeout or non-2xx status)."""

    error_code = "MOF_WEB_002"
