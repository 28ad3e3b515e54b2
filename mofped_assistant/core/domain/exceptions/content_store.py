"""Content store exceptions for the MoFPED Help Assistant."""

from .base import AssistantError


class ContentStoreError(AssistantError):
    """Base error for content store operations."""

    error_code = "MOF_STO_001"
    http_status = 503


class ContentStoreConnectionError(ContentStoreError):
    """Failed to open or initialize the content store.

    Common causes:
    - Database path is not writable
    - Database file is corrupt
    """

    error_code = "MOF_STO_002"


class ContentStoreQueryError(ContentStoreError):
    """A read or write against the content store failed."""

    error_code = "MOF_STO_003"
