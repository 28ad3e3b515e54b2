"""Validation exceptions for the MoFPED Help Assistant."""

from .base import AssistantError


class ValidationError(AssistantError):
    """Input validation failed."""

    error_code = "MOF_VAL_001"
    http_status = 400


class EmptyQueryError(ValidationError):
    """Query cannot be missing, empty or whitespace only."""

    error_code = "MOF_VAL_002"


class QueryTooLongError(ValidationError):
    """Query exceeds maximum allowed length."""

    error_code = "MOF_VAL_003"
